"""
Scheduled job: mark competitions as completed once their end date passes.

Run from cron (or any scheduler), e.g. daily just after midnight UTC:
    5 0 * * *  cd /srv/app && python update_competition_status.py

Safe to re-run; competitions already completed or cancelled are left alone.
"""
import sys
from dotenv import load_dotenv

load_dotenv()

from app import create_app
from app.helpers.competition import complete_expired_competitions


def main() -> int:
    app = create_app()
    with app.app_context():
        try:
            updated = complete_expired_competitions()
        except Exception as e:
            print(f"[COMPETITION STATUS] Update failed: {e}", file=sys.stderr)
            return 1

    for row in updated:
        print(f"  #{row['id']} {row['title']} (ended {row['end_date']})")
    print(f"Successfully updated {len(updated)} competitions to completed status")
    return 0


if __name__ == "__main__":
    sys.exit(main())
