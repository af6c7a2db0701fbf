import sys
from datetime import date
from typing import Optional

from app.extensions import db
from app.models import Competition
from app.helpers.time import utcnow, today_utc

COMPLETED = "completed"
CANCELLED = "cancelled"

# Statuses the status job never touches
FINAL_STATUSES = (COMPLETED, CANCELLED)

# Statuses shown on the public competitions listing
LISTED_STATUSES = ("active", "open", "published", "live")

# Anything the public may look at, including finished competitions
PUBLIC_STATUSES = LISTED_STATUSES + (COMPLETED,)


def _expired_filter(today: date):
    return (
        Competition.end_date <= today,
        Competition.status.not_in(FINAL_STATUSES),
    )


def get_listed_competitions(status: Optional[str] = None, category: Optional[str] = None):
    """
    Public listing, newest first.
    If status is given, it replaces the default "listed" set; statuses
    outside PUBLIC_STATUSES (drafts, cancelled) never match.
    """
    q = Competition.query
    if status:
        if status not in PUBLIC_STATUSES:
            return []
        q = q.filter(Competition.status == status)
    else:
        q = q.filter(Competition.status.in_(LISTED_STATUSES))

    if category:
        q = q.filter(Competition.category == category)

    return q.order_by(Competition.created_at.desc(), Competition.id.desc()).all()


def get_expired_competitions(today: Optional[date] = None) -> list[Competition]:
    """
    Competitions whose end_date has passed (or is today) but which are not
    yet completed/cancelled. Newest end date first.
    """
    today = today or today_utc()
    return (
        Competition.query
        .filter(*_expired_filter(today))
        .order_by(Competition.end_date.desc())
        .all()
    )


def complete_expired_competitions(today: Optional[date] = None) -> list[dict]:
    """
    Mark every expired competition as completed.

    Equivalent to:
      UPDATE competitions SET status='completed', updated_at=now
      WHERE end_date <= today AND status NOT IN ('completed','cancelled')

    Safe to re-run: a second call on the same day finds nothing to update.
    Returns the updated rows as dicts (id, title, end_date, status).
    """
    today = today or today_utc()
    now = utcnow()

    rows = Competition.query.filter(*_expired_filter(today)).all()
    for comp in rows:
        comp.status = COMPLETED
        comp.updated_at = now

    db.session.commit()

    print(f"[COMPETITION STATUS] Updated {len(rows)} competitions to completed status", file=sys.stderr)

    return [
        {
            "id": comp.id,
            "title": comp.title,
            "end_date": comp.end_date.isoformat() if comp.end_date else None,
            "status": comp.status,
        }
        for comp in rows
    ]


def manually_complete_competition(competition_id: int) -> Optional[Competition]:
    """
    Force a single competition to completed (admin override).
    Returns None if it doesn't exist.
    """
    comp = db.session.get(Competition, competition_id)
    if not comp:
        return None

    comp.status = COMPLETED
    comp.updated_at = utcnow()
    db.session.commit()

    print(f"[COMPETITION STATUS] Manually completed competition {comp.id} ({comp.title})", file=sys.stderr)
    return comp


def comp_is_finished(comp, today: Optional[date] = None) -> bool:
    """True if comp is completed/cancelled or its end_date has passed."""
    if not comp:
        return True
    if comp.status in FINAL_STATUSES:
        return True
    if comp.end_date is None:
        return False
    return (today or today_utc()) >= comp.end_date
