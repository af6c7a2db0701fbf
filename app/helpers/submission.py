import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from app.extensions import db
from app.models import Competition, ClientSubmission
from app.helpers.time import utcnow

TEXT_FIELDS = (
    "title",
    "description",
    "category",
    "prize_currency",
    "organizer_name",
    "organizer_email",
    "company_name",
)
DATE_FIELDS = ("start_date", "end_date", "submission_deadline")

# Fields a client may set on their own submission
CLIENT_FIELDS = TEXT_FIELDS + DATE_FIELDS + ("prize_amount",)

# Fields an admin may set directly on a competition
COMPETITION_FIELDS = tuple(f for f in CLIENT_FIELDS if f != "company_name") + ("status", "featured")

# What a submission needs before it can go to review
REVIEW_REQUIRED_FIELDS = (
    "title",
    "description",
    "category",
    "start_date",
    "end_date",
    "submission_deadline",
    "organizer_name",
    "organizer_email",
)

COMPETITION_REQUIRED_FIELDS = ("title", "category", "start_date", "end_date")

COMPETITION_STATUSES = ("draft", "published", "active", "open", "live", "completed", "cancelled")


def parse_competition_fields(data: dict, allowed) -> dict:
    """
    Clean an incoming competition/submission payload.

    Only keys in `allowed` are accepted. Raises ValueError with a
    user-facing message for anything else or for values that don't parse.
    """
    unknown = sorted(k for k in data if k not in allowed)
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(unknown)}")

    cleaned = {}
    for key, value in data.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            cleaned[key] = None
            continue

        if key in DATE_FIELDS:
            try:
                cleaned[key] = date.fromisoformat(str(value).strip())
            except ValueError:
                raise ValueError(f"{key} must be a date (YYYY-MM-DD)")

        elif key == "prize_amount":
            if isinstance(value, bool):
                raise ValueError("prize_amount must be a number")
            try:
                amount = Decimal(str(value))
            except InvalidOperation:
                raise ValueError("prize_amount must be a number")
            if not amount.is_finite() or amount < 0:
                raise ValueError("prize_amount must be a positive number")
            cleaned[key] = amount

        elif key == "featured":
            cleaned[key] = bool(value)

        elif key == "status":
            status = str(value).strip().lower()
            if status not in COMPETITION_STATUSES:
                raise ValueError(f"status must be one of: {', '.join(COMPETITION_STATUSES)}")
            cleaned[key] = status

        else:
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string")
            cleaned[key] = value.strip()

    return cleaned


def missing_fields(fields: dict, required) -> list[str]:
    return [f for f in required if fields.get(f) in (None, "")]


def check_dates(fields: dict) -> Optional[str]:
    """Return an error message if the date fields don't line up, else None."""
    start = fields.get("start_date")
    end = fields.get("end_date")
    deadline = fields.get("submission_deadline")

    if start and end and start >= end:
        return "End date must be after start date"
    if deadline and end and deadline > end:
        return "Submission deadline must be before or on the end date"
    return None


def current_fields(row, names) -> dict:
    """Snapshot of a row's values, for validating a partial update."""
    return {n: getattr(row, n) for n in names}


def publish_submission(submission: ClientSubmission) -> Competition:
    """
    Turn an approved client submission into a live ('active') competition.
    Caller commits.
    """
    comp = Competition(
        title=submission.title,
        description=submission.description,
        category=submission.category,
        status="active",
        start_date=submission.start_date,
        end_date=submission.end_date,
        submission_deadline=submission.submission_deadline,
        prize_amount=submission.prize_amount,
        prize_currency=submission.prize_currency or "USD",
        organizer_name=submission.organizer_name,
        organizer_email=submission.organizer_email,
    )
    db.session.add(comp)
    db.session.flush()

    submission.competition_id = comp.id
    submission.published_at = utcnow()

    print(f"[SUBMISSIONS] Published submission {submission.id} as competition {comp.id}", file=sys.stderr)
    return comp
