from datetime import datetime, date, timezone

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def today_utc() -> date:
    """Current calendar date in UTC (the status job's notion of 'today')."""
    return utcnow().date()
