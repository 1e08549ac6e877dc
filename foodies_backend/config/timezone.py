"""Current time in UTC, stored as naive datetimes."""
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Naive UTC timestamp for DB columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
