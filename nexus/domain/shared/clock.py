"""Time parsing for document-store timestamps.

Documents store dates as ISO strings: either a bare date ("2025-06-20") or
a full timestamp ("2025-05-18T10:00:00" / "2025-05-18T10:00:00.000Z").
Bare dates mean midnight UTC. Naive timestamps are read as UTC.
"""

import math
from datetime import UTC, datetime, timedelta

DAY = timedelta(days=1)


def ensure_utc(moment: datetime) -> datetime:
    """Attach UTC to a naive datetime, convert an aware one to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def parse_instant(value: str | None) -> datetime | None:
    """Parse a stored date or timestamp string.

    Args:
        value: ISO date or datetime string, possibly empty.

    Returns:
        Aware UTC datetime, or None when the value is missing or unparseable.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def days_until(moment: datetime, now: datetime) -> int:
    """Whole days from now until moment, rounded up (negative when past)."""
    return math.ceil((moment - now) / DAY)


def today_string(now: datetime) -> str:
    """Return the UTC calendar date of now as YYYY-MM-DD."""
    return ensure_utc(now).date().isoformat()


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def timestamp_id(now: datetime) -> str:
    """Millisecond epoch string used as a document id for new entities."""
    return str(int(ensure_utc(now).timestamp() * 1000))
