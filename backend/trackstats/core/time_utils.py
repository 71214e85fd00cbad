from datetime import date, datetime, timezone, tzinfo
from typing import Callable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default process-wide clock: the current UTC wall time."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are returned unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_timezone(tz_name: str | None = None) -> tzinfo | None:
    """Map a configured timezone name to a tzinfo.

    - 'local' or None: None, meaning the system local timezone.
    - IANA tz name (e.g., 'Europe/Zurich'): that zone.
    Raises ValueError for unknown names.
    """
    if not tz_name or tz_name == "local":
        return None
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz_name}") from e


def to_local_datetime(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert a datetime (assume UTC if naive) to the given tz, or the system tz if None."""
    return ensure_aware(dt).astimezone(tz)


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``dt`` as seen in ``tz``."""
    return to_local_datetime(dt, tz).date()

