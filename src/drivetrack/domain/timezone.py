"""Local civil-time helpers.

Records are stored as UTC instants. Every day-boundary decision (which day a
transaction, cycle or work segment belongs to) is made on the local
representation, a fixed UTC-3 offset without daylight saving.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil import tz

from drivetrack.domain.errors import DataError

LOCAL_UTC_OFFSET_HOURS = -3
LOCAL_TZ = tz.tzoffset("BRT", LOCAL_UTC_OFFSET_HOURS * 3600)

InstantLike = Union[datetime, str]


def ensure_instant(value: InstantLike) -> datetime:
    """Normalize a stored date value to an aware UTC datetime.

    Naive datetimes are taken to be UTC, as they come back from the store.

    Raises:
        DataError: If the value is missing or cannot be parsed
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz.UTC)
        return value.astimezone(tz.UTC)
    if isinstance(value, str):
        try:
            parsed = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            raise DataError(f"Could not parse instant '{value}': {e}") from e
        return ensure_instant(parsed)
    raise DataError(f"Expected a datetime or ISO string, got {type(value).__name__}")


def to_local_time(instant: InstantLike) -> datetime:
    """Express an instant in local civil time."""
    return ensure_instant(instant).astimezone(LOCAL_TZ)


def local_date(instant: InstantLike) -> date:
    """Local calendar day of an instant."""
    return to_local_time(instant).date()


def local_date_key(instant: InstantLike) -> str:
    """Local calendar day of an instant as ``YYYY-MM-DD``."""
    return local_date(instant).isoformat()


def local_datetime(
    day: date, hour: int = 0, minute: int = 0, second: int = 0, microsecond: int = 0
) -> datetime:
    """Build an aware local wall-clock datetime on ``day``."""
    return datetime.combine(day, time(hour, minute, second, microsecond), tzinfo=LOCAL_TZ)


def start_of_local_day(day: date) -> datetime:
    """First instant of a local calendar day."""
    return local_datetime(day)


def end_of_local_day(day: date) -> datetime:
    """Last representable instant of a local calendar day."""
    return start_of_local_day(day + timedelta(days=1)) - timedelta(microseconds=1)


def local_now(now: Optional[InstantLike] = None) -> datetime:
    """Current instant in local time; ``now`` overrides the clock."""
    if now is None:
        return datetime.now(tz.UTC).astimezone(LOCAL_TZ)
    return to_local_time(now)


def local_today(now: Optional[InstantLike] = None) -> date:
    """Current local calendar day."""
    return local_now(now).date()
