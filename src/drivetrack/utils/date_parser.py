"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz

from drivetrack.domain.timezone import LOCAL_TZ, local_now, local_today


def parse_date(date_str: str, now: Optional[datetime] = None) -> date:
    """Parse a date string into a local calendar day.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday"

    Args:
        date_str: Date string
        now: Reference instant for relative dates

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = local_today(now)

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a local wall-clock time into an aware UTC datetime.

    Supports:
    - "now"
    - "YYYY-MM-DD HH:MM" and other absolute formats dateutil understands
    - "HH:MM" on its own, meaning that time today
    - "yesterday HH:MM"

    Values without an explicit offset are read as local time.

    Raises:
        ValueError: If the value cannot be parsed
    """
    text = value.strip()
    lowered = text.lower()
    current = local_now(now)
    if lowered == "now":
        return current.astimezone(tz.UTC)

    day_offset = 0
    if lowered.startswith("yesterday "):
        day_offset = 1
        text = text[len("yesterday "):]
    elif lowered.startswith("today "):
        text = text[len("today "):]

    default = datetime.combine(
        current.date() - timedelta(days=day_offset), datetime.min.time()
    )
    try:
        parsed = date_parser.parse(text, default=default)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date and time '{value}': {e}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=LOCAL_TZ)
    return parsed.astimezone(tz.UTC)
