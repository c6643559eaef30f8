"""Period resolution.

Turns a named period (or an explicit custom range) into a concrete, day-aligned
window of local instants, and derives the previous-period window used for
comparisons.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from drivetrack.domain.entities import Period, PeriodKind
from drivetrack.domain.errors import ValidationError
from drivetrack.domain.timezone import (
    InstantLike,
    end_of_local_day,
    local_date,
    local_today,
    start_of_local_day,
)
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NamedPeriod:
    """Request for one of the named period rules."""

    kind: PeriodKind

    def __post_init__(self):
        if self.kind == PeriodKind.CUSTOM:
            raise ValidationError("Custom periods must be requested with CustomPeriod")


@dataclass(frozen=True)
class CustomPeriod:
    """Request for an explicit range of local calendar days."""

    start: date
    end: date


PeriodRequest = Union[NamedPeriod, CustomPeriod]

DateLike = Union[date, datetime, str]


def _as_local_day(value: DateLike) -> date:
    """Local calendar day of a date, datetime or ISO string."""
    if isinstance(value, datetime):
        return local_date(value)
    if isinstance(value, date):
        return value
    # Date-only strings are calendar days, anything longer is an instant.
    text = value.strip()
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"Could not parse date '{value}': {e}") from e
    return local_date(text)


def parse_period_token(
    token: Union[str, PeriodKind, PeriodRequest, None],
    custom_start: Optional[DateLike] = None,
    custom_end: Optional[DateLike] = None,
) -> PeriodRequest:
    """Map a raw token to a period request.

    Unknown tokens fall back to ``today``. A ``custom`` token missing either
    date also falls back to ``today``.
    """
    if isinstance(token, (NamedPeriod, CustomPeriod)):
        return token

    if token is None:
        kind = PeriodKind.TODAY
    elif isinstance(token, PeriodKind):
        kind = token
    else:
        normalized = token.strip().lower().replace("_", "-")
        try:
            kind = PeriodKind(normalized)
        except ValueError:
            logger.warning("Unknown period token '%s', falling back to today", token)
            kind = PeriodKind.TODAY

    if kind == PeriodKind.CUSTOM:
        if custom_start is None or custom_end is None:
            logger.warning("Custom period without both dates, falling back to today")
            return NamedPeriod(PeriodKind.TODAY)
        return CustomPeriod(_as_local_day(custom_start), _as_local_day(custom_end))

    return NamedPeriod(kind)


def _window(kind: PeriodKind, first: date, last: date) -> Period:
    return Period(kind=kind, start=start_of_local_day(first), end=end_of_local_day(last))


def _monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def resolve_period(
    token: Union[str, PeriodKind, PeriodRequest, None],
    custom_start: Optional[DateLike] = None,
    custom_end: Optional[DateLike] = None,
    *,
    now: Optional[InstantLike] = None,
) -> Period:
    """Resolve a period token to a concrete window.

    Args:
        token: Period token, kind or request object
        custom_start: First day of a custom range
        custom_end: Last day of a custom range
        now: Reference instant, defaults to the current time

    Returns:
        Period with inclusive, day-aligned local bounds

    Raises:
        ValidationError: If a custom range starts after it ends
    """
    request = parse_period_token(token, custom_start, custom_end)
    today = local_today(now)

    if isinstance(request, CustomPeriod):
        if request.start > request.end:
            raise ValidationError("Start date must be before end date")
        return _window(PeriodKind.CUSTOM, request.start, request.end)

    kind = request.kind
    if kind == PeriodKind.TODAY:
        return _window(kind, today, today)
    if kind == PeriodKind.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return _window(kind, yesterday, yesterday)
    if kind == PeriodKind.THIS_WEEK:
        return _window(kind, _monday_of(today), today)
    if kind == PeriodKind.LAST_WEEK:
        last_monday = _monday_of(today) - timedelta(days=7)
        return _window(kind, last_monday, last_monday + timedelta(days=6))
    if kind == PeriodKind.THIS_MONTH:
        # The current month is still open: it ends today, not at month end.
        return _window(kind, today.replace(day=1), today)
    if kind == PeriodKind.LAST_MONTH:
        first_this = today.replace(day=1)
        last_month_end = first_this - timedelta(days=1)
        return _window(kind, last_month_end.replace(day=1), last_month_end)

    raise ValidationError(f"Unhandled period kind: {kind}")


def is_single_day_period(period: Period) -> bool:
    """True for single-day tokens and one-day custom ranges."""
    if period.kind in (PeriodKind.TODAY, PeriodKind.YESTERDAY):
        return True
    return period.kind == PeriodKind.CUSTOM and period.is_single_day


def same_day_previous_month(day: date) -> Optional[date]:
    """Same day-of-month one calendar month earlier, or None if it doesn't exist."""
    shifted = day - relativedelta(months=1)
    if shifted.day != day.day:
        return None
    return shifted


def previous_period_of(period: Period) -> Optional[Period]:
    """Derive the comparable previous period.

    Single-day windows map to the same day-of-month one month earlier and
    return None when that day does not exist. ``last-month`` maps to the full
    month before it. Other ranges shift each bound back one calendar month,
    clamping to the end of shorter months.

    Returns:
        Previous Period, or None when there is no corresponding day
    """
    if is_single_day_period(period):
        previous_day = same_day_previous_month(period.start_day)
        if previous_day is None:
            logger.info(
                "No corresponding day one month before %s", period.start_day.isoformat()
            )
            return None
        return _window(period.kind, previous_day, previous_day)

    if period.kind == PeriodKind.LAST_MONTH:
        previous_end = period.start_day - timedelta(days=1)
        return _window(period.kind, previous_end.replace(day=1), previous_end)

    previous_start = period.start_day - relativedelta(months=1)
    previous_end = period.end_day - relativedelta(months=1)
    return _window(period.kind, previous_start, previous_end)
