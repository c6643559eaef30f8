"""Period metrics and period-over-period comparison.

This is the single place revenue, expense, distance, hours and fuel cost are
computed. Views project from the returned ``Metrics`` instead of re-deriving
any of these values.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from drivetrack.domain.cycles import reconcile_cycles, total_distance
from drivetrack.domain.entities import (
    METRIC_NAMES,
    Change,
    ChangeStatus,
    Comparison,
    FuelStatus,
    Metrics,
    OdometerEvent,
    Period,
    Transaction,
    UserProfile,
    WorkSession,
)
from drivetrack.domain.errors import DataError
from drivetrack.domain.timezone import ensure_instant
from drivetrack.domain.work_hours import attribute_working_days, total_hours
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)

# Values smaller than this are floating-point noise, not money.
ZERO_THRESHOLD = 0.01

_FUEL_METRICS = ("fuel_expense", "profit")


def to_amount(value) -> float:
    """Convert a stored amount to float, refusing anything non-numeric."""
    if isinstance(value, bool) or value is None:
        raise DataError(f"Invalid amount: {value!r}")
    try:
        return float(Decimal(str(value)))
    except (ArithmeticError, ValueError) as e:
        raise DataError(f"Invalid amount: {value!r}") from e


def filter_transactions(
    transactions: Iterable[Transaction], period: Period
) -> list[Transaction]:
    """Transactions whose date falls inside the period (inclusive)."""
    return [t for t in transactions if period.contains(ensure_instant(t.date))]


def sum_values(transactions: Iterable[Transaction]) -> float:
    return sum(to_amount(t.value) for t in transactions)


def average_fuel_price(
    transactions: Sequence[Transaction], period: Period
) -> Optional[float]:
    """Mean price per liter of in-period fuel purchases.

    Falls back to the most recent known price anywhere in history when the
    period has no priced fuel purchase.

    Returns:
        Price per liter, or None when no price was ever recorded
    """
    priced = [t for t in transactions if t.is_fuel_purchase and t.price_per_liter]
    in_period = [t for t in priced if period.contains(ensure_instant(t.date))]
    if in_period:
        return sum(to_amount(t.price_per_liter) for t in in_period) / len(in_period)
    if not priced:
        return None

    latest = max(priced, key=lambda t: (ensure_instant(t.date), t.id))
    logger.debug(
        "No fuel price in period, using latest known price from transaction %s",
        latest.id,
    )
    return to_amount(latest.price_per_liter)


def estimate_fuel_expense(
    distance: float,
    transactions: Sequence[Transaction],
    period: Period,
    profile: Optional[UserProfile],
) -> tuple[float, FuelStatus]:
    """Fuel cost of the distance driven.

    Returns:
        Tuple of (fuel expense, status); the expense is 0 unless status is OK
    """
    if profile is None or not profile.has_fuel_consumption:
        return 0.0, FuelStatus.INCOMPLETE_PROFILE

    price = average_fuel_price(transactions, period)
    if not price:
        return 0.0, FuelStatus.NO_PRICE_DATA

    liters = distance / to_amount(profile.fuel_consumption)
    return liters * price, FuelStatus.OK


def compute_metrics(
    transactions: Sequence[Transaction],
    odometer_events: Sequence[OdometerEvent],
    work_sessions: Sequence[WorkSession],
    period: Period,
    *,
    profile: Optional[UserProfile] = None,
) -> Metrics:
    """Compute the metric set for a period.

    Args:
        transactions: All of the user's transactions
        odometer_events: All of the user's odometer events
        work_sessions: All of the user's work sessions
        period: Window to aggregate over
        profile: User profile, needed for the fuel estimate

    Returns:
        Metrics for the period

    Raises:
        DataError: If a record carries a malformed date or amount
    """
    in_period = filter_transactions(transactions, period)
    revenue = sum_values(t for t in in_period if t.is_income)
    expense = sum_values(t for t in in_period if t.is_expense)

    cycles = reconcile_cycles(odometer_events)
    distance = float(total_distance(cycles, period))

    segments = attribute_working_days(work_sessions)
    hours = total_hours(segments, period)

    fuel_expense, fuel_status = estimate_fuel_expense(
        distance, transactions, period, profile
    )

    return Metrics(
        revenue=revenue,
        expense=expense,
        balance=revenue - expense,
        distance=distance,
        revenue_per_distance=revenue / distance if distance > 0 else 0.0,
        hours=hours,
        revenue_per_hour=revenue / hours if hours > 0 else 0.0,
        fuel_expense=fuel_expense,
        profit=revenue - fuel_expense,
        fuel_status=fuel_status,
    )


def normalize_value(value: float) -> float:
    """Round to two decimals and flush anything below 0.01 to exactly zero.

    Applied to every metric before comparing, hours and distance included.
    """
    rounded = round(value, 2)
    if abs(rounded) < ZERO_THRESHOLD:
        return 0.0
    return rounded


def percentage_change(current: float, previous: float) -> Change:
    """Signed percentage change from ``previous`` to ``current``.

    The change is relative to ``|previous|`` so that moving from a negative
    value toward zero reads as an improvement.
    """
    current = normalize_value(current)
    previous = normalize_value(previous)

    if previous == 0:
        if current > 0:
            return Change(ChangeStatus.CHANGE, 100.0)
        return Change(ChangeStatus.NO_PRIOR_DATA)

    return Change(ChangeStatus.CHANGE, (current - previous) / abs(previous) * 100)


def compute_comparison(current: Metrics, previous: Optional[Metrics]) -> Comparison:
    """Compare every metric against the previous period.

    Args:
        current: Metrics of the current period
        previous: Metrics of the previous period, None when it doesn't exist

    Returns:
        Comparison keyed by metric name
    """
    if previous is None:
        return Comparison(
            {name: Change(ChangeStatus.UNAVAILABLE) for name in METRIC_NAMES}
        )

    fuel_statuses = (current.fuel_status, previous.fuel_status)
    fuel_change = None
    if FuelStatus.INCOMPLETE_PROFILE in fuel_statuses:
        fuel_change = Change(ChangeStatus.INCOMPLETE_PROFILE)
    elif FuelStatus.NO_PRICE_DATA in fuel_statuses:
        fuel_change = Change(ChangeStatus.NO_PRICE_DATA)

    per_metric: dict[str, Change] = {}
    for name in METRIC_NAMES:
        if fuel_change is not None and name in _FUEL_METRICS:
            per_metric[name] = fuel_change
            continue
        per_metric[name] = percentage_change(
            current.value_of(name), previous.value_of(name)
        )
    return Comparison(per_metric)
