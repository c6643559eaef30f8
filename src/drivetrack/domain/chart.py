"""Per-day revenue and expense series for the weekly chart."""

from datetime import timedelta
from typing import Optional, Sequence

from drivetrack.domain.entities import DayTotals, Period, PeriodKind, Transaction
from drivetrack.domain.metrics import filter_transactions, to_amount
from drivetrack.domain.timezone import InstantLike, local_date, local_today


def build_week_series(
    transactions: Sequence[Transaction],
    period: Period,
    *,
    now: Optional[InstantLike] = None,
) -> list[DayTotals]:
    """Monday to Sunday totals for the week being looked at.

    The week is the one containing the start of a custom period, or today
    otherwise. Only transactions inside ``period`` are counted, so days of the
    week outside the period stay at zero.
    """
    if period.kind == PeriodKind.CUSTOM:
        reference = period.start_day
    else:
        reference = local_today(now)
    monday = reference - timedelta(days=reference.weekday())
    days = [monday + timedelta(days=offset) for offset in range(7)]

    totals = {day: {"revenue": 0.0, "expense": 0.0} for day in days}
    for txn in filter_transactions(transactions, period):
        day = local_date(txn.date)
        if day not in totals:
            continue
        key = "revenue" if txn.is_income else "expense"
        totals[day][key] += to_amount(txn.value)

    return [
        DayTotals(day=day, revenue=totals[day]["revenue"], expense=totals[day]["expense"])
        for day in days
    ]
