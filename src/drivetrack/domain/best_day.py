"""Best weekday to work, ranked from the last three months of history."""

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from drivetrack.domain.cycles import distance_by_day, reconcile_cycles
from drivetrack.domain.entities import (
    BestDayResult,
    DayScore,
    OdometerEvent,
    Transaction,
    WorkSession,
)
from drivetrack.domain.metrics import to_amount
from drivetrack.domain.timezone import InstantLike, ensure_instant, local_date, local_now
from drivetrack.domain.work_hours import attribute_working_days, hours_by_day

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MIN_DAYS_WORKED = 3
LOOKBACK_MONTHS = 3

PROFIT_WEIGHT = 0.4
REVENUE_PER_DISTANCE_WEIGHT = 0.3
REVENUE_PER_HOUR_WEIGHT = 0.3


def _daily_money(transactions: Sequence[Transaction]) -> dict[str, dict[str, float]]:
    days: dict[str, dict[str, float]] = defaultdict(lambda: {"revenue": 0.0, "fuel": 0.0})
    for txn in transactions:
        key = local_date(txn.date).isoformat()
        if txn.is_income:
            days[key]["revenue"] += to_amount(txn.value)
        elif txn.is_fuel_purchase:
            days[key]["fuel"] += to_amount(txn.value)
    return days


def calculate_best_day(
    transactions: Sequence[Transaction],
    work_sessions: Sequence[WorkSession],
    odometer_events: Sequence[OdometerEvent],
    *,
    now: Optional[InstantLike] = None,
) -> BestDayResult:
    """Rank weekdays by a weighted score of profit, revenue/km and revenue/hour.

    Only days with both revenue and worked hours count, and a weekday needs
    at least ``MIN_DAYS_WORKED`` such days to be ranked.
    """
    since = local_now(now) - relativedelta(months=LOOKBACK_MONTHS)
    recent_transactions = [t for t in transactions if ensure_instant(t.date) >= since]
    recent_sessions = [s for s in work_sessions if ensure_instant(s.start) >= since]

    money = _daily_money(recent_transactions)
    hours = hours_by_day(attribute_working_days(recent_sessions))
    distance = distance_by_day(reconcile_cycles(odometer_events))

    groups: dict[int, dict[str, float]] = defaultdict(
        lambda: {"revenue": 0.0, "fuel": 0.0, "hours": 0.0, "distance": 0.0, "days": 0}
    )
    for key, day_money in money.items():
        day_hours = hours.get(key, 0.0)
        if day_money["revenue"] <= 0 or day_hours <= 0:
            continue
        group = groups[date.fromisoformat(key).weekday()]
        group["revenue"] += day_money["revenue"]
        group["fuel"] += day_money["fuel"]
        group["hours"] += day_hours
        group["distance"] += distance.get(key, 0)
        group["days"] += 1

    ranking: list[DayScore] = []
    for weekday in sorted(groups):
        group = groups[weekday]
        days_worked = int(group["days"])
        if days_worked < MIN_DAYS_WORKED:
            continue

        average_profit = (group["revenue"] - group["fuel"]) / days_worked
        per_distance = group["revenue"] / group["distance"] if group["distance"] > 0 else 0.0
        per_hour = group["revenue"] / group["hours"] if group["hours"] > 0 else 0.0
        score = (
            average_profit * PROFIT_WEIGHT
            + per_distance * REVENUE_PER_DISTANCE_WEIGHT
            + per_hour * REVENUE_PER_HOUR_WEIGHT
        )
        ranking.append(
            DayScore(
                weekday=weekday,
                day_name=DAY_NAMES[weekday],
                average_profit=average_profit,
                revenue_per_distance=per_distance,
                revenue_per_hour=per_hour,
                days_worked=days_worked,
                score=score,
            )
        )

    ranking.sort(key=lambda entry: (-entry.score, entry.weekday))
    if not ranking:
        return BestDayResult(best_day=None, ranking=(), sufficient_data=False)
    return BestDayResult(
        best_day=ranking[0].day_name, ranking=tuple(ranking), sufficient_data=True
    )
