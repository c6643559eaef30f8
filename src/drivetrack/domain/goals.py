"""Earnings goals domain service."""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from drivetrack.database.base import Database
from drivetrack.domain.entities import GoalProgress, Goals, PeriodKind, Transaction
from drivetrack.domain.errors import ValidationError
from drivetrack.domain.metrics import filter_transactions, sum_values
from drivetrack.domain.periods import resolve_period
from drivetrack.domain.timezone import (
    InstantLike,
    end_of_local_day,
    ensure_instant,
    local_today,
    start_of_local_day,
)

DEFAULT_GOALS = Goals()
SUGGESTION_WINDOWS = 4


def week_earnings(
    transactions: Sequence[Transaction], now: Optional[InstantLike] = None
) -> float:
    """Income earned so far this week."""
    period = resolve_period(PeriodKind.THIS_WEEK, now=now)
    return sum_values(t for t in filter_transactions(transactions, period) if t.is_income)


def month_earnings(
    transactions: Sequence[Transaction], now: Optional[InstantLike] = None
) -> float:
    """Income earned so far this month."""
    period = resolve_period(PeriodKind.THIS_MONTH, now=now)
    return sum_values(t for t in filter_transactions(transactions, period) if t.is_income)


def _income_between(transactions: Sequence[Transaction], first, last) -> float:
    start = start_of_local_day(first)
    end = end_of_local_day(last)
    return sum_values(
        t
        for t in transactions
        if t.is_income and start <= ensure_instant(t.date) <= end
    )


def _rounded_mean(totals: list[float]) -> Decimal:
    non_zero = [total for total in totals if total]
    if not non_zero:
        return Decimal("0")
    mean = Decimal(str(sum(non_zero) / len(non_zero)))
    return mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def suggest_goals(
    transactions: Sequence[Transaction], now: Optional[InstantLike] = None
) -> Goals:
    """Suggest goals from the average of the last four weeks and months.

    Windows without any income are ignored; when there is no income at all the
    default goals are returned.
    """
    today = local_today(now)
    this_monday = today - timedelta(days=today.weekday())
    first_of_month = today.replace(day=1)

    weekly_totals = []
    for i in range(SUGGESTION_WINDOWS):
        monday = this_monday - timedelta(weeks=i)
        weekly_totals.append(
            _income_between(transactions, monday, monday + timedelta(days=6))
        )

    monthly_totals = []
    for i in range(SUGGESTION_WINDOWS):
        first = first_of_month - relativedelta(months=i)
        last = first + relativedelta(months=1) - timedelta(days=1)
        monthly_totals.append(_income_between(transactions, first, last))

    weekly_goal = _rounded_mean(weekly_totals)
    monthly_goal = _rounded_mean(monthly_totals)
    return Goals(
        weekly_goal=weekly_goal or DEFAULT_GOALS.weekly_goal,
        monthly_goal=monthly_goal or DEFAULT_GOALS.monthly_goal,
    )


class GoalService:
    """Service for reading and updating earnings goals."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_goals(self, user_id: str) -> Goals:
        """Stored goals for a user, or the defaults."""
        goals = self.db.get_goals(user_id)
        return goals if goals is not None else DEFAULT_GOALS

    def set_goals(
        self,
        user_id: str,
        weekly_goal: Optional[Decimal] = None,
        monthly_goal: Optional[Decimal] = None,
    ) -> Goals:
        """Update one or both goals.

        Raises:
            ValidationError: If a goal is negative
        """
        current = self.get_goals(user_id)
        weekly = current.weekly_goal if weekly_goal is None else weekly_goal
        monthly = current.monthly_goal if monthly_goal is None else monthly_goal
        if weekly < 0 or monthly < 0:
            raise ValidationError("Goals must not be negative")

        self.db.save_goals(user_id, weekly_goal=weekly, monthly_goal=monthly)
        return Goals(weekly_goal=weekly, monthly_goal=monthly)

    def progress(self, user_id: str, now: Optional[InstantLike] = None) -> GoalProgress:
        """Current week and month earnings against the user's goals."""
        transactions = self.db.list_transactions(user_id)
        return GoalProgress(
            goals=self.get_goals(user_id),
            week_earnings=week_earnings(transactions, now),
            month_earnings=month_earnings(transactions, now),
        )

    def suggest(self, user_id: str, now: Optional[InstantLike] = None) -> Goals:
        """Suggested goals from the user's income history."""
        return suggest_goals(self.db.list_transactions(user_id), now)
