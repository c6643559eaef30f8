"""Dashboard domain service."""

from typing import Optional

from drivetrack.database.base import Database
from drivetrack.domain.best_day import calculate_best_day
from drivetrack.domain.chart import build_week_series
from drivetrack.domain.entities import (
    BestDayResult,
    DashboardReport,
    DayTotals,
    Metrics,
    Period,
)
from drivetrack.domain.metrics import compute_comparison, compute_metrics
from drivetrack.domain.periods import DateLike, previous_period_of, resolve_period
from drivetrack.domain.timezone import InstantLike
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)


class DashboardService:
    """Service assembling dashboard reports from stored records.

    Every call reads the user's records afresh, so writes made through the
    other services are visible on the next call.
    """

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def _metrics_for(self, period: Period, records) -> Metrics:
        transactions, odometer_events, work_sessions, profile = records
        return compute_metrics(
            transactions, odometer_events, work_sessions, period, profile=profile
        )

    def _load(self, user_id: str):
        return (
            self.db.list_transactions(user_id),
            self.db.list_odometer_events(user_id),
            self.db.list_work_sessions(user_id),
            self.db.get_user_profile(user_id),
        )

    def build_report(
        self,
        user_id: str,
        token=None,
        custom_start: Optional[DateLike] = None,
        custom_end: Optional[DateLike] = None,
        now: Optional[InstantLike] = None,
    ) -> DashboardReport:
        """Build the metrics and comparison for a period.

        Args:
            user_id: User to report on
            token: Period token (e.g. "today", "last-month", "custom")
            custom_start: First day of a custom period
            custom_end: Last day of a custom period
            now: Reference instant, defaults to the current time

        Returns:
            DashboardReport for the resolved period

        Raises:
            ValidationError: If a custom period starts after it ends
            DataError: If a stored record is malformed
        """
        period = resolve_period(token, custom_start, custom_end, now=now)
        previous_period = previous_period_of(period)
        records = self._load(user_id)

        metrics = self._metrics_for(period, records)
        previous_metrics = None
        if previous_period is not None:
            previous_metrics = self._metrics_for(previous_period, records)

        logger.debug(
            "Built dashboard for %s, %s to %s",
            user_id,
            period.start_day.isoformat(),
            period.end_day.isoformat(),
        )
        return DashboardReport(
            user_id=user_id,
            period=period,
            previous_period=previous_period,
            metrics=metrics,
            previous_metrics=previous_metrics,
            comparison=compute_comparison(metrics, previous_metrics),
        )

    def best_day(self, user_id: str, now: Optional[InstantLike] = None) -> BestDayResult:
        """Best weekday to work for a user."""
        return calculate_best_day(
            self.db.list_transactions(user_id),
            self.db.list_work_sessions(user_id),
            self.db.list_odometer_events(user_id),
            now=now,
        )

    def week_series(
        self,
        user_id: str,
        token=None,
        custom_start: Optional[DateLike] = None,
        custom_end: Optional[DateLike] = None,
        now: Optional[InstantLike] = None,
    ) -> list[DayTotals]:
        """Per-day revenue and expense for the week being looked at."""
        period = resolve_period(token, custom_start, custom_end, now=now)
        return build_week_series(self.db.list_transactions(user_id), period, now=now)
