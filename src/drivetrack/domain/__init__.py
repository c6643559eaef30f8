"""Domain layer: entities, period and metric calculations, and services.

Only the record-independent calculations are re-exported here. Services that
talk to the database live in their own modules (``drivetrack.domain.dashboard``,
``drivetrack.domain.transaction`` and so on).
"""

from drivetrack.domain.best_day import calculate_best_day
from drivetrack.domain.chart import build_week_series
from drivetrack.domain.cycles import reconcile_cycles
from drivetrack.domain.metrics import (
    compute_comparison,
    compute_metrics,
    percentage_change,
)
from drivetrack.domain.periods import previous_period_of, resolve_period
from drivetrack.domain.work_hours import attribute_working_day, attribute_working_days

__all__ = [
    "attribute_working_day",
    "attribute_working_days",
    "build_week_series",
    "calculate_best_day",
    "compute_comparison",
    "compute_metrics",
    "percentage_change",
    "previous_period_of",
    "reconcile_cycles",
    "resolve_period",
]
