"""Domain model entities for drivetrack.

These are pure data classes representing business concepts, independent of
database schema. Records (transactions, odometer events, work sessions) come
from the record store; cycles, segments, periods and metrics are derived on
every read and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional

from drivetrack.domain.timezone import local_date


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class OdometerEventType(str, Enum):
    """Whether an odometer reading opens or closes a cycle."""

    OPEN = "open"
    CLOSE = "close"


FUEL_CATEGORIES = frozenset({"Fuel", "Gasoline", "Ethanol", "Diesel"})


@dataclass(frozen=True)
class Transaction:
    """Income or expense transaction domain entity."""

    id: int
    user_id: str
    type: TransactionType
    date: datetime
    value: Decimal
    category: str
    fuel_type: Optional[str] = None
    price_per_liter: Optional[Decimal] = None
    subcategory: Optional[str] = None
    observation: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_fuel_purchase(self) -> bool:
        """True for expenses in a fuel category or carrying a fuel type."""
        return self.is_expense and (
            self.category in FUEL_CATEGORIES or bool(self.fuel_type)
        )


@dataclass(frozen=True)
class OdometerEvent:
    """Odometer reading that opens or closes a cycle."""

    id: int
    user_id: str
    type: OdometerEventType
    date: datetime
    value: int
    pair_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.type == OdometerEventType.OPEN

    @property
    def is_close(self) -> bool:
        return self.type == OdometerEventType.CLOSE


@dataclass(frozen=True)
class WorkSession:
    """Work-hour session; ``end`` is None while the session is in progress."""

    id: int
    user_id: str
    start: datetime
    end: Optional[datetime] = None

    @property
    def in_progress(self) -> bool:
        return self.end is None

    @property
    def duration_hours(self) -> float:
        if self.end is None:
            return 0.0
        return (self.end - self.start) / timedelta(hours=1)


@dataclass(frozen=True)
class UserProfile:
    """Driver profile; fuel consumption is in km per liter."""

    user_id: str
    name: Optional[str] = None
    vehicle_type: Optional[str] = None
    vehicle_model: Optional[str] = None
    fuel_consumption: Optional[Decimal] = None

    @property
    def has_fuel_consumption(self) -> bool:
        return self.fuel_consumption is not None and self.fuel_consumption > 0


@dataclass(frozen=True)
class Goals:
    """Weekly and monthly earnings goals."""

    weekly_goal: Decimal = Decimal("1000")
    monthly_goal: Decimal = Decimal("4000")


@dataclass(frozen=True)
class Cycle:
    """Paired odometer open/close events.

    A cycle without a close event is dangling (still running) and contributes
    no distance.
    """

    open: OdometerEvent
    close: Optional[OdometerEvent] = None

    @property
    def is_closed(self) -> bool:
        return self.close is not None

    @property
    def is_dangling(self) -> bool:
        return self.close is None

    @property
    def raw_distance(self) -> Optional[int]:
        if self.close is None:
            return None
        return self.close.value - self.open.value

    @property
    def distance(self) -> int:
        """Closed-cycle distance, never negative."""
        raw = self.raw_distance
        if raw is None or raw <= 0:
            return 0
        return raw

    @property
    def day(self) -> date:
        """Local calendar day the cycle's distance is attributed to."""
        return local_date(self.open.date)


@dataclass(frozen=True)
class ProcessedSegment:
    """Work session (or half of a split session) booked to a working date."""

    id: str
    session_id: int
    start: datetime
    end: datetime
    working_date: date
    is_partial: bool = False
    part_number: Optional[int] = None

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start) / timedelta(hours=1)


class PeriodKind(str, Enum):
    """Named period rules."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this-week"
    LAST_WEEK = "last-week"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Period:
    """Resolved, day-aligned window of instants; both bounds inclusive."""

    kind: PeriodKind
    start: datetime
    end: datetime

    @property
    def start_day(self) -> date:
        return self.start.date()

    @property
    def end_day(self) -> date:
        return self.end.date()

    @property
    def is_single_day(self) -> bool:
        return self.start_day == self.end_day

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def contains_day(self, day: date) -> bool:
        return self.start_day <= day <= self.end_day


class FuelStatus(str, Enum):
    """Whether the fuel expense estimate is a real number."""

    OK = "ok"
    INCOMPLETE_PROFILE = "incomplete_profile"
    NO_PRICE_DATA = "no_price_data"


METRIC_NAMES = (
    "revenue",
    "expense",
    "balance",
    "distance",
    "revenue_per_distance",
    "hours",
    "revenue_per_hour",
    "fuel_expense",
    "profit",
)


@dataclass(frozen=True)
class Metrics:
    """Metric set for a single period."""

    revenue: float = 0.0
    expense: float = 0.0
    balance: float = 0.0
    distance: float = 0.0
    revenue_per_distance: float = 0.0
    hours: float = 0.0
    revenue_per_hour: float = 0.0
    fuel_expense: float = 0.0
    profit: float = 0.0
    fuel_status: FuelStatus = FuelStatus.OK

    def value_of(self, name: str) -> float:
        if name not in METRIC_NAMES:
            raise KeyError(name)
        return getattr(self, name)


class ChangeStatus(str, Enum):
    """Outcome of comparing a metric with its previous-period value."""

    CHANGE = "change"
    NO_PRIOR_DATA = "no_prior_data"
    UNAVAILABLE = "unavailable"
    INCOMPLETE_PROFILE = "incomplete_profile"
    NO_PRICE_DATA = "no_price_data"


_CHANGE_LABELS = {
    ChangeStatus.NO_PRIOR_DATA: "No prior data",
    ChangeStatus.UNAVAILABLE: "Unavailable",
    ChangeStatus.INCOMPLETE_PROFILE: "Configure profile",
    ChangeStatus.NO_PRICE_DATA: "No fuel price",
}


@dataclass(frozen=True)
class Change:
    """Signed percentage change, or the reason there is none."""

    status: ChangeStatus
    percent: Optional[float] = None

    @property
    def has_percent(self) -> bool:
        return self.status == ChangeStatus.CHANGE

    def __str__(self) -> str:
        if self.status != ChangeStatus.CHANGE or self.percent is None:
            return _CHANGE_LABELS[self.status]
        sign = "+" if self.percent >= 0 else ""
        return f"{sign}{self.percent:.1f}%"


@dataclass(frozen=True)
class Comparison:
    """Per-metric changes between a current and a previous period."""

    per_metric: dict[str, Change] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Change:
        return self.per_metric[name]


@dataclass(frozen=True)
class DashboardReport:
    """Everything the dashboard view renders for one period."""

    user_id: str
    period: Period
    previous_period: Optional[Period]
    metrics: Metrics
    previous_metrics: Optional[Metrics]
    comparison: Comparison


@dataclass(frozen=True)
class DayScore:
    """Weekday ranking entry for the best-day calculation."""

    weekday: int
    day_name: str
    average_profit: float
    revenue_per_distance: float
    revenue_per_hour: float
    days_worked: int
    score: float


@dataclass(frozen=True)
class BestDayResult:
    """Best weekday to work and the full ranking."""

    best_day: Optional[str]
    ranking: tuple[DayScore, ...] = ()
    sufficient_data: bool = False


@dataclass(frozen=True)
class DayTotals:
    """Revenue and expense booked to a single local day."""

    day: date
    revenue: float = 0.0
    expense: float = 0.0


@dataclass(frozen=True)
class GoalProgress:
    """Earnings against the weekly and monthly goals."""

    goals: Goals
    week_earnings: float
    month_earnings: float

    @property
    def weekly_percent(self) -> float:
        if self.goals.weekly_goal <= 0:
            return 0.0
        return self.week_earnings / float(self.goals.weekly_goal) * 100

    @property
    def monthly_percent(self) -> float:
        if self.goals.monthly_goal <= 0:
            return 0.0
        return self.month_earnings / float(self.goals.monthly_goal) * 100
