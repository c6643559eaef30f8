"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from drivetrack.database.models import (
    Goal as ORMGoal,
    OdometerEvent as ORMOdometerEvent,
    Profile as ORMProfile,
    Transaction as ORMTransaction,
    WorkSession as ORMWorkSession,
)
from drivetrack.database.mappers import (
    from_storage_datetime,
    goals_to_domain,
    odometer_event_to_domain,
    profile_to_domain,
    to_storage_datetime,
    transaction_to_domain,
    work_session_to_domain,
)
from drivetrack.domain.entities import (
    Goals,
    OdometerEventType,
    Transaction,
    TransactionType,
    UserProfile,
)
from drivetrack.domain.timezone import LOCAL_TZ


def test_storage_datetime_is_naive_utc():
    local = datetime(2024, 3, 10, 23, 30, tzinfo=LOCAL_TZ)
    stored = to_storage_datetime(local)

    assert stored.tzinfo is None
    assert stored == datetime(2024, 3, 11, 2, 30)
    assert from_storage_datetime(stored) == local
    assert to_storage_datetime(None) is None


def test_transaction_to_domain():
    """Test converting ORM Transaction to domain Transaction."""
    orm_transaction = ORMTransaction(
        id=1,
        user_id="u",
        type="expense",
        date=datetime(2024, 3, 10, 12, 0),
        value=Decimal("200.00"),
        category="Fuel",
        fuel_type="Gasoline",
        price_per_liter=Decimal("5.890"),
    )
    txn = transaction_to_domain(orm_transaction)

    assert isinstance(txn, Transaction)
    assert txn.type == TransactionType.EXPENSE
    assert txn.date == datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    assert txn.price_per_liter == Decimal("5.890")
    assert txn.is_fuel_purchase


def test_odometer_event_to_domain():
    orm_event = ORMOdometerEvent(
        id=3,
        user_id="u",
        type="close",
        date=datetime(2024, 3, 10, 21, 0),
        value=12345,
        pair_id="abc",
    )
    event = odometer_event_to_domain(orm_event)

    assert event.type == OdometerEventType.CLOSE
    assert event.value == 12345
    assert event.pair_id == "abc"
    assert event.date.tzinfo is not None


def test_work_session_to_domain_keeps_open_end():
    orm_session = ORMWorkSession(id=1, user_id="u", start=datetime(2024, 3, 10, 11, 0))
    work_session = work_session_to_domain(orm_session)

    assert work_session.in_progress
    assert work_session.start == datetime(2024, 3, 10, 11, 0, tzinfo=UTC)


def test_profile_and_goals_to_domain():
    profile = profile_to_domain(
        ORMProfile(user_id="u", name="Ana", fuel_consumption=Decimal("11.50"))
    )
    goals = goals_to_domain(
        ORMGoal(user_id="u", weekly_goal=Decimal("900"), monthly_goal=Decimal("3600"))
    )

    assert isinstance(profile, UserProfile)
    assert profile.name == "Ana"
    assert profile.has_fuel_consumption
    assert goals == Goals(Decimal("900"), Decimal("3600"))
