"""Shared pytest fixtures for drivetrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from drivetrack.database.factories import create_sqlite_database
from drivetrack.domain.dashboard import DashboardService
from drivetrack.domain.entities import (
    OdometerEvent,
    OdometerEventType,
    Transaction,
    TransactionType,
    UserProfile,
    WorkSession,
)
from drivetrack.domain.goals import GoalService
from drivetrack.domain.odometer import OdometerService
from drivetrack.domain.profile import ProfileService
from drivetrack.domain.timezone import local_datetime
from drivetrack.domain.transaction import TransactionService
from drivetrack.domain.work_session import WorkSessionService

USER = "driver-1"


def at(year, month, day, hour=0, minute=0, second=0):
    """Aware local wall-clock instant."""
    return local_datetime(date(year, month, day), hour, minute, second)


def income(id, when, value, category="Uber"):
    return Transaction(
        id=id,
        user_id=USER,
        type=TransactionType.INCOME,
        date=when,
        value=Decimal(str(value)),
        category=category,
    )


def expense(id, when, value, category="Maintenance", price_per_liter=None, fuel_type=None):
    return Transaction(
        id=id,
        user_id=USER,
        type=TransactionType.EXPENSE,
        date=when,
        value=Decimal(str(value)),
        category=category,
        fuel_type=fuel_type,
        price_per_liter=(
            Decimal(str(price_per_liter)) if price_per_liter is not None else None
        ),
    )


def odometer(id, kind, when, value, pair_id=None):
    return OdometerEvent(
        id=id,
        user_id=USER,
        type=OdometerEventType(kind),
        date=when,
        value=value,
        pair_id=pair_id,
    )


def session(id, start, end=None):
    return WorkSession(id=id, user_id=USER, start=start, end=end)


def profile(consumption="10"):
    return UserProfile(
        user_id=USER,
        fuel_consumption=Decimal(consumption) if consumption is not None else None,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def odometer_service(temp_db):
    """Create an OdometerService with a temporary database."""
    return OdometerService(temp_db)


@pytest.fixture
def work_session_service(temp_db):
    """Create a WorkSessionService with a temporary database."""
    return WorkSessionService(temp_db)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
