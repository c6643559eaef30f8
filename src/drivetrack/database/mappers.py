"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: the store keeps naive UTC
datetimes and plain strings, the domain works with aware instants and enums.
"""

from datetime import datetime, UTC
from typing import Optional

from drivetrack.domain import entities as domain
from drivetrack.database.models import (
    Goal as ORMGoal,
    OdometerEvent as ORMOdometerEvent,
    Profile as ORMProfile,
    Transaction as ORMTransaction,
    WorkSession as ORMWorkSession,
)


def to_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an instant to the naive UTC form stored in the database."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime read from the database."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        type=domain.TransactionType(orm_transaction.type),
        date=from_storage_datetime(orm_transaction.date),
        value=orm_transaction.value,
        category=orm_transaction.category,
        fuel_type=orm_transaction.fuel_type,
        price_per_liter=orm_transaction.price_per_liter,
        subcategory=orm_transaction.subcategory,
        observation=orm_transaction.observation,
    )


def odometer_event_to_domain(orm_event: ORMOdometerEvent) -> domain.OdometerEvent:
    """Convert SQLAlchemy OdometerEvent model to domain OdometerEvent entity."""
    return domain.OdometerEvent(
        id=orm_event.id,
        user_id=orm_event.user_id,
        type=domain.OdometerEventType(orm_event.type),
        date=from_storage_datetime(orm_event.date),
        value=orm_event.value,
        pair_id=orm_event.pair_id,
    )


def work_session_to_domain(orm_session: ORMWorkSession) -> domain.WorkSession:
    """Convert SQLAlchemy WorkSession model to domain WorkSession entity."""
    return domain.WorkSession(
        id=orm_session.id,
        user_id=orm_session.user_id,
        start=from_storage_datetime(orm_session.start),
        end=from_storage_datetime(orm_session.end),
    )


def profile_to_domain(orm_profile: ORMProfile) -> domain.UserProfile:
    """Convert SQLAlchemy Profile model to domain UserProfile entity."""
    return domain.UserProfile(
        user_id=orm_profile.user_id,
        name=orm_profile.name,
        vehicle_type=orm_profile.vehicle_type,
        vehicle_model=orm_profile.vehicle_model,
        fuel_consumption=orm_profile.fuel_consumption,
    )


def goals_to_domain(orm_goal: ORMGoal) -> domain.Goals:
    """Convert SQLAlchemy Goal model to domain Goals entity."""
    return domain.Goals(
        weekly_goal=orm_goal.weekly_goal,
        monthly_goal=orm_goal.monthly_goal,
    )
