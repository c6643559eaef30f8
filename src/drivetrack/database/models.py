"""SQLAlchemy models for drivetrack database.

Instants are stored as naive UTC datetimes; mappers re-attach the timezone.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Transaction(Base):
    """Income or expense transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    type = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    value = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=False)
    fuel_type = Column(String, nullable=True)
    price_per_liter = Column(Numeric(10, 3), nullable=True)
    subcategory = Column(String, nullable=True)
    observation = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (Index("ix_transactions_user_date", "user_id", "date"),)


class OdometerEvent(Base):
    """Odometer open/close reading model."""

    __tablename__ = "odometer_events"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    type = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    value = Column(Integer, nullable=False)
    pair_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_odometer_events_user_date", "user_id", "date"),
        Index("ix_odometer_events_pair_id", "pair_id"),
    )


class WorkSession(Base):
    """Work-hour session model; ``end`` is NULL while in progress."""

    __tablename__ = "work_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (Index("ix_work_sessions_user_start", "user_id", "start"),)


class Profile(Base):
    """Driver profile model."""

    __tablename__ = "profiles"

    user_id = Column(String, primary_key=True)
    name = Column(String, nullable=True)
    vehicle_type = Column(String, nullable=True)
    vehicle_model = Column(String, nullable=True)
    fuel_consumption = Column(Numeric(6, 2), nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class Goal(Base):
    """Weekly and monthly earnings goal model."""

    __tablename__ = "goals"

    user_id = Column(String, primary_key=True)
    weekly_goal = Column(Numeric(10, 2), nullable=False)
    monthly_goal = Column(Numeric(10, 2), nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
