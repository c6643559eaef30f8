"""Abstract record store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from drivetrack.domain.entities import (
    Goals,
    OdometerEvent,
    OdometerEventType,
    Transaction,
    TransactionType,
    UserProfile,
    WorkSession,
)


class Database(ABC):
    """Abstract record store for drivetrack.

    Every collection is owned by a user; list operations are scoped by
    ``user_id`` and return domain entities.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        type: TransactionType,
        date: datetime,
        value: Decimal,
        category: str,
        fuel_type: Optional[str] = None,
        price_per_liter: Optional[Decimal] = None,
        subcategory: Optional[str] = None,
        observation: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List a user's transactions, optionally bounded by date (inclusive)."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields) -> None:
        """Update transaction fields. Only the given fields change."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Odometer operations
    @abstractmethod
    def create_odometer_event(
        self,
        user_id: str,
        type: OdometerEventType,
        date: datetime,
        value: int,
        pair_id: Optional[str] = None,
    ) -> int:
        """Create an odometer event. Returns event ID."""
        pass

    @abstractmethod
    def get_odometer_event(self, event_id: int) -> Optional[OdometerEvent]:
        """Get odometer event by ID."""
        pass

    @abstractmethod
    def list_odometer_events(self, user_id: str) -> list[OdometerEvent]:
        """List a user's odometer events, oldest first."""
        pass

    @abstractmethod
    def update_odometer_event(
        self,
        event_id: int,
        date: Optional[datetime] = None,
        value: Optional[int] = None,
    ) -> None:
        """Update an odometer event's date and/or reading."""
        pass

    @abstractmethod
    def delete_odometer_event(self, event_id: int) -> None:
        """Delete an odometer event."""
        pass

    # Work session operations
    @abstractmethod
    def create_work_session(
        self, user_id: str, start: datetime, end: Optional[datetime] = None
    ) -> int:
        """Create a work session. Returns session ID."""
        pass

    @abstractmethod
    def get_work_session(self, session_id: int) -> Optional[WorkSession]:
        """Get work session by ID."""
        pass

    @abstractmethod
    def list_work_sessions(self, user_id: str) -> list[WorkSession]:
        """List a user's work sessions, oldest first."""
        pass

    @abstractmethod
    def update_work_session(
        self,
        session_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        clear_end: bool = False,
    ) -> None:
        """Update a work session. ``clear_end`` reopens it."""
        pass

    @abstractmethod
    def delete_work_session(self, session_id: int) -> None:
        """Delete a work session."""
        pass

    # Profile and goals
    @abstractmethod
    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's profile."""
        pass

    @abstractmethod
    def save_user_profile(self, profile: UserProfile) -> None:
        """Create or replace a user's profile."""
        pass

    @abstractmethod
    def get_goals(self, user_id: str) -> Optional[Goals]:
        """Get a user's stored goals."""
        pass

    @abstractmethod
    def save_goals(
        self, user_id: str, weekly_goal: Decimal, monthly_goal: Decimal
    ) -> None:
        """Create or replace a user's goals."""
        pass
