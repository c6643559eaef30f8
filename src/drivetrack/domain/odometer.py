"""Odometer domain service."""

import uuid
from datetime import datetime
from typing import Optional

from drivetrack.database.base import Database
from drivetrack.domain import errors
from drivetrack.domain.cycles import find_dangling, reconcile_cycles
from drivetrack.domain.entities import Cycle, OdometerEvent, OdometerEventType
from drivetrack.domain.errors import ConflictError, NotFoundError, ValidationError
from drivetrack.domain.timezone import ensure_instant
from drivetrack.utils.logger import get_logger

logger = get_logger(__name__)


def _validate_reading(value: int) -> None:
    if value < 0:
        raise ValidationError("Odometer reading must not be negative")


class OdometerService:
    """Service for recording odometer cycles."""

    def __init__(self, db: Database):
        """Initialize odometer service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_events(self, user_id: str) -> list[OdometerEvent]:
        """List a user's odometer events, oldest first."""
        return self.db.list_odometer_events(user_id)

    def cycles(self, user_id: str) -> list[Cycle]:
        """Reconciled cycles for a user."""
        return reconcile_cycles(self.list_events(user_id))

    def current_cycle(self, user_id: str) -> Optional[Cycle]:
        """The most recent cycle that is still open, if any."""
        dangling = find_dangling(self.cycles(user_id))
        return dangling[-1] if dangling else None

    def open_cycle(self, user_id: str, value: int, date: datetime) -> int:
        """Record the odometer reading that starts a cycle.

        Args:
            user_id: Owning user
            value: Odometer reading in km
            date: Reading instant

        Returns:
            Event ID

        Raises:
            ValidationError: If the reading is negative
            ConflictError: If another cycle is still open
        """
        _validate_reading(value)
        current = self.current_cycle(user_id)
        if current is not None:
            raise ConflictError(errors.cycle_already_open(current.open.id, current.open.value))

        pair_id = uuid.uuid4().hex
        logger.debug("Opening cycle %s at %s km", pair_id, value)
        return self.db.create_odometer_event(
            user_id=user_id,
            type=OdometerEventType.OPEN,
            date=date,
            value=value,
            pair_id=pair_id,
        )

    def close_cycle(self, user_id: str, value: int, date: datetime) -> int:
        """Record the odometer reading that ends the open cycle.

        Returns:
            Event ID

        Raises:
            ValidationError: If the reading or date precede the open event
            ConflictError: If no cycle is open
        """
        _validate_reading(value)
        current = self.current_cycle(user_id)
        if current is None:
            raise ConflictError("No odometer cycle is open")

        if value < current.open.value:
            raise ValidationError(
                f"Closing reading {value} km is below the opening reading "
                f"{current.open.value} km"
            )
        if ensure_instant(date) < ensure_instant(current.open.date):
            raise ValidationError("Closing time is before the cycle was opened")

        # An open without a pair_id is referenced by its own id
        pair_id = current.open.pair_id or str(current.open.id)
        return self.db.create_odometer_event(
            user_id=user_id,
            type=OdometerEventType.CLOSE,
            date=date,
            value=value,
            pair_id=pair_id,
        )

    def require_event(self, event_id: int) -> OdometerEvent:
        """Get odometer event by ID or raise NotFoundError."""
        event = self.db.get_odometer_event(event_id)
        if event is None:
            raise NotFoundError(errors.odometer_event_not_found(event_id))
        return event

    def update_event(
        self,
        event_id: int,
        value: Optional[int] = None,
        date: Optional[datetime] = None,
    ) -> None:
        """Correct an odometer reading and/or its time.

        Raises:
            NotFoundError: If the event doesn't exist
            ValidationError: If nothing is given or the reading is negative
        """
        self.require_event(event_id)
        if value is None and date is None:
            raise ValidationError("No fields to update")
        if value is not None:
            _validate_reading(value)
        self.db.update_odometer_event(event_id, date=date, value=value)

    def delete_event(self, event_id: int) -> None:
        """Delete an odometer event.

        Raises:
            NotFoundError: If the event doesn't exist
        """
        self.require_event(event_id)
        self.db.delete_odometer_event(event_id)
