"""Work session domain service."""

from datetime import datetime
from typing import Optional

from drivetrack.database.base import Database
from drivetrack.domain import errors
from drivetrack.domain.entities import ProcessedSegment, WorkSession
from drivetrack.domain.errors import ConflictError, NotFoundError, ValidationError
from drivetrack.domain.timezone import ensure_instant
from drivetrack.domain.work_hours import attribute_working_days


def _validate_interval(start: datetime, end: Optional[datetime]) -> None:
    if end is not None and ensure_instant(end) <= ensure_instant(start):
        raise ValidationError("Work session must end after it starts")


class WorkSessionService:
    """Service for recording work-hour sessions."""

    def __init__(self, db: Database):
        """Initialize work session service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_sessions(self, user_id: str) -> list[WorkSession]:
        """List a user's work sessions, oldest first."""
        return self.db.list_work_sessions(user_id)

    def segments(self, user_id: str) -> list[ProcessedSegment]:
        """Finished sessions booked to their working days."""
        return attribute_working_days(self.list_sessions(user_id))

    def current_session(self, user_id: str) -> Optional[WorkSession]:
        """The session in progress, if any."""
        running = [s for s in self.list_sessions(user_id) if s.in_progress]
        return running[-1] if running else None

    def start_session(self, user_id: str, start: datetime) -> int:
        """Start a work session.

        Returns:
            Session ID

        Raises:
            ConflictError: If a session is already in progress
        """
        current = self.current_session(user_id)
        if current is not None:
            raise ConflictError(errors.session_already_running(current.id))
        return self.db.create_work_session(user_id=user_id, start=start)

    def end_session(self, user_id: str, end: datetime) -> WorkSession:
        """Stop the session in progress.

        Returns:
            The finished session

        Raises:
            ConflictError: If no session is in progress
            ValidationError: If ``end`` is not after the session start
        """
        current = self.current_session(user_id)
        if current is None:
            raise ConflictError("No work session is in progress")
        _validate_interval(current.start, end)
        self.db.update_work_session(current.id, end=end)
        return self.require_session(current.id)

    def add_session(self, user_id: str, start: datetime, end: datetime) -> int:
        """Record a finished session after the fact.

        Raises:
            ValidationError: If ``end`` is not after ``start``
        """
        _validate_interval(start, end)
        return self.db.create_work_session(user_id=user_id, start=start, end=end)

    def require_session(self, session_id: int) -> WorkSession:
        """Get work session by ID or raise NotFoundError."""
        work_session = self.db.get_work_session(session_id)
        if work_session is None:
            raise NotFoundError(errors.work_session_not_found(session_id))
        return work_session

    def update_session(
        self,
        session_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> None:
        """Correct a session's start and/or end.

        Raises:
            NotFoundError: If the session doesn't exist
            ValidationError: If nothing is given or the result ends before it starts
        """
        existing = self.require_session(session_id)
        if start is None and end is None:
            raise ValidationError("No fields to update")
        _validate_interval(
            start if start is not None else existing.start,
            end if end is not None else existing.end,
        )
        self.db.update_work_session(session_id, start=start, end=end)

    def delete_session(self, session_id: int) -> None:
        """Delete a work session.

        Raises:
            NotFoundError: If the session doesn't exist
        """
        self.require_session(session_id)
        self.db.delete_work_session(session_id)
