"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a second cycle opened while one is running."""


class DataError(DomainError):
    """Malformed or unparseable date or numeric value.

    Raised while normalizing records for a computation. Computations never
    substitute a default for the bad value.
    """


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def odometer_event_not_found(event_id: int) -> str:
    """Return message for missing odometer event."""
    return f"Odometer event {event_id} not found"


def work_session_not_found(session_id: int) -> str:
    """Return message for missing work session."""
    return f"Work session {session_id} not found"


def cycle_already_open(event_id: int, value: int) -> str:
    """Return message when an odometer cycle is still running."""
    return (
        f"An odometer cycle is already open (event {event_id} at {value} km). "
        "Close it before opening a new one."
    )


def session_already_running(session_id: int) -> str:
    """Return message when a work session is still in progress."""
    return (
        f"Work session {session_id} is still in progress. "
        "Stop it before starting a new one."
    )
