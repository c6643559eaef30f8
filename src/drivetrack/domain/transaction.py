"""Transaction domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from drivetrack.database.base import Database
from drivetrack.domain import errors
from drivetrack.domain.entities import Period, Transaction as TransactionEntity, TransactionType
from drivetrack.domain.errors import NotFoundError, ValidationError


def _validate_type(type) -> TransactionType:
    try:
        return TransactionType(type)
    except ValueError:
        raise ValidationError(
            f"Invalid transaction type '{type}'. Use 'income' or 'expense'."
        )


def _validate_value(value: Decimal) -> None:
    if value < 0:
        raise ValidationError("Transaction value must not be negative")


def _validate_price(price_per_liter: Optional[Decimal]) -> None:
    if price_per_liter is not None and price_per_liter < 0:
        raise ValidationError("Price per liter must not be negative")


def _validate_category(category: str) -> str:
    category = (category or "").strip()
    if not category:
        raise ValidationError("Transaction category is required")
    return category


class TransactionService:
    """Service for managing income and expense transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a transaction.

        Args:
            user_id: Owning user
            type: Income or expense
            date: Transaction instant
            value: Non-negative amount
            category: Category name (e.g. "Uber", "Fuel")
            fuel_type: Optional fuel type for fuel purchases
            price_per_liter: Optional fuel price, used for fuel cost estimates
            subcategory: Optional subcategory
            observation: Optional free-text note

        Returns:
            Transaction ID

        Raises:
            ValidationError: If type, value, price or category is invalid
        """
        txn_type = _validate_type(type)
        _validate_value(value)
        _validate_price(price_per_liter)
        category = _validate_category(category)

        return self.db.create_transaction(
            user_id=user_id,
            type=txn_type,
            date=date,
            value=value,
            category=category,
            fuel_type=fuel_type,
            price_per_liter=price_per_liter,
            subcategory=subcategory,
            observation=observation,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        user_id: str,
        period: Optional[Period] = None,
        type: Optional[TransactionType] = None,
    ) -> list[TransactionEntity]:
        """List transactions, optionally restricted to a period and type."""
        if period is None:
            transactions = self.db.list_transactions(user_id)
        else:
            transactions = self.db.list_transactions(
                user_id, start=period.start, end=period.end
            )
        if type is not None:
            txn_type = _validate_type(type)
            transactions = [t for t in transactions if t.type == txn_type]
        return transactions

    def update_transaction(
        self,
        transaction_id: int,
        type: Optional[TransactionType] = None,
        date: Optional[datetime] = None,
        value: Optional[Decimal] = None,
        category: Optional[str] = None,
        fuel_type: Optional[str] = None,
        price_per_liter: Optional[Decimal] = None,
        subcategory: Optional[str] = None,
        observation: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Only fields that are not None are changed.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If a new value is invalid
        """
        self.require_transaction(transaction_id)

        updates = {}
        if type is not None:
            updates["type"] = _validate_type(type)
        if date is not None:
            updates["date"] = date
        if value is not None:
            _validate_value(value)
            updates["value"] = value
        if category is not None:
            updates["category"] = _validate_category(category)
        if fuel_type is not None:
            updates["fuel_type"] = fuel_type
        if price_per_liter is not None:
            _validate_price(price_per_liter)
            updates["price_per_liter"] = price_per_liter
        if subcategory is not None:
            updates["subcategory"] = subcategory
        if observation is not None:
            updates["observation"] = observation

        if not updates:
            raise ValidationError("No fields to update")

        self.db.update_transaction(transaction_id, **updates)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)
