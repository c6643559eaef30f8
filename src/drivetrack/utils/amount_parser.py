"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "R$123.45"
    - "R$ 1,234.56"
    - "$123.45"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"R\$|[$€£]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_reading(reading_str: str) -> int:
    """Parse an odometer reading in whole kilometers.

    Accepts thousands separators and a trailing "km" ("12,345 km").

    Raises:
        ValueError: If the reading is not a whole non-negative number
    """
    text = (reading_str or "").strip().lower()
    text = re.sub(r"\s*km$", "", text).replace(",", "").strip()
    if not text.isdigit():
        raise ValueError(f"Could not parse odometer reading '{reading_str}'")
    return int(text)
