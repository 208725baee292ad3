"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from daybook.domain.errors import ValidationError
from daybook.utils.formatting import is_storable_amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "4.50"
    - "$4.50"
    - "-$4.50"
    - "Rp 53,100"
    - "-Rp 53100"
    - "(12.00)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"(?i)rp|[$€£¥]", "", amount_str)

    # Remove thousands separators and inner whitespace
    amount_str = amount_str.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    if not is_storable_amount(amount):
        raise ValidationError(f"Amount '{amount_str}' is too large")

    if is_negative:
        amount = -amount
    return amount
