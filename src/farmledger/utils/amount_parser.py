"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

from farmledger.domain.errors import ValidationError

CENT = Decimal("0.01")
# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


def parse_amount(amount_str: str | int | float | Decimal, field_name: str = "amount") -> Decimal:
    """Parse a money or quantity value into a non-negative Decimal.

    Handles various formats:
    - "123.45"
    - "₱123.45" / "PHP 123.45"
    - "1,234.56"

    Invalid and negative input is rejected rather than coerced to zero.
    The result is rounded half-up to centavos.

    Args:
        amount_str: Amount string (numbers are accepted as-is)
        field_name: Field label used in error messages

    Returns:
        Decimal amount with two decimal places

    Raises:
        ValidationError: If the value cannot be parsed, is negative or too large
    """
    if isinstance(amount_str, bool):
        raise ValidationError(f"Invalid {field_name}: {amount_str!r}")

    if isinstance(amount_str, (int, Decimal)):
        amount = Decimal(amount_str)
    elif isinstance(amount_str, float):
        amount = Decimal(str(amount_str))
    else:
        if amount_str is None or not str(amount_str).strip():
            raise ValidationError(f"Empty {field_name}")

        cleaned = str(amount_str).strip()

        # Remove currency symbols and codes
        cleaned = re.sub(r"^(PHP|Php|php)\s*", "", cleaned)
        cleaned = re.sub(r"[₱$]", "", cleaned)

        # Remove thousands separators
        cleaned = cleaned.replace(",", "").strip()

        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise ValidationError(f"Could not parse {field_name} '{amount_str}'")

    if not amount.is_finite():
        raise ValidationError(f"Invalid {field_name}: {amount_str!r}")
    if amount < 0:
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} cannot be negative")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} is too large")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
