"""Text rendering helpers shared by CLI commands."""

from datetime import date
from decimal import Decimal
from typing import Optional


def format_currency(value: Optional[Decimal]) -> str:
    """Format an amount in Philippine pesos."""
    amount = value if value is not None else Decimal("0")
    sign = "-" if amount < 0 else ""
    return f"{sign}₱{abs(amount):,.2f}"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"


def format_long_date(value: date) -> str:
    """Format a date like 'January 15, 2025'."""
    return f"{value:%B} {value.day}, {value.year}"
