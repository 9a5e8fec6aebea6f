"""Utility functions for farmledger."""

from farmledger.utils.date_parser import parse_date
from farmledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
