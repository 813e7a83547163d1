"""Utility functions for moneybook."""

from moneybook.utils.date_parser import parse_date, parse_iso_date, get_date_range
from moneybook.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_iso_date", "get_date_range", "parse_amount"]
