"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from moneybook.domain.errors import InvalidDateError

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Any) -> date:
    """Parse a strict ISO calendar date (YYYY-MM-DD).

    Args:
        value: date object or string

    Returns:
        Date object

    Raises:
        InvalidDateError: If the value is not a real YYYY-MM-DD date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value.strip()):
        raise InvalidDateError(f"Date must use the YYYY-MM-DD format, got {value!r}")
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Invalid calendar date '{value}'") from e


def parse_date(date_str: str) -> date:
    """Parse a filter date, allowing relative forms.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday" and "tomorrow".

    Raises:
        InvalidDateError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Could not parse date '{date_str}'") from e


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: this-month, this-year, this-week, last-month, last-year or last-week

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        InvalidDateError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)
    monday = today - timedelta(days=today.weekday())

    if period == "this-month":
        return (first_of_month, today)
    if period == "this-year":
        return (first_of_year, today)
    if period == "this-week":
        return (monday, today)
    if period == "last-month":
        return (first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1))
    if period == "last-year":
        return (first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1))
    if period == "last-week":
        return (monday - timedelta(days=7), monday - timedelta(days=1))

    raise InvalidDateError(
        f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
        "this-week, last-month, last-year, last-week"
    )
