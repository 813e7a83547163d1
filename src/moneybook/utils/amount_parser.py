"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from moneybook.domain.errors import InvalidAmountError

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("1e10")
PLAIN_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


def parse_amount(value: Any) -> Decimal:
    """Parse a JSON amount into a Decimal rounded to cents.

    Strings are accepted only as plain decimals such as "123.45" or "-7";
    currency symbols, thousands separators and exponents are rejected.

    Args:
        value: int, float, Decimal or string amount

    Returns:
        Decimal amount quantized to two decimal places

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    # bool is an int subclass but never a meaningful amount
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = _parse_amount_string(value)
    else:
        raise InvalidAmountError(f"Amount must be a number, got {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    # Numeric(12, 2) column
    if abs(amount) >= MAX_AMOUNT:
        raise InvalidAmountError(f"Amount {value!r} is out of range")

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _parse_amount_string(amount_str: str) -> Decimal:
    text = amount_str.strip()
    if not PLAIN_DECIMAL.fullmatch(text):
        raise InvalidAmountError(f"Amount must be a plain decimal number, got {amount_str!r}")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Could not parse amount {amount_str!r}") from e


def require_non_zero(amount: Decimal) -> Decimal:
    """Reject amounts that round to zero."""
    if amount == 0:
        raise InvalidAmountError("Amount must be non-zero")
    return amount


def require_positive(amount: Decimal) -> Decimal:
    """Reject amounts that are zero or negative."""
    if amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    return amount
