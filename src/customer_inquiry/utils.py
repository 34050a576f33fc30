"""
Utility functions for customer data parsing and display formatting.

Provides helpers for:
- Customer number validation
- Date parsing (ISO, legacy numeric YYYYMMDD and m/d/y)
- Zip code, phone number, currency and date formatting

All formatters are total: absent or malformed input yields an empty
string (or passes through unchanged where noted), never "None".
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from customer_inquiry.errors import ValidationError

MIN_CUSTOMER_NUMBER = 1
MAX_CUSTOMER_NUMBER = 99999

REQUIRED_MESSAGE = "Customer number required"
NUMERIC_MESSAGE = "Customer number must be numeric"
RANGE_MESSAGE = (
    f"Customer number must be between {MIN_CUSTOMER_NUMBER} and {MAX_CUSTOMER_NUMBER}"
)

_INTEGER = re.compile(r"[+-]?\d+")
_CENTS = Decimal("0.01")


def parse_customer_number(raw: Any) -> int:
    """
    Parse and validate raw form input as a customer number.

    Args:
        raw: Value from the number field (usually a string, may be None).

    Returns:
        The customer number as an int in [1, 99999].

    Raises:
        ValidationError: If the input is empty, non-numeric or out of range.
    """
    if isinstance(raw, bool):
        raise ValidationError(NUMERIC_MESSAGE)
    if isinstance(raw, int):
        number = raw
    else:
        text = str(raw).strip() if raw is not None else ""
        if not text:
            raise ValidationError(REQUIRED_MESSAGE)
        if not _INTEGER.fullmatch(text):
            raise ValidationError(NUMERIC_MESSAGE)
        number = int(text)
    if not MIN_CUSTOMER_NUMBER <= number <= MAX_CUSTOMER_NUMBER:
        raise ValidationError(RANGE_MESSAGE)
    return number


def display_text(value: Any) -> str:
    """Return value as display text, with None rendered as an empty string."""
    if value is None:
        return ""
    return str(value)


def to_decimal(value: Any) -> Decimal | None:
    """
    Convert a numeric value to Decimal.

    Floats go through str() so 1500.5 becomes Decimal("1500.5") rather than
    its binary expansion.

    Returns:
        Decimal, or None if the value is absent or not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not result.is_finite():
        return None
    return result


def parse_date(value: Any) -> date | None:
    """
    Parse a date from the formats the customer backend is known to send.

    Args:
        value: ISO string ("2024-01-15" or full timestamp), legacy numeric
            YYYYMMDD (20240115 or "20240115"), m/d/y string, date or datetime.

    Returns:
        date if parsing succeeds, None otherwise.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # Legacy numeric YYYYMMDD
    if len(text) == 8 and text.isdigit():
        try:
            return datetime.strptime(text, "%Y%m%d").date()
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            pass

    return None


def format_date(value: Any) -> str:
    """Format a date as a US short date, e.g. "1/15/2024"."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def format_zip(value: Any, fixed_width: bool = False) -> str:
    """
    Format a zip code for display.

    Args:
        value: Zip code as int or string.
        fixed_width: Zero-pad numeric zips to 5 digits (legacy rendering).

    Returns:
        The zip code, padded only when fixed_width is set.
    """
    if value is None or isinstance(value, bool):
        return ""
    text = str(value).strip()
    if fixed_width and text.isdigit() and len(text) < 5:
        return text.zfill(5)
    return text


def format_phone(value: Any) -> str:
    """
    Format a 10 digit phone number as "(217) 555-0100".

    Values that are not exactly 10 digits pass through unchanged.
    """
    if value is None or isinstance(value, bool):
        return ""
    text = str(value).strip()
    if len(text) == 10 and text.isdigit():
        return f"({text[:3]}) {text[3:6]}-{text[6:]}"
    return text


def format_currency(value: Any, symbol: str = "$") -> str:
    """
    Format an amount with 2 fraction digits and thousands separators.

    Args:
        value: Amount as Decimal, int, float or numeric string.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string like "$1,234.56" or "-$1,234.56".
    """
    amount = to_decimal(value)
    if amount is None:
        return ""
    amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
