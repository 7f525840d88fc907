"""
Utility functions for the trade analytics engine.

Contains helpers for parsing dates and the numeric formats found in brokerage
exports.
"""
import logging
import re
from datetime import date, datetime
from typing import Optional

import pandas as pd

from tradebook.core.errors import InvalidDateError


logger = logging.getLogger(__name__)

# Tried in order; the first format that yields a valid calendar date wins.
# %y follows Python's pivot: 00-68 -> 2000s, 69-99 -> 1900s.
DATE_FORMATS = [
    "%Y-%m-%d",  # 2024-03-15
    "%m/%d/%Y",  # 3/15/2024
    "%m/%d/%y",  # 3/15/24
]

_CURRENCY_CHARS = re.compile(r"[$£€%,\"\s]")


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_date(value: str, formats: Optional[list[str]] = None) -> date:
    """
    Parse a free-form date string into a calendar date.

    Args:
        value: The date string to parse.
        formats: Formats to try. Defaults to DATE_FORMATS.

    Returns:
        The parsed date.

    Raises:
        InvalidDateError: If no format matches.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_missing(value):
        raise InvalidDateError(value)

    text = str(value).strip()
    if not text:
        raise InvalidDateError(value)

    for fmt in formats or DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise InvalidDateError(value)


def parse_date(value: str, formats: Optional[list[str]] = None) -> Optional[date]:
    """
    Lenient variant of normalize_date.

    Returns:
        Parsed date or None if parsing fails.
    """
    try:
        return normalize_date(value, formats)
    except InvalidDateError:
        logger.warning(f"Could not parse date: {value}")
        return None


def parse_money(value: str | float) -> float:
    """
    Parse a monetary value string into a float.

    Handles currency symbols, percent signs and thousands separators. A
    leading minus (before or after the currency symbol) or accounting-style
    parentheses make the value negative.

    Args:
        value: The monetary value to parse (e.g., "$1,234.56", "(1,234.56)", "-$500").

    Returns:
        Parsed float value, or 0.0 if parsing fails.
    """
    if _is_missing(value):
        return 0.0

    if isinstance(value, (int, float)):
        return float(value)

    value = str(value).strip()

    if value.lower() in ("", "n/a", "--"):
        return 0.0

    cleaned = _CURRENCY_CHARS.sub("", value)
    is_negative = False

    # Accounting style: (1,234.56)
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1]
    if cleaned.startswith("-"):
        is_negative = True
        cleaned = cleaned[1:]

    try:
        result = float(cleaned)
        return -abs(result) if is_negative else result
    except ValueError:
        logger.warning(f"Could not parse monetary value: {value}")
        return 0.0


def parse_quantity(value: str | float) -> float:
    """
    Parse a quantity/units value.

    Args:
        value: The quantity to parse (e.g., "1,200").

    Returns:
        Parsed float value, or 0.0 if parsing fails.
    """
    if _is_missing(value):
        return 0.0

    if isinstance(value, (int, float)):
        return float(value)

    value = str(value).strip()

    if value.lower() in ("", "n/a"):
        return 0.0

    cleaned = value.replace(",", "").replace('"', "")

    try:
        return float(cleaned)
    except ValueError:
        logger.warning(f"Could not parse quantity: {value}")
        return 0.0


def parse_optional_number(value: str | float) -> Optional[float]:
    """
    Parse a quantity or price that may legitimately be absent.

    Blank and unparsable values return None so callers can tell "not
    reported" apart from zero.
    """
    if _is_missing(value):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    value = str(value).strip()
    if not value:
        return None

    cleaned = _CURRENCY_CHARS.sub("", value)

    try:
        return float(cleaned)
    except ValueError:
        logger.debug(f"Treating unparsable number as missing: {value}")
        return None


def days_between(start: date, end: date) -> int:
    """Whole days from start to end, clamped at zero."""
    return max(0, (end - start).days)
