"""
Utility functions for the trade analytics engine.
"""
from .helpers import (
    DATE_FORMATS,
    days_between,
    normalize_date,
    parse_date,
    parse_money,
    parse_optional_number,
    parse_quantity,
)

__all__ = [
    "DATE_FORMATS",
    "days_between",
    "normalize_date",
    "parse_date",
    "parse_money",
    "parse_optional_number",
    "parse_quantity",
]
