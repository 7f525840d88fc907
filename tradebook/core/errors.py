"""
Error taxonomy for the trade analytics engine.

Row-level problems are recovered locally by the loaders; file-level problems
are raised to the caller.
"""


class TradebookError(Exception):
    """Base class for all engine errors."""


class MalformedRowError(TradebookError):
    """A single data row failed a required-field check."""

    def __init__(self, row_number: int, reason: str):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")


class InvalidDateError(TradebookError, ValueError):
    """A date string matched none of the accepted formats."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unable to parse date: {value!r}")


class InvalidFileStructureError(TradebookError):
    """The export does not have the expected top-level shape."""


class EmptyResultError(TradebookError):
    """The export parsed cleanly but produced no usable records."""
