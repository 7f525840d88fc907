"""
Core functionality for the trade analytics engine.
"""
from .errors import (
    EmptyResultError,
    InvalidDateError,
    InvalidFileStructureError,
    MalformedRowError,
    TradebookError,
)
from .models import (
    ActionCategory,
    Granularity,
    NormalizedTransaction,
    OpenPosition,
    PositionSide,
    RawTransaction,
    Term,
    TradeRecord,
    TradeSide,
    TransactionFile,
    get_action_category,
)
from .config import Config, load_config

__all__ = [
    "EmptyResultError",
    "InvalidDateError",
    "InvalidFileStructureError",
    "MalformedRowError",
    "TradebookError",
    "ActionCategory",
    "Granularity",
    "NormalizedTransaction",
    "OpenPosition",
    "PositionSide",
    "RawTransaction",
    "Term",
    "TradeRecord",
    "TradeSide",
    "TransactionFile",
    "get_action_category",
    "Config",
    "load_config",
]
