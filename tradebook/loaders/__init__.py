"""
Loaders for brokerage export formats.
"""
from .base import BaseLoader, ParseResult, RowSkipped
from .brokerage_json import BrokerageTransactionsLoader
from .imports import (
    ImportOutcome,
    import_brokerage_transactions,
    import_realized_gains,
    run_import,
)
from .realized_gains import RealizedGainsLoader

__all__ = [
    "BaseLoader",
    "ParseResult",
    "RowSkipped",
    "BrokerageTransactionsLoader",
    "RealizedGainsLoader",
    "ImportOutcome",
    "import_brokerage_transactions",
    "import_realized_gains",
    "run_import",
]
