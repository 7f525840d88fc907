"""
Tradebook

A Python package for analysing brokerage exports: realized gain/loss CSV
files and brokerage transactions JSON files.

Example usage:
    from tradebook import (
        import_realized_gains,
        aggregate_by_month,
        calculate_trade_summary,
    )

    outcome = import_realized_gains(Path("realized.csv").read_text())
    if not outcome.success:
        print(outcome.error)

    trades = outcome.records
    for period in aggregate_by_month(trades).periods:
        print(period.period, period.net_gain_loss, period.win_rate)
    print(calculate_trade_summary(trades))
"""

from tradebook.core import (
    ActionCategory,
    Config,
    EmptyResultError,
    Granularity,
    InvalidDateError,
    InvalidFileStructureError,
    MalformedRowError,
    NormalizedTransaction,
    OpenPosition,
    PositionSide,
    RawTransaction,
    Term,
    TradebookError,
    TradeRecord,
    TradeSide,
    TransactionFile,
    get_action_category,
    load_config,
)
from tradebook.utils import normalize_date, parse_date, parse_money, parse_quantity
from tradebook.loaders import (
    BrokerageTransactionsLoader,
    ImportOutcome,
    ParseResult,
    RealizedGainsLoader,
    RowSkipped,
    import_brokerage_transactions,
    import_realized_gains,
)
from tradebook.analysis import (
    PeriodStats,
    aggregate_by_month,
    aggregate_by_period,
    aggregate_by_week,
    calculate_action_summaries,
    calculate_category_summaries,
    calculate_daily_volume,
    calculate_open_positions,
    calculate_symbol_summaries,
    calculate_trade_summary,
    calculate_transaction_summary,
    get_period_trades,
)


__version__ = "0.1.0"

__all__ = [
    # Models
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
    # Errors
    "TradebookError",
    "EmptyResultError",
    "InvalidDateError",
    "InvalidFileStructureError",
    "MalformedRowError",
    # Parsing
    "normalize_date",
    "parse_date",
    "parse_money",
    "parse_quantity",
    # Loaders
    "BrokerageTransactionsLoader",
    "ImportOutcome",
    "ParseResult",
    "RealizedGainsLoader",
    "RowSkipped",
    "import_brokerage_transactions",
    "import_realized_gains",
    # Analysis
    "PeriodStats",
    "aggregate_by_month",
    "aggregate_by_period",
    "aggregate_by_week",
    "calculate_action_summaries",
    "calculate_category_summaries",
    "calculate_daily_volume",
    "calculate_open_positions",
    "calculate_symbol_summaries",
    "calculate_trade_summary",
    "calculate_transaction_summary",
    "get_period_trades",
    # Config
    "Config",
    "load_config",
]
