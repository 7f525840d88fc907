"""
Trade and transaction analysis package.

Provides:
- Open position reconciliation (weighted-average cost)
- Monthly/weekly period aggregation of closed trades
- Whole-dataset, per-symbol, per-action and daily summaries
- Non-mutating filters over the original records
"""

from tradebook.analysis.models import (
    ActionSummary,
    CategorySummary,
    CumulativeGain,
    DailyVolume,
    PeriodAggregation,
    PeriodStats,
    SymbolSummary,
    TermDistribution,
    TickerPerformance,
    TradeSummary,
    TransactionSummary,
)
from tradebook.analysis.positions import PositionReconciler, calculate_open_positions
from tradebook.analysis.periods import (
    aggregate_by_month,
    aggregate_by_period,
    aggregate_by_week,
    calculate_period_stats,
    period_bounds,
    period_key,
)
from tradebook.analysis.summary import (
    calculate_action_summaries,
    calculate_category_summaries,
    calculate_cumulative_gains,
    calculate_daily_volume,
    calculate_symbol_summaries,
    calculate_term_distribution,
    calculate_ticker_performance,
    calculate_trade_summary,
    calculate_transaction_summary,
)
from tradebook.analysis.filters import (
    TradeFilter,
    TransactionFilter,
    filter_by_action,
    filter_by_category,
    filter_by_symbol,
    filter_trades,
    filter_transactions,
    get_period_trades,
    get_unique_actions,
    get_unique_symbols,
    to_dataframe,
)

__all__ = [
    "ActionSummary",
    "CategorySummary",
    "CumulativeGain",
    "DailyVolume",
    "PeriodAggregation",
    "PeriodStats",
    "SymbolSummary",
    "TermDistribution",
    "TickerPerformance",
    "TradeSummary",
    "TransactionSummary",
    "PositionReconciler",
    "calculate_open_positions",
    "aggregate_by_month",
    "aggregate_by_period",
    "aggregate_by_week",
    "calculate_period_stats",
    "period_bounds",
    "period_key",
    "calculate_action_summaries",
    "calculate_category_summaries",
    "calculate_cumulative_gains",
    "calculate_daily_volume",
    "calculate_symbol_summaries",
    "calculate_term_distribution",
    "calculate_ticker_performance",
    "calculate_trade_summary",
    "calculate_transaction_summary",
    "TradeFilter",
    "TransactionFilter",
    "filter_by_action",
    "filter_by_category",
    "filter_by_symbol",
    "filter_trades",
    "filter_transactions",
    "get_period_trades",
    "get_unique_actions",
    "get_unique_symbols",
    "to_dataframe",
]
