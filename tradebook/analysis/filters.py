"""
Filtering of the original record collections.

Every function returns a new list and leaves its input untouched. Period
filters re-derive the bucket from its key instead of trusting a stored
PeriodStats.trades list.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from tradebook.analysis.periods import period_bounds
from tradebook.core.errors import InvalidDateError
from tradebook.core.models import (
    ActionCategory,
    Granularity,
    NormalizedTransaction,
    Term,
    TradeRecord,
)


logger = logging.getLogger(__name__)


@dataclass
class TradeFilter:
    """Filter criteria for closed trades."""

    symbol: Optional[str] = None
    term: Optional[Term] = None
    start_date: Optional[date] = None  # Inclusive, on closed date
    end_date: Optional[date] = None  # Inclusive, on closed date

    def matches(self, trade: TradeRecord) -> bool:
        """Check if a trade matches all filter criteria."""
        if self.symbol and trade.symbol != self.symbol.upper():
            return False

        if self.term and trade.term != self.term:
            return False

        if self.start_date or self.end_date:
            try:
                closed = trade.closed_on
            except InvalidDateError:
                return False
            if self.start_date and closed < self.start_date:
                return False
            if self.end_date and closed > self.end_date:
                return False

        return True


@dataclass
class TransactionFilter:
    """Filter criteria for brokerage transactions."""

    symbol: Optional[str] = None
    action: Optional[str] = None
    category: Optional[ActionCategory] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def matches(self, tx: NormalizedTransaction) -> bool:
        """Check if a transaction matches all filter criteria."""
        if self.symbol and tx.symbol != self.symbol.upper():
            return False

        if self.action and tx.action != self.action:
            return False

        if self.category and tx.category != self.category:
            return False

        if self.start_date and tx.date < self.start_date:
            return False

        if self.end_date and tx.date > self.end_date:
            return False

        return True


def filter_trades(trades: Iterable[TradeRecord], criteria: TradeFilter) -> list[TradeRecord]:
    filtered = [t for t in trades if criteria.matches(t)]
    logger.debug(f"Filtered to {len(filtered)} trades")
    return filtered


def filter_transactions(
    transactions: Iterable[NormalizedTransaction], criteria: TransactionFilter
) -> list[NormalizedTransaction]:
    filtered = [tx for tx in transactions if criteria.matches(tx)]
    logger.debug(f"Filtered to {len(filtered)} transactions")
    return filtered


def filter_by_symbol(records: Iterable, symbol: str) -> list:
    """Trades or transactions for one symbol (case-insensitive)."""
    wanted = symbol.strip().upper()
    return [r for r in records if r.symbol == wanted]


def filter_by_action(
    transactions: Iterable[NormalizedTransaction], action: str
) -> list[NormalizedTransaction]:
    return filter_transactions(transactions, TransactionFilter(action=action))


def filter_by_category(
    transactions: Iterable[NormalizedTransaction], category: ActionCategory | str
) -> list[NormalizedTransaction]:
    return filter_transactions(transactions, TransactionFilter(category=ActionCategory(category)))


def get_period_trades(
    trades: Iterable[TradeRecord], period_key: str, granularity: Granularity | str
) -> list[TradeRecord]:
    """
    Trades whose closed date falls inside the period identified by period_key.

    Args:
        trades: The original, unfiltered trades.
        period_key: A PeriodStats.period_key (the bucket's start date).
        granularity: The granularity the key was produced with.

    Returns:
        Matching trades; an empty list for a malformed key.
    """
    granularity = Granularity(granularity)
    try:
        start, end = period_bounds(period_key, granularity)
    except InvalidDateError:
        logger.warning(f"Invalid period key: {period_key!r}")
        return []

    return filter_trades(trades, TradeFilter(start_date=start, end_date=end))


def to_dataframe(records: Iterable) -> pd.DataFrame:
    """
    Convert records or result objects to a pandas DataFrame.

    Args:
        records: Objects exposing to_dict().

    Returns:
        DataFrame with one row per record (empty if there are none).
    """
    rows = [r.to_dict() for r in records]
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows)


def get_unique_symbols(records: Iterable) -> list[str]:
    return sorted({r.symbol for r in records if r.symbol})


def get_unique_actions(transactions: Iterable[NormalizedTransaction]) -> list[str]:
    return sorted({tx.action for tx in transactions})
