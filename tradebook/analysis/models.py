"""
Data models for trade and transaction analysis results.

Results are read-only projections of the parsed records: every model is
frozen and collection fields are tuples or read-only mappings.
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from tradebook.core.models import ActionCategory, Granularity, TradeRecord


@dataclass(frozen=True)
class PeriodStats:
    """Performance statistics for one calendar bucket of closed trades."""

    period: str
    period_key: str  # YYYY-MM-DD start date; used to re-select trades
    start_date: date
    end_date: date
    net_gain_loss: float
    trade_count: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    average_gain: float
    average_loss: float  # Positive magnitude
    trades: tuple[TradeRecord, ...] = ()

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "period_key": self.period_key,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "net_gain_loss": self.net_gain_loss,
            "trade_count": self.trade_count,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "win_rate": self.win_rate,
            "average_gain": self.average_gain,
            "average_loss": self.average_loss,
        }


@dataclass(frozen=True)
class PeriodAggregation:
    """Ordered period statistics at one granularity."""

    granularity: Granularity
    periods: tuple[PeriodStats, ...] = ()
    excluded_trades: int = 0

    @property
    def net_gain_loss(self) -> float:
        return sum(p.net_gain_loss for p in self.periods)

    def get(self, period_key: str) -> Optional[PeriodStats]:
        """Look up a period by its key."""
        for period in self.periods:
            if period.period_key == period_key:
                return period
        return None


@dataclass(frozen=True)
class TradeSummary:
    """Whole-dataset realized performance."""

    total_gain_loss: float = 0.0
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0  # Positive magnitude
    average_days_in_trade: float = 0.0
    largest_win_dollar: float = 0.0
    largest_win_percent: float = 0.0
    largest_loss_dollar: float = 0.0
    largest_loss_percent: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_gain_loss": self.total_gain_loss,
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "win_rate": self.win_rate,
            "average_win": self.average_win,
            "average_loss": self.average_loss,
            "average_days_in_trade": self.average_days_in_trade,
            "largest_win_dollar": self.largest_win_dollar,
            "largest_win_percent": self.largest_win_percent,
            "largest_loss_dollar": self.largest_loss_dollar,
            "largest_loss_percent": self.largest_loss_percent,
        }


@dataclass(frozen=True)
class TickerPerformance:
    ticker: str
    total_gain_loss: float
    trade_count: int

    def to_dict(self) -> dict:
        return {
            "ticker": self.ticker,
            "total_gain_loss": self.total_gain_loss,
            "trade_count": self.trade_count,
        }


@dataclass(frozen=True)
class CumulativeGain:
    date: date
    cumulative_gain: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "cumulative_gain": self.cumulative_gain}


@dataclass(frozen=True)
class TermDistribution:
    term: str
    gain_loss: float
    count: int

    def to_dict(self) -> dict:
        return {"term": self.term, "gain_loss": self.gain_loss, "count": self.count}


@dataclass(frozen=True)
class TransactionSummary:
    """Whole-dataset cash-flow summary of brokerage transactions."""

    total_transactions: int = 0
    total_volume: float = 0.0
    total_buy_volume: float = 0.0
    total_sell_volume: float = 0.0
    total_fees: float = 0.0
    net_cash_flow: float = 0.0
    unique_symbols: int = 0
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    action_breakdown: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict:
        return {
            "total_transactions": self.total_transactions,
            "total_volume": self.total_volume,
            "total_buy_volume": self.total_buy_volume,
            "total_sell_volume": self.total_sell_volume,
            "total_fees": self.total_fees,
            "net_cash_flow": self.net_cash_flow,
            "unique_symbols": self.unique_symbols,
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "action_breakdown": dict(self.action_breakdown),
        }


@dataclass(frozen=True)
class SymbolSummary:
    """Per-symbol transaction totals."""

    symbol: str
    description: str
    total_buy_quantity: float = 0.0
    total_sell_quantity: float = 0.0
    buy_amount: float = 0.0
    sell_amount: float = 0.0
    net_amount: float = 0.0
    total_fees: float = 0.0
    transaction_count: int = 0
    avg_buy_price: Optional[float] = None  # None when there were no buys
    avg_sell_price: Optional[float] = None  # None when there were no sells

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "description": self.description,
            "total_buy_quantity": self.total_buy_quantity,
            "total_sell_quantity": self.total_sell_quantity,
            "buy_amount": self.buy_amount,
            "sell_amount": self.sell_amount,
            "net_amount": self.net_amount,
            "total_fees": self.total_fees,
            "transaction_count": self.transaction_count,
            "avg_buy_price": self.avg_buy_price,
            "avg_sell_price": self.avg_sell_price,
        }


@dataclass(frozen=True)
class ActionSummary:
    action: str
    category: ActionCategory
    total_amount: float = 0.0
    total_fees: float = 0.0
    transaction_count: int = 0

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "category": self.category.value,
            "total_amount": self.total_amount,
            "total_fees": self.total_fees,
            "transaction_count": self.transaction_count,
        }


@dataclass(frozen=True)
class CategorySummary:
    category: ActionCategory
    total_amount: float = 0.0
    total_fees: float = 0.0
    transaction_count: int = 0
    actions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "total_amount": self.total_amount,
            "total_fees": self.total_fees,
            "transaction_count": self.transaction_count,
            "actions": list(self.actions),
        }


@dataclass(frozen=True)
class DailyVolume:
    date: date
    buy_volume: float = 0.0
    sell_volume: float = 0.0
    transaction_count: int = 0

    @property
    def net_volume(self) -> float:
        return self.sell_volume - self.buy_volume

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "buy_volume": self.buy_volume,
            "sell_volume": self.sell_volume,
            "net_volume": self.net_volume,
            "transaction_count": self.transaction_count,
        }
