"""
Summary statistics over closed trades and brokerage transactions.

Every function here is a pure reduction over its input. The transaction
summaries share one notion of cash flow (the signed amount), so the
per-symbol, per-action and per-category totals all add up to the
whole-dataset net cash flow.
"""

import logging
from collections import defaultdict
from datetime import date
from types import MappingProxyType
from typing import Iterable, Optional

from tradebook.analysis.models import (
    ActionSummary,
    CategorySummary,
    CumulativeGain,
    DailyVolume,
    SymbolSummary,
    TermDistribution,
    TickerPerformance,
    TradeSummary,
    TransactionSummary,
)
from tradebook.core.errors import InvalidDateError
from tradebook.core.models import ActionCategory, NormalizedTransaction, Term, TradeRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Closed trades
# ---------------------------------------------------------------------------


def calculate_trade_summary(trades: Iterable[TradeRecord]) -> TradeSummary:
    """
    Whole-dataset realized performance.

    Average win and average loss are means over the winning and losing
    subsets; each is 0 when its subset is empty. average_loss is a positive
    magnitude while largest_loss_dollar keeps its sign.
    """
    trades = list(trades)
    if not trades:
        return TradeSummary()

    winners = [t for t in trades if t.gain_loss > 0]
    losers = [t for t in trades if t.gain_loss < 0]

    total_wins = sum(t.gain_loss for t in winners)
    total_losses = abs(sum(t.gain_loss for t in losers))

    largest_win = max(winners, key=lambda t: t.gain_loss, default=None)
    largest_loss = min(losers, key=lambda t: t.gain_loss, default=None)

    return TradeSummary(
        total_gain_loss=sum(t.gain_loss for t in trades),
        total_trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=len(winners) / len(trades) * 100,
        average_win=total_wins / len(winners) if winners else 0.0,
        average_loss=total_losses / len(losers) if losers else 0.0,
        average_days_in_trade=sum(t.days_in_trade for t in trades) / len(trades),
        largest_win_dollar=largest_win.gain_loss if largest_win else 0.0,
        largest_win_percent=largest_win.gain_loss_percent if largest_win else 0.0,
        largest_loss_dollar=largest_loss.gain_loss if largest_loss else 0.0,
        largest_loss_percent=largest_loss.gain_loss_percent if largest_loss else 0.0,
    )


def calculate_ticker_performance(trades: Iterable[TradeRecord]) -> list[TickerPerformance]:
    """Realized gain per symbol, best first."""
    totals: dict[str, list] = defaultdict(lambda: [0.0, 0])
    for trade in trades:
        totals[trade.symbol][0] += trade.gain_loss
        totals[trade.symbol][1] += 1

    results = [
        TickerPerformance(ticker=symbol, total_gain_loss=gain, trade_count=count)
        for symbol, (gain, count) in totals.items()
    ]
    results.sort(key=lambda r: (-r.total_gain_loss, r.ticker))
    return results


def calculate_cumulative_gains(trades: Iterable[TradeRecord]) -> list[CumulativeGain]:
    """Running realized gain ordered by closed date. Undated trades are left out."""
    dated = []
    for trade in trades:
        try:
            dated.append((trade.closed_on, trade))
        except InvalidDateError:
            logger.warning(f"Skipping trade {trade.symbol} with invalid closed date {trade.closed_date!r}")

    dated.sort(key=lambda pair: pair[0])

    running = 0.0
    points = []
    for closed, trade in dated:
        running += trade.gain_loss
        points.append(CumulativeGain(date=closed, cumulative_gain=running))
    return points


def calculate_term_distribution(trades: Iterable[TradeRecord]) -> list[TermDistribution]:
    """Gain/loss and trade count per holding term (short term first)."""
    totals: dict[Term, list] = {}
    for trade in trades:
        entry = totals.setdefault(trade.term, [0.0, 0])
        entry[0] += trade.gain_loss
        entry[1] += 1

    return [
        TermDistribution(term=term.value, gain_loss=totals[term][0], count=totals[term][1])
        for term in Term
        if term in totals
    ]


# ---------------------------------------------------------------------------
# Brokerage transactions
# ---------------------------------------------------------------------------


def calculate_transaction_summary(
    transactions: Iterable[NormalizedTransaction],
) -> TransactionSummary:
    """Totals, volumes and date range across all transactions."""
    transactions = list(transactions)
    if not transactions:
        return TransactionSummary()

    breakdown: dict[str, int] = defaultdict(int)
    totals: dict[str, float] = defaultdict(float)

    for tx in transactions:
        breakdown[tx.action] += 1
        volume = abs(tx.amount)
        totals["volume"] += volume
        if tx.is_buy:
            totals["buy_volume"] += volume
        elif tx.is_sell:
            totals["sell_volume"] += volume
        totals["fees"] += tx.fees
        totals["net_cash_flow"] += tx.amount

    return TransactionSummary(
        total_transactions=len(transactions),
        total_volume=totals["volume"],
        total_buy_volume=totals["buy_volume"],
        total_sell_volume=totals["sell_volume"],
        total_fees=totals["fees"],
        net_cash_flow=totals["net_cash_flow"],
        unique_symbols=len({tx.symbol for tx in transactions if tx.symbol}),
        date_from=min(tx.date for tx in transactions),
        date_to=max(tx.date for tx in transactions),
        action_breakdown=MappingProxyType(dict(breakdown)),
    )


def calculate_symbol_summaries(
    transactions: Iterable[NormalizedTransaction],
) -> list[SymbolSummary]:
    """
    Per-symbol totals, most active first.

    Transactions without a symbol are grouped under "[<action>]". Average
    buy/sell prices are side amount / side quantity and stay None when the
    side has no transactions, so "never sold" differs from "sold at $0".
    """
    descriptions: dict[str, str] = {}
    totals: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))

    for tx in transactions:
        key = tx.symbol or f"[{tx.action}]"
        descriptions.setdefault(key, tx.description)
        entry = totals[key]

        entry["count"] += 1
        entry["fees"] += tx.fees
        entry["net_amount"] += tx.amount

        quantity = abs(tx.quantity) if tx.quantity else 0.0
        if tx.is_buy:
            entry["buy_quantity"] += quantity
            entry["buy_amount"] += abs(tx.amount)
            entry["buys"] += 1
        elif tx.is_sell:
            entry["sell_quantity"] += quantity
            entry["sell_amount"] += abs(tx.amount)
            entry["sells"] += 1
        elif tx.amount > 0:
            entry["sell_amount"] += tx.amount  # Income
        else:
            entry["buy_amount"] += abs(tx.amount)  # Expense

    summaries = [
        SymbolSummary(
            symbol=key,
            description=descriptions[key],
            total_buy_quantity=entry["buy_quantity"],
            total_sell_quantity=entry["sell_quantity"],
            buy_amount=entry["buy_amount"],
            sell_amount=entry["sell_amount"],
            net_amount=entry["net_amount"],
            total_fees=entry["fees"],
            transaction_count=int(entry["count"]),
            avg_buy_price=_average_price(entry["buys"], entry["buy_amount"], entry["buy_quantity"]),
            avg_sell_price=_average_price(entry["sells"], entry["sell_amount"], entry["sell_quantity"]),
        )
        for key, entry in totals.items()
    ]
    return sorted(summaries, key=lambda s: (-s.transaction_count, s.symbol))


def _average_price(count: float, amount: float, quantity: float) -> Optional[float]:
    if count and quantity > 0:
        return amount / quantity
    return None


def calculate_action_summaries(
    transactions: Iterable[NormalizedTransaction],
) -> list[ActionSummary]:
    """Amount, fees and count per action label, most frequent first."""
    totals: dict[str, list] = {}
    for tx in transactions:
        entry = totals.setdefault(tx.action, [0.0, 0.0, 0])
        entry[0] += tx.amount
        entry[1] += tx.fees
        entry[2] += 1

    summaries = [
        ActionSummary(
            action=action,
            category=ActionCategory.classify(action),
            total_amount=amount,
            total_fees=fees,
            transaction_count=count,
        )
        for action, (amount, fees, count) in totals.items()
    ]
    return sorted(summaries, key=lambda s: (-s.transaction_count, s.action))


def calculate_category_summaries(
    transactions: Iterable[NormalizedTransaction],
) -> list[CategorySummary]:
    """The action summaries rolled up into action categories, in category order."""
    grouped: dict[ActionCategory, list[ActionSummary]] = defaultdict(list)
    for action in calculate_action_summaries(transactions):
        grouped[action.category].append(action)

    return [
        CategorySummary(
            category=category,
            total_amount=sum(a.total_amount for a in grouped[category]),
            total_fees=sum(a.total_fees for a in grouped[category]),
            transaction_count=sum(a.transaction_count for a in grouped[category]),
            actions=tuple(a.action for a in grouped[category]),
        )
        for category in ActionCategory
        if category in grouped
    ]


def calculate_daily_volume(transactions: Iterable[NormalizedTransaction]) -> list[DailyVolume]:
    """Buy and sell volume per calendar day, oldest first."""
    days: dict[date, list] = {}
    for tx in transactions:
        entry = days.setdefault(tx.date, [0.0, 0.0, 0])
        entry[2] += 1
        if tx.is_buy:
            entry[0] += abs(tx.amount)
        elif tx.is_sell:
            entry[1] += abs(tx.amount)

    return [
        DailyVolume(date=day, buy_volume=buys, sell_volume=sells, transaction_count=count)
        for day, (buys, sells, count) in sorted(days.items())
    ]
