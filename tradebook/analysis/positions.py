"""
Open position reconciliation.

Nets buy and sell quantity per symbol to find positions that are still open,
costing the open side at its quantity-weighted average price.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tradebook.core.models import NormalizedTransaction, OpenPosition, PositionSide, TradeSide

logger = logging.getLogger(__name__)

QUANTITY_TOLERANCE = 0.001


@dataclass
class _SideTotals:
    """Running totals for one side (buys or sells) of a symbol."""

    quantity: float = 0.0
    cost: float = 0.0
    transactions: list[NormalizedTransaction] = field(default_factory=list)

    def add(self, tx: NormalizedTransaction, quantity: float) -> None:
        self.quantity += quantity
        self.cost += quantity * _unit_price(tx, quantity)
        self.transactions.append(tx)

    @property
    def average_price(self) -> float:
        return self.cost / self.quantity if self.quantity > 0 else 0.0


def _unit_price(tx: NormalizedTransaction, quantity: float) -> float:
    """Reported price, or the cash amount per unit when the price is missing."""
    if tx.price:
        return tx.price
    return abs(tx.amount) / quantity if quantity > 0 else 0.0


class PositionReconciler:
    """Reconciles a transaction history into open positions."""

    def __init__(self, tolerance: float = QUANTITY_TOLERANCE):
        """
        Initialise the reconciler.

        Args:
            tolerance: Net quantities within this distance of zero count as closed.
        """
        self.tolerance = tolerance

    def _group_by_symbol(
        self, transactions: Iterable[NormalizedTransaction]
    ) -> dict[str, list[NormalizedTransaction]]:
        """Group trade and option transactions by symbol."""
        grouped: dict[str, list[NormalizedTransaction]] = defaultdict(list)
        for tx in transactions:
            if not tx.symbol or not tx.category.is_tradable:
                continue
            grouped[tx.symbol].append(tx)
        return grouped

    def _reconcile_symbol(
        self, symbol: str, transactions: list[NormalizedTransaction]
    ) -> Optional[OpenPosition]:
        """
        Net one symbol's buys against its sells.

        Returns:
            The open position, or None when the symbol is flat or has no
            usable quantity.
        """
        sides = {TradeSide.BUY: _SideTotals(), TradeSide.SELL: _SideTotals()}

        for tx in transactions:
            side = tx.side
            quantity = abs(tx.quantity) if tx.quantity else 0.0
            if side is None or quantity == 0:
                logger.debug(f"{symbol}: ignoring {tx.action} on {tx.date} without quantity")
                continue
            sides[side].add(tx, quantity)

        buys, sells = sides[TradeSide.BUY], sides[TradeSide.SELL]
        net = buys.quantity - sells.quantity

        if abs(net) <= self.tolerance:
            return None

        opening = buys if net > 0 else sells
        contributing = sorted(buys.transactions + sells.transactions, key=lambda tx: (tx.date, tx.id))
        dates = [tx.date for tx in contributing]
        quantity = abs(net)
        avg_cost = opening.average_price

        return OpenPosition(
            symbol=symbol,
            description=contributing[0].description,
            side=PositionSide.LONG if net > 0 else PositionSide.SHORT,
            quantity=quantity,
            avg_cost_basis=avg_cost,
            total_cost=quantity * avg_cost,
            first_trade_date=min(dates),
            last_trade_date=max(dates),
            trade_count=len(contributing),
        )

    def reconcile(self, transactions: Iterable[NormalizedTransaction]) -> list[OpenPosition]:
        """
        Compute all open positions from a full transaction history.

        The input order does not matter and the input is not modified.
        Results are sorted by total cost, largest first.
        """
        positions = []
        for symbol, symbol_transactions in self._group_by_symbol(transactions).items():
            position = self._reconcile_symbol(symbol, symbol_transactions)
            if position:
                positions.append(position)

        positions.sort(key=lambda p: (-p.total_cost, p.symbol))
        logger.info(f"Reconciled {len(positions)} open positions")
        return positions


def calculate_open_positions(
    transactions: Iterable[NormalizedTransaction],
    tolerance: float = QUANTITY_TOLERANCE,
) -> list[OpenPosition]:
    """Open positions for one account's transactions. See PositionReconciler."""
    return PositionReconciler(tolerance).reconcile(transactions)
