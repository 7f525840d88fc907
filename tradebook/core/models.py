"""
Data models for the trade analytics engine.

Contains enums for categorical data and frozen dataclasses for the records
produced by the loaders. Aggregation never mutates these objects.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from tradebook.utils.helpers import normalize_date


TRADE_ACTIONS = frozenset({"Buy", "Sell", "Sell Short", "Buy to Cover"})
OPTION_ACTIONS = frozenset({"Buy to Open", "Sell to Open", "Buy to Close", "Sell to Close"})
INCOME_ACTIONS = frozenset(
    {"Qualified Dividend", "Non-Qualified Dividend", "Bank Interest", "Credit Interest"}
)
EXPENSE_ACTIONS = frozenset({"Margin Interest", "Foreign Tax Paid", "ADR Mgmt Fee"})

BUY_ACTIONS = frozenset({"Buy", "Buy to Cover", "Buy to Open", "Buy to Close"})
SELL_ACTIONS = frozenset({"Sell", "Sell Short", "Sell to Open", "Sell to Close"})


class ActionCategory(Enum):
    """Coarse classification of a brokerage action label."""

    TRADE = "trade"
    OPTION = "option"
    INCOME = "income"
    EXPENSE = "expense"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def classify(cls, action: str) -> "ActionCategory":
        """Classify an action label by exact membership in the fixed action sets."""
        if action in TRADE_ACTIONS:
            return cls.TRADE
        elif action in OPTION_ACTIONS:
            return cls.OPTION
        elif action in INCOME_ACTIONS:
            return cls.INCOME
        elif action in EXPENSE_ACTIONS:
            return cls.EXPENSE
        else:
            return cls.OTHER

    @property
    def is_tradable(self) -> bool:
        """Returns True for categories that move share/contract quantity."""
        return self in (ActionCategory.TRADE, ActionCategory.OPTION)


class TradeSide(Enum):
    """Direction of a trade or option action."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_action(cls, action: str) -> Optional["TradeSide"]:
        """Returns the side of a trade/option action, or None for cash-only actions."""
        if action in BUY_ACTIONS:
            return cls.BUY
        if action in SELL_ACTIONS:
            return cls.SELL
        return None


class PositionSide(Enum):
    """Side of an open position."""

    LONG = "long"
    SHORT = "short"

    def __str__(self) -> str:
        return self.value


class Term(Enum):
    """Holding term as classified by the brokerage export."""

    SHORT = "Short Term"
    LONG = "Long Term"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "Term":
        """Anything other than an exact "Long Term" label is short term."""
        return cls.LONG if str(label).strip() == cls.LONG.value else cls.SHORT


class Granularity(Enum):
    """Calendar bucket size for period aggregation."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"

    def __str__(self) -> str:
        return self.value


def get_action_category(action: str) -> ActionCategory:
    """Classify an action label. See ActionCategory.classify."""
    return ActionCategory.classify(action)


@dataclass(frozen=True)
class RawTransaction:
    """One object of a brokerage transactions JSON export, exactly as exported."""

    date: str
    action: str
    symbol: str
    description: str
    quantity: str
    price: str
    fees: str
    amount: str
    acctg_rule_cd: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RawTransaction":
        """Build from a JSON object; missing or null fields become empty strings."""

        def field_value(key: str) -> str:
            value = raw.get(key)
            return "" if value is None else str(value)

        return cls(
            date=field_value("Date"),
            action=field_value("Action"),
            symbol=field_value("Symbol"),
            description=field_value("Description"),
            quantity=field_value("Quantity"),
            price=field_value("Price"),
            fees=field_value("Fees & Comm"),
            amount=field_value("Amount"),
            acctg_rule_cd=field_value("AcctgRuleCd"),
        )


@dataclass(frozen=True)
class NormalizedTransaction:
    """
    A single brokerage transaction in canonical form.

    Positive amounts are cash in, negative amounts are cash out.
    """

    id: str
    date: date
    action: str
    symbol: str
    description: str
    quantity: Optional[float]
    price: Optional[float]
    amount: float
    fees: float = 0.0
    acctg_rule_cd: str = ""

    @property
    def category(self) -> ActionCategory:
        return ActionCategory.classify(self.action)

    @property
    def side(self) -> Optional[TradeSide]:
        return TradeSide.from_action(self.action)

    @property
    def is_buy(self) -> bool:
        return self.side is TradeSide.BUY

    @property
    def is_sell(self) -> bool:
        return self.side is TradeSide.SELL

    def to_dict(self) -> dict:
        """Convert to dictionary for DataFrame creation."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "action": self.action,
            "category": self.category.value,
            "symbol": self.symbol,
            "description": self.description,
            "quantity": self.quantity,
            "price": self.price,
            "fees": self.fees,
            "amount": self.amount,
            "acctg_rule_cd": self.acctg_rule_cd,
        }


@dataclass(frozen=True)
class TransactionFile:
    """Header totals of a brokerage transactions export."""

    from_date: str
    to_date: str
    total_transactions_amount: float
    total_fees_and_comm_amount: float


@dataclass(frozen=True)
class TradeRecord:
    """
    One realized round-trip trade from a realized gains export.

    Dates are kept exactly as exported; use opened_on/closed_on for the
    normalized calendar dates.
    """

    symbol: str
    name: str
    closed_date: str
    opened_date: str
    quantity: float
    proceeds_per_share: float
    cost_per_share: float
    proceeds: float
    cost_basis: float
    gain_loss: float
    gain_loss_percent: float
    long_term_gain_loss: float = 0.0
    short_term_gain_loss: float = 0.0
    term: Term = Term.SHORT
    unadjusted_cost_basis: float = 0.0
    wash_sale: str = ""
    disallowed_loss: float = 0.0
    transaction_closed_date: str = ""
    transaction_cost_basis: float = 0.0
    total_transaction_gain_loss: float = 0.0
    total_transaction_gain_loss_percent: float = 0.0
    lt_transaction_gain_loss: float = 0.0
    lt_transaction_gain_loss_percent: float = 0.0
    st_transaction_gain_loss: float = 0.0
    st_transaction_gain_loss_percent: float = 0.0
    days_in_trade: int = 0

    @property
    def opened_on(self) -> date:
        """Normalized opened date. Raises InvalidDateError."""
        return normalize_date(self.opened_date)

    @property
    def closed_on(self) -> date:
        """Normalized closed date. Raises InvalidDateError."""
        return normalize_date(self.closed_date)

    @property
    def is_win(self) -> bool:
        return self.gain_loss > 0

    @property
    def is_loss(self) -> bool:
        return self.gain_loss < 0

    def to_dict(self) -> dict:
        """Convert to dictionary for DataFrame/report."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "opened_date": self.opened_date,
            "closed_date": self.closed_date,
            "quantity": self.quantity,
            "proceeds_per_share": self.proceeds_per_share,
            "cost_per_share": self.cost_per_share,
            "proceeds": self.proceeds,
            "cost_basis": self.cost_basis,
            "gain_loss": self.gain_loss,
            "gain_loss_percent": self.gain_loss_percent,
            "term": self.term.value,
            "wash_sale": self.wash_sale,
            "disallowed_loss": self.disallowed_loss,
            "days_in_trade": self.days_in_trade,
        }


@dataclass(frozen=True)
class OpenPosition:
    """Net unmatched quantity of one symbol after reconciliation."""

    symbol: str
    description: str
    side: PositionSide
    quantity: float
    avg_cost_basis: float
    total_cost: float
    first_trade_date: date
    last_trade_date: date
    trade_count: int

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "description": self.description,
            "side": self.side.value,
            "quantity": self.quantity,
            "avg_cost_basis": self.avg_cost_basis,
            "total_cost": self.total_cost,
            "first_trade_date": self.first_trade_date.isoformat(),
            "last_trade_date": self.last_trade_date.isoformat(),
            "trade_count": self.trade_count,
        }


if __name__ == "__main__":
    # Example usage
    trade = TradeRecord(
        symbol="AAPL",
        name="APPLE INC",
        closed_date="2/15/2024",
        opened_date="1/10/2023",
        quantity=10,
        proceeds_per_share=185.0,
        cost_per_share=170.0,
        proceeds=1850.0,
        cost_basis=1700.0,
        gain_loss=150.0,
        gain_loss_percent=8.82,
        term=Term.LONG,
        days_in_trade=401,
    )

    print("Sample Trade:")
    print(f"  {trade.symbol} {trade.name}")
    print(f"  {trade.opened_on} -> {trade.closed_on} ({trade.days_in_trade} days, {trade.term})")
    print(f"  Gain/Loss: ${trade.gain_loss:,.2f} ({trade.gain_loss_percent:+.2f}%)")
    print()
    for action in ("Buy", "Sell to Open", "Qualified Dividend", "Margin Interest", "Journal"):
        print(f"  {action!r}: {ActionCategory.classify(action)}")
