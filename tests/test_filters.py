"""Tests for record filters and DataFrame conversion."""

from datetime import date

import pytest

from tradebook.analysis import (
    TradeFilter,
    TransactionFilter,
    aggregate_by_period,
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
from tradebook.core.models import ActionCategory, Granularity, Term
from tests.fixtures.test_data import build_trade


class TestTradeFilters:
    """Test filtering of closed trades."""

    def test_filter_by_symbol_is_case_insensitive(self, sample_trades):
        assert len(filter_by_symbol(sample_trades, "aapl")) == 2

    def test_filter_by_term(self, sample_trades):
        long_term = filter_trades(sample_trades, TradeFilter(term=Term.LONG))

        assert [t.symbol for t in long_term] == ["TSLA"]

    def test_filter_by_closed_date_range(self, sample_trades):
        criteria = TradeFilter(start_date=date(2024, 2, 1), end_date=date(2024, 2, 18))

        assert len(filter_trades(sample_trades, criteria)) == 2

    def test_undated_trade_fails_date_filter(self, sample_trades):
        trades = sample_trades + [build_trade(closed="unknown")]

        assert len(filter_trades(trades, TradeFilter(start_date=date(2000, 1, 1)))) == len(sample_trades)
        assert len(filter_trades(trades, TradeFilter())) == len(trades)

    def test_input_is_not_modified(self, sample_trades):
        before = list(sample_trades)

        filter_trades(sample_trades, TradeFilter(symbol="AAPL"))

        assert sample_trades == before


class TestGetPeriodTrades:
    """Test drill-down from a period key to its trades."""

    @pytest.mark.parametrize("granularity", [Granularity.MONTHLY, Granularity.WEEKLY])
    def test_matches_aggregated_counts(self, sample_trades, granularity):
        for period in aggregate_by_period(sample_trades, granularity).periods:
            trades = get_period_trades(sample_trades, period.period_key, granularity)

            assert len(trades) == period.trade_count
            assert all(period.start_date <= t.closed_on <= period.end_date for t in trades)

    def test_week_boundaries(self, sample_trades):
        week = get_period_trades(sample_trades, "2024-02-12", "weekly")

        assert sorted(t.closed_on for t in week) == [date(2024, 2, 12), date(2024, 2, 18)]

    def test_key_inside_period_selects_whole_period(self, sample_trades):
        assert len(get_period_trades(sample_trades, "2024-02-15", Granularity.MONTHLY)) == 3

    def test_invalid_key_returns_empty(self, sample_trades):
        assert get_period_trades(sample_trades, "Feb 2024", Granularity.MONTHLY) == []


class TestTransactionFilters:
    """Test filtering of brokerage transactions."""

    def test_filter_by_action(self, sample_transactions):
        assert len(filter_by_action(sample_transactions, "Sell")) == 2

    def test_filter_by_category(self, sample_transactions):
        assert len(filter_by_category(sample_transactions, ActionCategory.TRADE)) == 6
        assert len(filter_by_category(sample_transactions, "income")) == 1

    def test_combined_criteria(self, sample_transactions):
        criteria = TransactionFilter(
            symbol="aapl",
            category=ActionCategory.TRADE,
            start_date=date(2024, 1, 20),
            end_date=date(2024, 2, 10),
        )

        result = filter_transactions(sample_transactions, criteria)

        assert [tx.action for tx in result] == ["Buy", "Sell"]

    def test_unique_values(self, sample_transactions):
        assert get_unique_symbols(sample_transactions) == ["AAPL", "MSFT", "TSLA"]
        assert "MoneyLink Transfer" in get_unique_actions(sample_transactions)


class TestToDataFrame:
    """Test DataFrame conversion."""

    def test_records_to_dataframe(self, sample_transactions):
        df = to_dataframe(sample_transactions)

        assert len(df) == len(sample_transactions)
        assert {"date", "action", "category", "amount"} <= set(df.columns)
        assert df["amount"].sum() == pytest.approx(8476.50)

    def test_empty_input(self):
        assert to_dataframe([]).empty
