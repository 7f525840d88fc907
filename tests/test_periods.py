"""Tests for calendar period aggregation."""

from datetime import date

import pytest

from tradebook.analysis import (
    aggregate_by_month,
    aggregate_by_period,
    aggregate_by_week,
    calculate_period_stats,
    calculate_trade_summary,
    period_bounds,
    period_key,
)
from tradebook.analysis.periods import period_label
from tradebook.core.errors import InvalidDateError
from tradebook.core.models import Granularity
from tests.fixtures.test_data import build_trade


class TestPeriodHelpers:
    """Test bucket key, bounds and label helpers."""

    def test_monthly_key_is_first_of_month(self):
        assert period_key(date(2024, 2, 29), Granularity.MONTHLY) == "2024-02-01"

    def test_weekly_key_is_monday(self):
        assert period_key(date(2024, 2, 18), Granularity.WEEKLY) == "2024-02-12"
        assert period_key(date(2024, 2, 12), Granularity.WEEKLY) == "2024-02-12"
        assert period_key(date(2024, 2, 19), Granularity.WEEKLY) == "2024-02-19"

    def test_weekly_key_across_year_boundary(self):
        assert period_key(date(2025, 1, 1), Granularity.WEEKLY) == "2024-12-30"

    def test_monthly_bounds_handle_leap_year(self):
        assert period_bounds("2024-02-01", Granularity.MONTHLY) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_weekly_bounds(self):
        assert period_bounds("2024-02-12", Granularity.WEEKLY) == (date(2024, 2, 12), date(2024, 2, 18))

    def test_invalid_key_raises(self):
        with pytest.raises(InvalidDateError):
            period_bounds("Feb 2024", Granularity.MONTHLY)

    def test_labels(self):
        assert period_label(date(2024, 2, 1), Granularity.MONTHLY) == "Feb 2024"
        assert period_label(date(2024, 2, 12), Granularity.WEEKLY) == "Feb 12 - Feb 18, 2024"


class TestCalculatePeriodStats:
    """Test statistics for a single bucket."""

    def test_empty_bucket_is_all_zero(self):
        stats = calculate_period_stats([], "Feb 2024", date(2024, 2, 1), date(2024, 2, 29))

        assert stats.trade_count == 0
        assert stats.net_gain_loss == 0
        assert stats.win_rate == 0
        assert stats.average_gain == 0
        assert stats.average_loss == 0

    def test_breakeven_trade_is_neither_win_nor_loss(self):
        trades = [build_trade(gain_loss=100.0), build_trade(gain_loss=-50.0), build_trade(gain_loss=0.0)]

        stats = calculate_period_stats(trades, "Feb 2024", date(2024, 2, 1), date(2024, 2, 29))

        assert stats.winning_trades == 1
        assert stats.losing_trades == 1
        assert stats.win_rate == pytest.approx(100 / 3)
        assert stats.average_gain == pytest.approx(100.0)
        assert stats.average_loss == pytest.approx(50.0)
        assert stats.net_gain_loss == pytest.approx(50.0)


class TestAggregateByPeriod:
    """Test bucketing of trade collections."""

    def test_monthly_buckets(self, sample_trades):
        aggregation = aggregate_by_month(sample_trades)

        assert [p.period_key for p in aggregation.periods] == ["2024-01-01", "2024-02-01", "2024-03-01"]
        assert [p.period for p in aggregation.periods] == ["Jan 2024", "Feb 2024", "Mar 2024"]
        assert [p.trade_count for p in aggregation.periods] == [2, 3, 1]

        february = aggregation.get("2024-02-01")
        assert february.net_gain_loss == pytest.approx(35.25)
        assert february.win_rate == pytest.approx(100 / 3)
        assert february.end_date == date(2024, 2, 29)

    def test_weekly_buckets(self, sample_trades):
        aggregation = aggregate_by_week(sample_trades)

        assert [p.period_key for p in aggregation.periods] == [
            "2024-01-01",
            "2024-01-29",
            "2024-02-12",
            "2024-02-19",
            "2024-03-11",
        ]
        week = aggregation.get("2024-02-12")
        assert week.trade_count == 2
        assert week.start_date.weekday() == 0
        assert week.period == "Feb 12 - Feb 18, 2024"

    @pytest.mark.parametrize("granularity", ["monthly", "weekly"])
    def test_periods_sum_to_total(self, sample_trades, granularity):
        aggregation = aggregate_by_period(sample_trades, granularity)

        total = calculate_trade_summary(sample_trades).total_gain_loss
        assert sum(p.net_gain_loss for p in aggregation.periods) == pytest.approx(total)
        assert aggregation.net_gain_loss == pytest.approx(total)
        assert sum(p.trade_count for p in aggregation.periods) == len(sample_trades)

    def test_invalid_closed_date_is_excluded(self, sample_trades):
        trades = sample_trades + [build_trade(closed="not a date", gain_loss=1000.0)]

        aggregation = aggregate_by_month(trades)

        assert aggregation.excluded_trades == 1
        assert sum(p.trade_count for p in aggregation.periods) == len(sample_trades)

    def test_only_populated_periods_are_returned(self):
        trades = [build_trade(closed="1/15/2024"), build_trade(closed="4/15/2024")]

        aggregation = aggregate_by_month(trades)

        assert [p.period for p in aggregation.periods] == ["Jan 2024", "Apr 2024"]

    def test_trades_are_kept_for_drill_down(self, sample_trades):
        march = aggregate_by_month(sample_trades).get("2024-03-01")

        assert [t.symbol for t in march.trades] == ["TSLA"]

    def test_empty_input(self):
        aggregation = aggregate_by_month([])

        assert aggregation.periods == ()
        assert aggregation.net_gain_loss == 0

    def test_unknown_granularity_raises(self, sample_trades):
        with pytest.raises(ValueError):
            aggregate_by_period(sample_trades, "yearly")

    def test_to_dict_omits_trades(self, sample_trades):
        data = aggregate_by_month(sample_trades).periods[0].to_dict()

        assert "trades" not in data
        assert data["start_date"] == "2024-01-01"
