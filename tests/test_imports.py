"""Tests for the import entry points."""

import pytest

from tradebook.core.errors import EmptyResultError
from tradebook.loaders import (
    ParseResult,
    RowSkipped,
    import_brokerage_transactions,
    import_realized_gains,
)
from tests.fixtures.test_data import make_realized_gains_csv, make_trade_row


class TestImportRealizedGains:
    """Test realized gains import outcomes."""

    def test_success_with_skipped_rows(self, realized_gains_csv):
        outcome = import_realized_gains(realized_gains_csv)

        assert outcome.success
        assert outcome.error is None
        assert len(outcome.records) == 3
        assert outcome.result.skipped_count == 1

    def test_invalid_structure(self):
        outcome = import_realized_gains("")

        assert not outcome.success
        assert outcome.error.startswith("Invalid file format:")
        assert outcome.records == []

    def test_no_usable_rows(self):
        outcome = import_realized_gains(make_realized_gains_csv([make_trade_row(symbol="")]))

        assert not outcome.success
        assert outcome.error.startswith("No usable rows:")
        assert "1 rows skipped" in outcome.error
        assert outcome.result.skipped_count == 1


class TestImportBrokerageTransactions:
    """Test transactions import outcomes."""

    def test_success(self, brokerage_export_json):
        outcome = import_brokerage_transactions(brokerage_export_json)

        assert outcome.success
        assert len(outcome.records) == 9

    def test_missing_array(self):
        outcome = import_brokerage_transactions("{}")

        assert not outcome.success
        assert "Invalid file format" in outcome.error

    def test_empty_array(self):
        outcome = import_brokerage_transactions('{"BrokerageTransactions": []}')

        assert not outcome.success
        assert outcome.error == "No usable rows: No usable records found"


class TestParseResult:
    """Test the parse result container."""

    def test_require_records_raises_when_empty(self):
        result = ParseResult(skipped=[RowSkipped(3, "missing required fields: symbol")])

        with pytest.raises(EmptyResultError, match="1 rows skipped"):
            result.require_records()

    def test_require_records_returns_records(self):
        result = ParseResult(records=["a"])
        assert result.require_records() == ["a"]
