"""Shared pytest fixtures and configuration."""

import copy
import json

import pytest

from tradebook.core.models import Term
from tradebook.loaders import BrokerageTransactionsLoader
from tests.fixtures.test_data import (
    SAMPLE_BROKERAGE_EXPORT,
    TEST_NAME_2,
    TEST_NAME_3,
    TEST_SYMBOL_1,
    TEST_SYMBOL_2,
    TEST_SYMBOL_3,
    build_trade,
    make_realized_gains_csv,
    make_trade_row,
)


# ============================================================================
# TRADE FIXTURES
# ============================================================================


@pytest.fixture
def sample_trades():
    """Closed trades spanning three months and two ISO weeks in February."""
    return [
        build_trade(TEST_SYMBOL_1, closed="1/05/2024", opened="12/01/2023", gain_loss=250.0, days_in_trade=35),
        build_trade(TEST_SYMBOL_2, closed="1/30/2024", opened="1/02/2024", gain_loss=-100.0, days_in_trade=28),
        build_trade(TEST_SYMBOL_1, closed="2024-02-12", opened="2024-02-01", gain_loss=75.5, days_in_trade=11),
        build_trade(TEST_SYMBOL_3, closed="2/18/24", opened="2/12/24", gain_loss=-40.25, days_in_trade=6),
        build_trade(TEST_SYMBOL_2, closed="2/19/2024", opened="1/19/2024", gain_loss=0.0, days_in_trade=31),
        build_trade(
            TEST_SYMBOL_3,
            closed="3/15/2024",
            opened="1/10/2023",
            gain_loss=900.0,
            days_in_trade=430,
            term=Term.LONG,
            gain_loss_percent=45.0,
        ),
    ]


@pytest.fixture
def realized_gains_csv():
    """A realized gains export with three trades, one malformed row and one blank row."""
    rows = [
        make_trade_row(TEST_SYMBOL_1, closed="2/15/2024", opened="1/10/2023", gain_loss="$150.00"),
        make_trade_row(
            TEST_SYMBOL_2,
            closed="2/20/2024",
            opened="2/01/2024",
            gain_loss="($75.25)",
            term="Short Term",
            name=TEST_NAME_2,
        ),
        make_trade_row("", closed="2/21/2024", opened="2/02/2024"),
        [""] * 25,
        make_trade_row(
            "tsla",
            closed="2024-03-04",
            opened="2024-03-01",
            gain_loss="$1,020.40",
            term="Short Term",
            name=TEST_NAME_3,
        ),
    ]
    return make_realized_gains_csv(rows)


# ============================================================================
# TRANSACTION FIXTURES
# ============================================================================


@pytest.fixture
def brokerage_export():
    """A deep copy of the sample brokerage transactions export."""
    return copy.deepcopy(SAMPLE_BROKERAGE_EXPORT)


@pytest.fixture
def brokerage_export_json(brokerage_export):
    return json.dumps(brokerage_export)


@pytest.fixture
def sample_transactions(brokerage_export):
    """Normalized transactions from the sample brokerage export."""
    return BrokerageTransactionsLoader().parse(brokerage_export).records


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
