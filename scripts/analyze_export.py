#!/usr/bin/env python3
"""
Brokerage export analysis CLI script.

Reads a realized gains CSV or a brokerage transactions JSON export and prints:
- Realized performance summary and period statistics (CSV)
- Open positions, symbol and action-category summaries (JSON)

Usage:
    python scripts/analyze_export.py data/realized_gains.csv
    python scripts/analyze_export.py data/realized_gains.csv --period weekly
    python scripts/analyze_export.py data/transactions.json --config config.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradebook.analysis import (  # noqa: E402
    aggregate_by_period,
    calculate_category_summaries,
    calculate_open_positions,
    calculate_symbol_summaries,
    calculate_trade_summary,
    calculate_transaction_summary,
    to_dataframe,
)
from tradebook.core.config import Config, load_config  # noqa: E402
from tradebook.loaders import (  # noqa: E402
    ImportOutcome,
    RealizedGainsLoader,
    import_brokerage_transactions,
    import_realized_gains,
)

logger = logging.getLogger(__name__)


def analyze_realized_gains(outcome: ImportOutcome, config: Config, period: str) -> None:
    """Print realized performance for a trades export."""
    trades = outcome.records
    summary = calculate_trade_summary(trades)

    print(f"Trades:            {summary.total_trades}")
    print(f"Total gain/loss:   ${summary.total_gain_loss:,.2f}")
    print(f"Win rate:          {summary.win_rate:.1f}%")
    print(f"Average win:       ${summary.average_win:,.2f}")
    print(f"Average loss:      ${summary.average_loss:,.2f}")
    print(f"Avg days in trade: {summary.average_days_in_trade:.1f}")
    print()

    aggregation = aggregate_by_period(trades, period or config.analysis.default_granularity)
    df = to_dataframe(aggregation.periods)
    if df.empty:
        print("No dated trades to aggregate.")
        return
    print(df[["period", "trade_count", "net_gain_loss", "win_rate"]].to_string(index=False))


def analyze_transactions(outcome: ImportOutcome, config: Config) -> None:
    """Print positions and summaries for a transactions export."""
    transactions = outcome.records
    summary = calculate_transaction_summary(transactions)

    print(f"Transactions:  {summary.total_transactions} ({summary.date_from} to {summary.date_to})")
    print(f"Net cash flow: ${summary.net_cash_flow:,.2f}")
    print(f"Total fees:    ${summary.total_fees:,.2f}")
    print()

    positions = calculate_open_positions(transactions, tolerance=config.analysis.quantity_tolerance)
    print("Open positions:")
    print(to_dataframe(positions).to_string(index=False) if positions else "  (none)")
    print()

    print("By category:")
    print(to_dataframe(calculate_category_summaries(transactions)).to_string(index=False))
    print()

    print("Most active symbols:")
    symbols = to_dataframe(calculate_symbol_summaries(transactions)[:10])
    print(symbols[["symbol", "transaction_count", "net_amount"]].to_string(index=False))


def main():
    parser = argparse.ArgumentParser(description="Analyse a brokerage export file")
    parser.add_argument("path", help="Realized gains .csv or transactions .json export")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument(
        "--period",
        choices=["monthly", "weekly"],
        default=None,
        help="Period granularity for realized gains (default from config)",
    )

    args = parser.parse_args()

    config = load_config(args.config)
    path = Path(args.path)
    if not path.exists():
        logger.error(f"File not found: {path}")
        sys.exit(1)

    suffix = path.suffix.lower()
    if suffix == ".csv":
        loader = RealizedGainsLoader.from_config(config.imports)
        outcome = import_realized_gains(path.read_text(encoding="utf-8-sig"), loader=loader)
    elif suffix == ".json":
        outcome = import_brokerage_transactions(path.read_bytes())
    else:
        logger.error(f"Unsupported file type: {path.suffix} (expected .csv or .json)")
        sys.exit(1)

    if not outcome.success:
        logger.error(outcome.error)
        sys.exit(1)

    if outcome.result.skipped:
        logger.warning(f"{outcome.result.skipped_count} rows were skipped")

    if suffix == ".csv":
        analyze_realized_gains(outcome, config, args.period)
    else:
        analyze_transactions(outcome, config)


if __name__ == "__main__":
    main()
