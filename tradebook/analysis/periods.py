"""
Calendar period aggregation of closed trades.

Buckets trades by the month or ISO week (Monday start) of their closed date
and computes independent statistics for each bucket.
"""

import calendar
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable

from tradebook.analysis.models import PeriodAggregation, PeriodStats
from tradebook.core.errors import InvalidDateError
from tradebook.core.models import Granularity, TradeRecord

logger = logging.getLogger(__name__)

PERIOD_KEY_FORMAT = "%Y-%m-%d"


def period_start(day: date, granularity: Granularity) -> date:
    """First day of the bucket containing day."""
    if granularity is Granularity.MONTHLY:
        return day.replace(day=1)
    return day - timedelta(days=day.weekday())


def period_end(start: date, granularity: Granularity) -> date:
    """Last day of the bucket starting at start."""
    if granularity is Granularity.MONTHLY:
        return start.replace(day=calendar.monthrange(start.year, start.month)[1])
    return start + timedelta(days=6)


def period_key(day: date, granularity: Granularity) -> str:
    """Stable key of the bucket containing day: its start date as YYYY-MM-DD."""
    return period_start(day, granularity).strftime(PERIOD_KEY_FORMAT)


def period_bounds(key: str, granularity: Granularity) -> tuple[date, date]:
    """
    Re-derive the inclusive [start, end] bounds of a bucket from its key.

    Raises:
        InvalidDateError: If the key is not a YYYY-MM-DD date.
    """
    try:
        day = datetime.strptime(key, PERIOD_KEY_FORMAT).date()
    except (TypeError, ValueError):
        raise InvalidDateError(key)
    start = period_start(day, granularity)
    return start, period_end(start, granularity)


def period_label(start: date, granularity: Granularity) -> str:
    """Display label: "Feb 2024" or "Feb 12 - Feb 18, 2024"."""
    if granularity is Granularity.MONTHLY:
        return start.strftime("%b %Y")
    end = period_end(start, granularity)
    return f"{start.strftime('%b %d')} - {end.strftime('%b %d, %Y')}"


def calculate_period_stats(
    trades: list[TradeRecord], label: str, start_date: date, end_date: date
) -> PeriodStats:
    """Statistics for one bucket. An empty bucket yields zeros, never a division error."""
    winners = [t for t in trades if t.gain_loss > 0]
    losers = [t for t in trades if t.gain_loss < 0]

    total_wins = sum(t.gain_loss for t in winners)
    total_losses = abs(sum(t.gain_loss for t in losers))

    return PeriodStats(
        period=label,
        period_key=start_date.strftime(PERIOD_KEY_FORMAT),
        start_date=start_date,
        end_date=end_date,
        net_gain_loss=sum(t.gain_loss for t in trades),
        trade_count=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=(len(winners) / len(trades) * 100) if trades else 0.0,
        average_gain=(total_wins / len(winners)) if winners else 0.0,
        average_loss=(total_losses / len(losers)) if losers else 0.0,
        trades=tuple(trades),
    )


def aggregate_by_period(
    trades: Iterable[TradeRecord], granularity: Granularity | str
) -> PeriodAggregation:
    """
    Bucket trades by closed date and compute per-period statistics.

    Trades whose closed date cannot be parsed are logged and left out; the
    rest are still aggregated.

    Args:
        trades: Closed trades.
        granularity: Granularity or its value ("monthly" / "weekly").

    Returns:
        PeriodAggregation with periods in ascending start-date order.
    """
    granularity = Granularity(granularity)
    groups: dict[date, list[TradeRecord]] = defaultdict(list)
    excluded = 0

    for trade in trades:
        try:
            closed = trade.closed_on
        except InvalidDateError:
            logger.warning(f"Invalid closed date in trade {trade.symbol}: {trade.closed_date!r}")
            excluded += 1
            continue
        groups[period_start(closed, granularity)].append(trade)

    periods = tuple(
        calculate_period_stats(
            bucket,
            period_label(start, granularity),
            start,
            period_end(start, granularity),
        )
        for start, bucket in sorted(groups.items())
    )

    logger.debug(
        f"Aggregated trades into {len(periods)} {granularity} periods ({excluded} excluded)"
    )
    return PeriodAggregation(granularity=granularity, periods=periods, excluded_trades=excluded)


def aggregate_by_month(trades: Iterable[TradeRecord]) -> PeriodAggregation:
    return aggregate_by_period(trades, Granularity.MONTHLY)


def aggregate_by_week(trades: Iterable[TradeRecord]) -> PeriodAggregation:
    return aggregate_by_period(trades, Granularity.WEEKLY)
