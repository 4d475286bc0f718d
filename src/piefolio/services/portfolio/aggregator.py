"""Portfolio-weighted return aggregation."""

from typing import Optional

from ...config.logging import get_logger
from ..snapshot.models import Snapshot, TickerReturn
from .models import AllocationData, Timeframe

logger = get_logger(__name__)


def return_for_timeframe(stock: TickerReturn, timeframe: Timeframe) -> float:
    """Pick the return field a timeframe reads."""
    if timeframe == Timeframe.ONE_MONTH:
        return stock.one_month_return
    if timeframe == Timeframe.THREE_MONTH:
        return stock.three_month_return
    return stock.stock_return


def calculate_portfolio_return(
    snapshot: Optional[Snapshot],
    allocations: Optional[AllocationData],
    timeframe: Timeframe = Timeframe.TWELVE_MONTH,
) -> Optional[float]:
    """
    Calculate the allocation-weighted portfolio return for a timeframe.

    Holdings without snapshot data are left out of both the weighted sum and
    the allocation total, and the result is normalised by the allocation that
    did match. Allocations therefore need not add up to exactly 100.

    Args:
        snapshot: Generated snapshot with per-ticker returns
        allocations: Allocation reference data
        timeframe: Window to aggregate

    Returns:
        Weighted return in percent, or None if either input is missing or no
        holding matches a snapshot ticker
    """
    if snapshot is None or allocations is None:
        logger.warning(
            "Missing data for portfolio calculation",
            has_snapshot=snapshot is not None,
            has_allocations=allocations is not None,
            timeframe=timeframe.value,
        )
        return None

    returns = snapshot.returns_by_ticker()

    weighted_return = 0.0
    total_allocation = 0.0

    for holding in allocations.holdings:
        stock = returns.get(holding.ticker)
        if stock is None:
            continue
        weighted_return += (holding.allocation / 100) * return_for_timeframe(
            stock, timeframe
        )
        total_allocation += holding.allocation

    if total_allocation == 0:
        logger.warning(
            "No holdings matched snapshot tickers", timeframe=timeframe.value
        )
        return None

    return (weighted_return / total_allocation) * 100
