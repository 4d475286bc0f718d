"""Portfolio aggregation, merge and view-model service module."""

from .aggregator import calculate_portfolio_return, return_for_timeframe
from .merge import merge_snapshot_and_allocations
from .models import (
    AllocationData,
    AllocationSlice,
    Holding,
    MergedView,
    PortfolioMetrics,
    PortfolioPerformance,
    Timeframe,
    TimeframeMetric,
)
from .presentation import (
    allocation_breakdown,
    build_metrics,
    build_portfolio_performance,
    get_top_performers,
    order_holdings_for_display,
)

__all__ = [
    "AllocationData",
    "AllocationSlice",
    "Holding",
    "MergedView",
    "PortfolioMetrics",
    "PortfolioPerformance",
    "Timeframe",
    "TimeframeMetric",
    "allocation_breakdown",
    "build_metrics",
    "build_portfolio_performance",
    "calculate_portfolio_return",
    "get_top_performers",
    "merge_snapshot_and_allocations",
    "order_holdings_for_display",
    "return_for_timeframe",
]
