"""View-model assembly for the landing page."""

from typing import Any, Dict, List, Optional

from ..snapshot.models import Snapshot, TickerReturn
from .aggregator import calculate_portfolio_return
from .merge import merge_snapshot_and_allocations
from .models import (
    DEFAULT_SECTOR_COLOR,
    AllocationData,
    AllocationSlice,
    Holding,
    MergedView,
    PortfolioMetrics,
    PortfolioPerformance,
    Timeframe,
    TimeframeMetric,
)

FEATURED_COUNT = 3
ALPHABETICAL_COUNT = 6


def get_top_performers(
    snapshot: Optional[Snapshot], count: int = FEATURED_COUNT
) -> List[TickerReturn]:
    """First ``count`` snapshot entries with a positive total return."""
    if snapshot is None:
        return []
    return [stock for stock in snapshot.stocks if stock.stock_return > 0][:count]


def _metric(value: Optional[float]) -> TimeframeMetric:
    # No benchmark is tracked, so the difference is the portfolio return
    return TimeframeMetric(portfolio=value, benchmark=0.0, difference=value)


def build_metrics(
    snapshot: Optional[Snapshot], allocations: Optional[AllocationData]
) -> PortfolioMetrics:
    """Weighted returns for each timeframe, each computed on its own."""
    return PortfolioMetrics(
        one_month=_metric(
            calculate_portfolio_return(snapshot, allocations, Timeframe.ONE_MONTH)
        ),
        three_month=_metric(
            calculate_portfolio_return(snapshot, allocations, Timeframe.THREE_MONTH)
        ),
        one_year=_metric(
            calculate_portfolio_return(snapshot, allocations, Timeframe.TWELVE_MONTH)
        ),
    )


def _allocation_extras(allocations: AllocationData) -> Dict[str, Any]:
    # View-model fields always win over same-named keys in the allocation file
    own_keys = set()
    for name, field in PortfolioPerformance.model_fields.items():
        own_keys.update((name, field.alias))
    return {
        key: value
        for key, value in (allocations.model_extra or {}).items()
        if key not in own_keys
    }


def build_portfolio_performance(
    snapshot: Snapshot, allocations: AllocationData
) -> PortfolioPerformance:
    """Merge the inputs and attach the portfolio metrics."""
    merged = merge_snapshot_and_allocations(snapshot, allocations)

    return PortfolioPerformance(
        holdings=merged.holdings,
        sector_colors=merged.sector_colors,
        last_updated=merged.last_updated,
        data_source=merged.data_source,
        unmatched_tickers=merged.unmatched_tickers,
        baseline_date=snapshot.metadata.baseline_date,
        metrics=build_metrics(snapshot, allocations),
        **_allocation_extras(allocations),
    )


def order_holdings_for_display(holdings: List[Holding]) -> List[Holding]:
    """
    Order holdings for the holdings table.

    The three best performers come first, the next six follow alphabetically
    by name, and the rest keep their performance order. Missing returns count
    as zero.
    """
    by_performance = sorted(
        holdings, key=lambda holding: holding.total_return or 0, reverse=True
    )
    featured = by_performance[:FEATURED_COUNT]
    alphabetical = sorted(
        by_performance[FEATURED_COUNT : FEATURED_COUNT + ALPHABETICAL_COUNT],
        key=lambda holding: holding.name.lower(),
    )
    remaining = by_performance[FEATURED_COUNT + ALPHABETICAL_COUNT :]
    return featured + alphabetical + remaining


def allocation_breakdown(view: MergedView) -> List[AllocationSlice]:
    """Allocation per holding with its sector colour."""
    return [
        AllocationSlice(
            ticker=holding.ticker,
            name=holding.name,
            sector=holding.sector,
            allocation=holding.allocation,
            color=view.sector_colors.get(holding.sector, DEFAULT_SECTOR_COLOR),
        )
        for holding in view.holdings
    ]
