"""Reconciliation of allocation reference data with snapshot returns."""

from typing import List, Optional

from ...config.logging import get_logger
from ...exceptions import MergeError
from ..snapshot.models import Snapshot
from .models import AllocationData, Holding, MergedView

logger = get_logger(__name__)


def merge_snapshot_and_allocations(
    snapshot: Optional[Snapshot], allocations: Optional[AllocationData]
) -> MergedView:
    """
    Join holdings with live returns, keyed by exact ticker symbol.

    Holdings drive the join: every holding appears once, in its original
    order. Allocation stays from the holding; price and return fields from the
    snapshot replace whatever the holding carried. Holdings with no snapshot
    entry pass through unchanged and are logged.

    Args:
        snapshot: Generated snapshot
        allocations: Allocation reference data

    Returns:
        MergedView of all holdings

    Raises:
        MergeError: If either input is missing
    """
    if snapshot is None or allocations is None:
        raise MergeError("Failed to merge stock and portfolio data")

    returns = snapshot.returns_by_ticker()
    merged: List[Holding] = []
    unmatched: List[str] = []

    for holding in allocations.holdings:
        live = returns.get(holding.ticker)

        if live is None:
            logger.warning("Holding not found in snapshot data", ticker=holding.ticker)
            unmatched.append(holding.ticker)
            merged.append(holding)
            continue

        merged.append(
            holding.model_copy(
                update={
                    "total_return": live.stock_return,
                    "one_month_return": live.one_month_return,
                    "three_month_return": live.three_month_return,
                    "current_price": live.current_price,
                    "baseline_price": live.baseline_price,
                    "last_updated": live.last_updated,
                }
            )
        )

    return MergedView(
        holdings=merged,
        sector_colors=dict(allocations.sector_colors),
        last_updated=snapshot.metadata.last_updated,
        unmatched_tickers=unmatched,
    )
