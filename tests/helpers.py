"""Builders for snapshot and price history test data."""

from datetime import date, timedelta
from typing import List, Optional

from piefolio.core.price_history import PricePoint
from piefolio.services.snapshot.models import (
    FailedTicker,
    Snapshot,
    SnapshotMetadata,
    TickerReturn,
)

# Fixed run date; its 12-month rolling baseline is BASELINE_DATE
RUN_DATE = date(2025, 10, 16)
BASELINE_DATE = date(2024, 10, 16)


def make_history(
    closes: List[Optional[float]], start: date = BASELINE_DATE
) -> List[PricePoint]:
    """Build a price series with one entry per consecutive day."""
    return [
        PricePoint(date=start + timedelta(days=offset), close=close)
        for offset, close in enumerate(closes)
    ]


def make_ticker_return(
    ticker: str,
    stock_return: float,
    one_month_return: float = 0.0,
    three_month_return: float = 0.0,
    name: Optional[str] = None,
) -> TickerReturn:
    """Build a snapshot entry with plausible prices."""
    return TickerReturn(
        ticker=ticker,
        name=name or f"{ticker} Inc",
        baseline_price=100.0,
        current_price=round(100.0 * (1 + stock_return / 100), 2),
        stock_return=stock_return,
        one_month_return=one_month_return,
        three_month_return=three_month_return,
        baseline_date=BASELINE_DATE,
        last_updated=RUN_DATE,
    )


def make_snapshot(
    stocks: List[TickerReturn],
    errors: Optional[List[FailedTicker]] = None,
    baseline_date: date = BASELINE_DATE,
) -> Snapshot:
    """Wrap entries in a snapshot with consistent metadata counts."""
    ordered = sorted(stocks, key=lambda stock: stock.stock_return, reverse=True)
    return Snapshot(
        metadata=SnapshotMetadata(
            baseline_date=baseline_date,
            last_updated="2025-10-16T06:00:00.000Z",
            total_stocks=len(stocks) + len(errors or []),
            successful_fetches=len(stocks),
            failed_fetches=len(errors or []),
        ),
        stocks=ordered,
        errors=errors,
    )

