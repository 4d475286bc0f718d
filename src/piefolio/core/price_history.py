"""Daily price history retrieval from Yahoo Finance."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional

import pandas as pd
import yfinance as yf


@dataclass(frozen=True)
class PricePoint:
    """One trading day's closing price."""

    date: date
    close: Optional[float]


def utc_today() -> date:
    """Current date in UTC, the calendar every run is measured against."""
    return datetime.now(timezone.utc).date()


def rolling_baseline_date(today: Optional[date] = None, months: int = 12) -> date:
    """
    Get the start of the rolling window.

    Args:
        today: Reference date (defaults to the current UTC date)
        months: Window length in calendar months

    Returns:
        The date exactly ``months`` months before ``today``. Month ends are
        clamped, so 29 February maps to 28 February of the previous year.
    """
    today = today or utc_today()
    return (pd.Timestamp(today) - pd.DateOffset(months=months)).date()


def get_price_history(symbol: str, start: date, end: date) -> List[PricePoint]:
    """
    Get daily closing prices for a symbol.

    Args:
        symbol: Stock symbol (e.g., 'AAPL', 'MSFT')
        start: First date of the range
        end: End of the range (exclusive, as the provider treats it)

    Returns:
        Price points in ascending date order. Missing closes are kept as None
        so that callers can tell a gap from a zero price.
    """
    stock = yf.Ticker(symbol)
    data = stock.history(
        start=start.isoformat(),
        end=end.isoformat(),
        interval="1d",
        auto_adjust=False,
    )

    if data is None or data.empty:
        return []

    closes = data["Close"].sort_index()

    return [
        PricePoint(
            date=pd.Timestamp(timestamp).date(),
            close=None if pd.isna(close) else float(close),
        )
        for timestamp, close in closes.items()
    ]
