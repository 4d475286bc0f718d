"""Percentage return calculations over a daily close series."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ..exceptions import MissingPriceError, NoDataError
from .price_history import PricePoint

# Lookbacks count trading-day entries in the series, not calendar days
ONE_MONTH_LOOKBACK = 30
THREE_MONTH_LOOKBACK = 90


@dataclass(frozen=True)
class ReturnFigures:
    """Returns derived from one ticker's price history."""

    baseline_price: float
    current_price: float
    one_month_return: float
    three_month_return: float
    total_return: float


def reference_index(length: int, lookback: int) -> int:
    """Index of the reference close ``lookback`` entries before the last one."""
    return max(0, length - lookback)


def percent_change(current: float, reference: float) -> float:
    """Percentage change from reference to current, rounded to 2 decimals."""
    return round((current - reference) / reference * 100, 2)


def _is_missing(price: Optional[float]) -> bool:
    return not price or math.isnan(price)


def calculate_returns(history: Sequence[PricePoint]) -> ReturnFigures:
    """
    Calculate 1-month, 3-month and total returns for a price series.

    When the series is shorter than a lookback window the reference index
    collapses to the first entry, so that window's return equals the total
    return.

    Args:
        history: Price points in ascending date order

    Returns:
        ReturnFigures with prices and returns rounded to 2 decimals

    Raises:
        NoDataError: If the series is empty
        MissingPriceError: If a close needed for a calculation is missing or zero
    """
    if not history:
        raise NoDataError()

    baseline_price = history[0].close
    current_price = history[-1].close

    if _is_missing(baseline_price) or _is_missing(current_price):
        raise MissingPriceError()

    one_month_price = history[reference_index(len(history), ONE_MONTH_LOOKBACK)].close
    three_month_price = history[
        reference_index(len(history), THREE_MONTH_LOOKBACK)
    ].close

    if _is_missing(one_month_price) or _is_missing(three_month_price):
        raise MissingPriceError("Missing reference price data")

    return ReturnFigures(
        baseline_price=round(baseline_price, 2),
        current_price=round(current_price, 2),
        one_month_return=percent_change(current_price, one_month_price),
        three_month_return=percent_change(current_price, three_month_price),
        total_return=percent_change(current_price, baseline_price),
    )
