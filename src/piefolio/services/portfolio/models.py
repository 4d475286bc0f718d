"""Data models for allocation reference data and the merged portfolio view."""

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_SECTOR_COLOR = "#6B7280"
LIVE_DATA_SOURCE = "LIVE_API"


class Timeframe(str, Enum):
    """Return windows shown on the landing page."""

    ONE_MONTH = "1M"
    THREE_MONTH = "3M"
    TWELVE_MONTH = "12M"


class PortfolioModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Holding(PortfolioModel):
    """
    One static allocation record.

    Return fields are optional and may hold stale values from the allocation
    file; the merge overlays live snapshot values on top of them. Unknown keys
    from the allocation file are kept as extra fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    name: str
    ticker: str
    sector: str = ""
    allocation: float
    category: Optional[str] = Field(
        None, validation_alias=AliasChoices("category", "aiCategory")
    )
    description: str = ""

    total_return: Optional[float] = None
    one_month_return: Optional[float] = None
    three_month_return: Optional[float] = None
    current_price: Optional[float] = None
    baseline_price: Optional[float] = None
    last_updated: Optional[date] = None


class AllocationData(PortfolioModel):
    """Allocation reference file: holdings plus the sector colour lookup."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    holdings: List[Holding]
    sector_colors: Dict[str, str] = Field(default_factory=dict)


class MergedView(PortfolioModel):
    """Holdings joined with live snapshot returns, one entry per holding."""

    holdings: List[Holding]
    sector_colors: Dict[str, str] = Field(default_factory=dict)
    last_updated: str
    data_source: str = LIVE_DATA_SOURCE
    unmatched_tickers: List[str] = Field(default_factory=list)


class TimeframeMetric(PortfolioModel):
    """Portfolio return for one timeframe; None when it cannot be computed."""

    portfolio: Optional[float]
    benchmark: float = 0.0
    difference: Optional[float]


class PortfolioMetrics(PortfolioModel):
    """Weighted returns for every timeframe."""

    one_month: TimeframeMetric
    three_month: TimeframeMetric
    one_year: TimeframeMetric


class PortfolioPerformance(MergedView):
    """
    View-model consumed by the landing page.

    Keys of the allocation file beyond holdings and sector colours (such as a
    start date) are carried over as extra fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    baseline_date: date
    metrics: PortfolioMetrics


class AllocationSlice(PortfolioModel):
    """One segment of the allocation breakdown."""

    ticker: str
    name: str
    sector: str
    allocation: float
    color: str
