"""Data models for the generated performance snapshot."""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TickerReturn(SnapshotModel):
    """One ticker's computed performance for a snapshot date."""

    ticker: str
    name: str
    baseline_price: float
    current_price: float
    stock_return: float = Field(..., description="Total return since baseline, %")
    one_month_return: float
    three_month_return: float
    baseline_date: date
    last_updated: date


class FailedTicker(SnapshotModel):
    """A ticker whose returns could not be computed in this run."""

    ticker: str
    name: str
    error: str


class SnapshotMetadata(SnapshotModel):
    """Run-level information about a snapshot."""

    baseline_date: date
    last_updated: str = Field(..., description="ISO-8601 generation timestamp")
    total_stocks: int
    successful_fetches: int
    failed_fetches: int


class Snapshot(SnapshotModel):
    """Full output of one snapshot builder run."""

    metadata: SnapshotMetadata
    stocks: List[TickerReturn] = Field(
        default_factory=list, description="Sorted by stockReturn, highest first"
    )
    errors: Optional[List[FailedTicker]] = None

    def returns_by_ticker(self) -> Dict[str, TickerReturn]:
        """Index successful entries by ticker symbol."""
        return {stock.ticker: stock for stock in self.stocks}

    def to_json(self) -> str:
        """Serialise in the on-disk format read by the presentation loader."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)
