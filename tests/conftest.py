"""Shared test configuration and fixtures."""

import json
import sys

import pytest

sys.path.append("src")
from helpers import make_snapshot, make_ticker_return
from piefolio.services.portfolio.models import AllocationData, Holding
from piefolio.services.snapshot.models import FailedTicker


@pytest.fixture
def sample_snapshot():
    """Snapshot with two held tickers, one unheld ticker and one failure."""
    return make_snapshot(
        [
            make_ticker_return("AAA", 10.0, 2.0, 4.0, name="Alpha Corp"),
            make_ticker_return("BBB", -5.0, -1.0, 3.0, name="Beta Corp"),
            make_ticker_return("XXX", 50.0, 5.0, 20.0, name="Unheld Corp"),
        ],
        errors=[FailedTicker(ticker="ZZZ", name="Zeta Corp", error="No data available")],
    )


@pytest.fixture
def sample_allocations():
    """Allocation data holding AAA and BBB at 60/40."""
    return AllocationData(
        holdings=[
            Holding(
                name="Alpha Corp",
                ticker="AAA",
                sector="Technology",
                allocation=60.0,
                category="Compute",
                description="Alpha description",
            ),
            Holding(
                name="Beta Corp",
                ticker="BBB",
                sector="Energy",
                allocation=40.0,
                category="Power",
                description="Beta description",
            ),
        ],
        sector_colors={"Technology": "#3B82F6"},
    )


@pytest.fixture
def data_files(tmp_path, sample_snapshot, sample_allocations):
    """Write the sample snapshot and allocations to disk."""
    snapshot_path = tmp_path / "stock-data.json"
    snapshot_path.write_text(sample_snapshot.to_json(), encoding="utf-8")

    allocations_path = tmp_path / "portfolio-allocations.json"
    allocations_path.write_text(
        json.dumps(sample_allocations.model_dump(by_alias=True, exclude_none=True)),
        encoding="utf-8",
    )

    return {"snapshot": snapshot_path, "allocations": allocations_path}


@pytest.fixture(autouse=True)
def clean_lru_cache():
    """Clear LRU cache between tests to avoid state pollution."""
    from piefolio.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
