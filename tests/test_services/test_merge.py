"""Tests for merging allocation data with snapshot returns."""

import sys

import pytest
from structlog.testing import capture_logs

sys.path.append("src")
from helpers import make_snapshot, make_ticker_return
from piefolio.exceptions import MergeError
from piefolio.services.portfolio import (
    AllocationData,
    Holding,
    merge_snapshot_and_allocations,
)


class TestMergeSnapshotAndAllocations:
    """Test the holdings-driven join."""

    def test_every_holding_once_in_order(self, sample_snapshot, sample_allocations):
        """Output holdings mirror the allocation file one to one."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        assert [h.ticker for h in view.holdings] == ["AAA", "BBB"]

    def test_live_fields_overlay(self, sample_snapshot, sample_allocations):
        """Return and price fields come from the snapshot."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        alpha = view.holdings[0]
        assert alpha.total_return == 10.0
        assert alpha.one_month_return == 2.0
        assert alpha.three_month_return == 4.0
        assert alpha.current_price == 110.0
        assert alpha.baseline_price == 100.0
        assert alpha.last_updated is not None

    def test_static_fields_kept(self, sample_snapshot, sample_allocations):
        """Allocation, sector and description stay from the holding."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        alpha = view.holdings[0]
        assert alpha.allocation == 60.0
        assert alpha.sector == "Technology"
        assert alpha.category == "Compute"
        assert alpha.description == "Alpha description"

    def test_snapshot_wins_over_stale_values(self, sample_snapshot):
        """Stale return values in the allocation file are replaced."""
        allocations = AllocationData(
            holdings=[
                Holding(
                    name="Alpha Corp", ticker="AAA", allocation=100, total_return=999.0
                )
            ]
        )

        view = merge_snapshot_and_allocations(sample_snapshot, allocations)

        assert view.holdings[0].total_return == 10.0

    def test_unmatched_holding_passes_through(self, sample_snapshot):
        """A holding missing from the snapshot keeps its own fields."""
        missing = Holding(
            name="Missing Corp", ticker="MISS", allocation=10, total_return=1.5
        )
        allocations = AllocationData(holdings=[missing])

        with capture_logs() as logs:
            view = merge_snapshot_and_allocations(sample_snapshot, allocations)

        assert view.holdings == [missing]
        assert view.unmatched_tickers == ["MISS"]
        assert any(
            log["event"] == "Holding not found in snapshot data"
            and log["ticker"] == "MISS"
            for log in logs
        )

    def test_empty_snapshot_keeps_all_holdings(self, sample_allocations):
        """With no snapshot entries every holding is unmatched but present."""
        view = merge_snapshot_and_allocations(make_snapshot([]), sample_allocations)

        assert [h.ticker for h in view.holdings] == ["AAA", "BBB"]
        assert view.unmatched_tickers == ["AAA", "BBB"]

    def test_unheld_snapshot_ticker_absent(self, sample_snapshot, sample_allocations):
        """Snapshot-only tickers never appear in the merged holdings."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        assert "XXX" not in {h.ticker for h in view.holdings}

    def test_ticker_match_is_exact(self):
        """Tickers match case-sensitively."""
        snapshot = make_snapshot([make_ticker_return("AAPL", 12.0)])
        allocations = AllocationData(
            holdings=[Holding(name="Apple", ticker="aapl", allocation=100)]
        )

        view = merge_snapshot_and_allocations(snapshot, allocations)

        assert view.holdings[0].total_return is None
        assert view.unmatched_tickers == ["aapl"]

    def test_metadata(self, sample_snapshot, sample_allocations):
        """The view carries the snapshot timestamp, source and colours."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        assert view.last_updated == sample_snapshot.metadata.last_updated
        assert view.data_source == "LIVE_API"
        assert view.sector_colors == {"Technology": "#3B82F6"}

    def test_missing_input(self, sample_allocations):
        """A missing input raises MergeError."""
        with pytest.raises(MergeError) as exc_info:
            merge_snapshot_and_allocations(None, sample_allocations)

        assert exc_info.value.message == "Failed to merge stock and portfolio data"
