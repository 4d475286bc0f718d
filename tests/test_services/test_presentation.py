"""Tests for landing page view-model assembly."""

import sys

import pytest

sys.path.append("src")
from helpers import BASELINE_DATE, make_snapshot, make_ticker_return
from piefolio.services.portfolio import (
    AllocationData,
    Holding,
    allocation_breakdown,
    build_metrics,
    build_portfolio_performance,
    get_top_performers,
    merge_snapshot_and_allocations,
    order_holdings_for_display,
)


class TestTopPerformers:
    """Test top performer selection."""

    def test_positive_returns_only(self):
        """Only tickers with a positive total return qualify."""
        snapshot = make_snapshot(
            [
                make_ticker_return("AAA", 5.0),
                make_ticker_return("BBB", 0.0),
                make_ticker_return("CCC", -3.0),
            ]
        )

        assert [s.ticker for s in get_top_performers(snapshot)] == ["AAA"]

    def test_first_entries_in_snapshot_order(self):
        """The best entries are taken from the sorted snapshot."""
        snapshot = make_snapshot(
            [make_ticker_return(f"T{i}", float(i)) for i in range(1, 6)]
        )

        top = get_top_performers(snapshot, count=3)

        assert [s.ticker for s in top] == ["T5", "T4", "T3"]

    def test_missing_snapshot(self):
        """No snapshot means no performers."""
        assert get_top_performers(None) == []


class TestBuildMetrics:
    """Test per-timeframe portfolio metrics."""

    def test_metrics(self, sample_snapshot, sample_allocations):
        """Every timeframe is computed with a zero benchmark."""
        metrics = build_metrics(sample_snapshot, sample_allocations)

        assert metrics.one_month.portfolio == pytest.approx(0.8)
        assert metrics.three_month.portfolio == pytest.approx(3.6)
        assert metrics.one_year.portfolio == pytest.approx(4.0)
        assert metrics.one_year.benchmark == 0.0
        assert metrics.one_year.difference == metrics.one_year.portfolio

    def test_unavailable(self, sample_allocations):
        """Without matches every metric is unavailable."""
        metrics = build_metrics(make_snapshot([]), sample_allocations)

        assert metrics.one_year.portfolio is None
        assert metrics.one_year.difference is None


class TestBuildPortfolioPerformance:
    """Test the view-model consumed by the page."""

    def test_view_model(self, sample_snapshot, sample_allocations):
        """Merged holdings, metadata and metrics are combined."""
        performance = build_portfolio_performance(sample_snapshot, sample_allocations)

        assert [h.ticker for h in performance.holdings] == ["AAA", "BBB"]
        assert performance.data_source == "LIVE_API"
        assert performance.baseline_date == BASELINE_DATE
        assert performance.last_updated == sample_snapshot.metadata.last_updated
        assert performance.metrics.one_year.portfolio == pytest.approx(4.0)

    def test_camel_case_dump(self, sample_snapshot, sample_allocations):
        """The view-model serialises with camelCase keys."""
        performance = build_portfolio_performance(sample_snapshot, sample_allocations)

        dumped = performance.model_dump(by_alias=True, mode="json")

        assert dumped["dataSource"] == "LIVE_API"
        assert dumped["sectorColors"] == {"Technology": "#3B82F6"}
        assert dumped["baselineDate"] == "2024-10-16"
        assert "oneYear" in dumped["metrics"]
        assert dumped["holdings"][0]["totalReturn"] == 10.0

    def test_allocation_extras_carried(self, sample_snapshot):
        """Additional allocation-file keys reach the view-model."""
        allocations = AllocationData.model_validate(
            {
                "holdings": [
                    {"name": "Alpha Corp", "ticker": "AAA", "allocation": 100}
                ],
                "startDate": "2024-06-01",
                "monthsActive": 16,
                "lastUpdated": "2020-01-01T00:00:00.000Z",
            }
        )

        performance = build_portfolio_performance(sample_snapshot, allocations)
        dumped = performance.model_dump(by_alias=True, mode="json")

        assert dumped["startDate"] == "2024-06-01"
        assert dumped["monthsActive"] == 16
        assert dumped["lastUpdated"] == sample_snapshot.metadata.last_updated


class TestOrderHoldingsForDisplay:
    """Test holdings table ordering."""

    @pytest.fixture
    def holdings(self):
        # Names later in the alphabet belong to better performers
        holdings = [
            Holding(
                name=chr(ord("A") + value),
                ticker=f"T{value}",
                allocation=1,
                total_return=float(value),
            )
            for value in range(1, 13)
        ]
        holdings.append(Holding(name="Zero", ticker="T0", allocation=1))
        return holdings

    def test_ordering(self, holdings):
        """Top three, then six alphabetically, then the rest by return."""
        ordered = order_holdings_for_display(holdings)

        assert [h.ticker for h in ordered] == [
            "T12",
            "T11",
            "T10",
            "T4",
            "T5",
            "T6",
            "T7",
            "T8",
            "T9",
            "T3",
            "T2",
            "T1",
            "T0",
        ]

    def test_short_list(self):
        """Lists shorter than the featured count are sorted by return."""
        holdings = [
            Holding(name="B", ticker="B", allocation=1, total_return=1.0),
            Holding(name="A", ticker="A", allocation=1, total_return=2.0),
        ]

        assert [h.ticker for h in order_holdings_for_display(holdings)] == ["A", "B"]


class TestAllocationBreakdown:
    """Test the allocation breakdown."""

    def test_sector_colors(self, sample_snapshot, sample_allocations):
        """Known sectors use their colour, others fall back to grey."""
        view = merge_snapshot_and_allocations(sample_snapshot, sample_allocations)

        slices = allocation_breakdown(view)

        assert [(s.ticker, s.color) for s in slices] == [
            ("AAA", "#3B82F6"),
            ("BBB", "#6B7280"),
        ]
        assert slices[0].allocation == 60.0

    def test_empty(self, sample_snapshot):
        """No holdings means no slices."""
        view = merge_snapshot_and_allocations(
            sample_snapshot, AllocationData(holdings=[])
        )

        assert allocation_breakdown(view) == []
