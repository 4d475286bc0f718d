"""Presentation loader: builds the landing page view-model."""

import asyncio
from contextlib import nullcontext
from datetime import date
from typing import Callable, Optional

import aiohttp
from pydantic import ValidationError

from ...config.logging import get_logger
from ...config.settings import Settings
from ...core.price_history import rolling_baseline_date, utc_today
from ...exceptions import DataLoadError
from ..portfolio.models import AllocationData, PortfolioPerformance
from ..portfolio.presentation import build_portfolio_performance
from ..snapshot.models import Snapshot
from .cache import SnapshotCache
from .sources import fetch_json, is_remote

logger = get_logger(__name__)


class PresentationLoader:
    """Loads allocations and the snapshot, then merges them into a view-model."""

    def __init__(
        self,
        snapshot_source: str,
        allocations_source: str,
        cache: Optional[SnapshotCache] = None,
        history_months: int = 12,
        today: Callable[[], date] = utc_today,
    ):
        self.snapshot_source = snapshot_source
        self.allocations_source = allocations_source
        self.cache = cache
        self.history_months = history_months
        self.today = today
        self.logger = logger.bind(service="presentation_loader")

    @classmethod
    def from_settings(
        cls, settings: Settings, cache: Optional[SnapshotCache] = None
    ) -> "PresentationLoader":
        """Create a loader, and its cache when none is given, from settings."""
        if cache is None:
            cache = SnapshotCache(
                ttl_seconds=settings.cache_ttl_seconds,
                path=settings.cache_file_path if settings.cache_persist else None,
            )
        return cls(
            snapshot_source=settings.snapshot_source,
            allocations_source=settings.allocations_source,
            cache=cache,
            history_months=settings.history_months,
        )

    def expected_baseline(self) -> date:
        """Rolling baseline date a fresh snapshot would carry today."""
        return rolling_baseline_date(self.today(), self.history_months)

    async def load_allocations(
        self, session: Optional[aiohttp.ClientSession] = None
    ) -> AllocationData:
        """Fetch and validate the allocation reference file."""
        payload = await fetch_json(self.allocations_source, session)
        try:
            return AllocationData.model_validate(payload)
        except ValidationError as e:
            raise DataLoadError(
                self.allocations_source, f"Invalid allocation data: {e}"
            ) from e

    async def load_snapshot(
        self, session: Optional[aiohttp.ClientSession] = None
    ) -> Snapshot:
        """
        Return the cached snapshot when usable, otherwise fetch and cache it.

        A fetched snapshot whose baseline already differs from today's is
        served but not cached, since the cache would reject it on every read.
        """
        expected_baseline = self.expected_baseline()

        if self.cache is not None:
            cached = await asyncio.to_thread(self.cache.get, expected_baseline)
            if cached is not None:
                return cached

        payload = await fetch_json(self.snapshot_source, session)
        try:
            snapshot = Snapshot.model_validate(payload)
        except ValidationError as e:
            raise DataLoadError(
                self.snapshot_source, f"Invalid snapshot data: {e}"
            ) from e

        if self.cache is not None:
            if snapshot.metadata.baseline_date == expected_baseline:
                await asyncio.to_thread(self.cache.store, snapshot)
            else:
                self.logger.info(
                    "Not caching snapshot with outdated baseline",
                    baseline_date=snapshot.metadata.baseline_date.isoformat(),
                    expected_baseline=expected_baseline.isoformat(),
                )

        self.logger.info(
            "Snapshot loaded",
            source=self.snapshot_source,
            stocks=len(snapshot.stocks),
            baseline_date=snapshot.metadata.baseline_date.isoformat(),
        )
        return snapshot

    def _session(self):
        if is_remote(self.snapshot_source) or is_remote(self.allocations_source):
            return aiohttp.ClientSession()
        return nullcontext(None)

    async def get_snapshot(self) -> Snapshot:
        """Load the snapshot on its own, through the cache."""
        async with self._session() as session:
            return await self.load_snapshot(session)

    async def initialize(self) -> PortfolioPerformance:
        """
        Load both inputs concurrently and build the view-model.

        Returns:
            PortfolioPerformance for the page

        Raises:
            DataLoadError: If either input cannot be fetched or parsed
        """
        try:
            async with self._session() as session:
                allocations, snapshot = await asyncio.gather(
                    self.load_allocations(session), self.load_snapshot(session)
                )
        except DataLoadError as e:
            self.logger.error(
                "Failed to load portfolio data", source=e.source, error=e.message
            )
            raise

        performance = build_portfolio_performance(snapshot, allocations)

        self.logger.info(
            "Portfolio data initialized",
            holdings=len(performance.holdings),
            unmatched=performance.unmatched_tickers,
            one_year_return=performance.metrics.one_year.portfolio,
        )
        return performance

    async def refresh(self) -> PortfolioPerformance:
        """Clear the cache and initialize again."""
        if self.cache is not None:
            await asyncio.to_thread(self.cache.clear)
        return await self.initialize()
