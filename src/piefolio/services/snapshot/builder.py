"""Snapshot builder: computes returns for the whole ticker universe."""

import time
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from ...config.logging import get_logger, log_performance
from ...core.price_history import (
    PricePoint,
    get_price_history,
    rolling_baseline_date,
    utc_today,
)
from ...core.returns import calculate_returns
from ...core.universe import PORTFOLIO_STOCKS, PortfolioStock
from ...exceptions import (
    ReturnCalculationError,
    SnapshotWriteError,
    UpstreamRequestError,
)
from ...utils.files import write_text_atomic
from .models import FailedTicker, Snapshot, SnapshotMetadata, TickerReturn

logger = get_logger(__name__)

HistoryFetcher = Callable[[str, date, date], Sequence[PricePoint]]


def _utc_timestamp() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class SnapshotBuilder:
    """Drives the return calculator across the ticker universe."""

    def __init__(
        self,
        stocks: Optional[Sequence[PortfolioStock]] = None,
        fetch_history: HistoryFetcher = get_price_history,
        delay_seconds: float = 1.0,
        history_months: int = 12,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.stocks = list(PORTFOLIO_STOCKS if stocks is None else stocks)
        self.fetch_history = fetch_history
        self.delay_seconds = delay_seconds
        self.history_months = history_months
        self.sleep = sleep
        self.logger = logger.bind(service="snapshot_builder")

    def process_stock(
        self, stock: PortfolioStock, baseline_date: date, today: date
    ) -> Union[TickerReturn, FailedTicker]:
        """
        Compute one ticker's returns.

        Args:
            stock: Ticker and display name
            baseline_date: Start of the rolling window
            today: End of the rolling window

        Returns:
            TickerReturn on success, FailedTicker carrying the reason otherwise
        """
        self.logger.info("Fetching price history", symbol=stock.ticker)

        try:
            history = self.fetch_history(stock.ticker, baseline_date, today)
        except Exception as e:
            error = UpstreamRequestError(stock.ticker, str(e))
            self.logger.error(
                "Price history request failed",
                symbol=stock.ticker,
                error=error.message,
            )
            return FailedTicker(
                ticker=stock.ticker, name=stock.name, error=error.message
            )

        try:
            figures = calculate_returns(history)
        except ReturnCalculationError as e:
            self.logger.error(
                "Return calculation failed",
                symbol=stock.ticker,
                error=e.message,
                entries=len(history),
            )
            return FailedTicker(ticker=stock.ticker, name=stock.name, error=e.message)

        self.logger.info(
            "Returns calculated",
            symbol=stock.ticker,
            baseline_price=figures.baseline_price,
            current_price=figures.current_price,
            total_return=figures.total_return,
            one_month_return=figures.one_month_return,
            three_month_return=figures.three_month_return,
        )

        return TickerReturn(
            ticker=stock.ticker,
            name=stock.name,
            baseline_price=figures.baseline_price,
            current_price=figures.current_price,
            stock_return=figures.total_return,
            one_month_return=figures.one_month_return,
            three_month_return=figures.three_month_return,
            baseline_date=baseline_date,
            last_updated=today,
        )

    def build(self, today: Optional[date] = None) -> Snapshot:
        """
        Process every ticker sequentially and assemble the snapshot.

        Args:
            today: Run date (defaults to the current UTC date)

        Returns:
            Snapshot with successes sorted by total return, highest first
        """
        started = time.perf_counter()
        today = today or utc_today()
        baseline_date = rolling_baseline_date(today, self.history_months)

        self.logger.info(
            "Starting snapshot run",
            baseline_date=baseline_date.isoformat(),
            end_date=today.isoformat(),
            total_stocks=len(self.stocks),
        )

        successful: List[TickerReturn] = []
        failed: List[FailedTicker] = []

        for index, stock in enumerate(self.stocks):
            if index > 0 and self.delay_seconds > 0:
                self.sleep(self.delay_seconds)

            result = self.process_stock(stock, baseline_date, today)
            if isinstance(result, FailedTicker):
                failed.append(result)
            else:
                successful.append(result)

        successful.sort(key=lambda stock: stock.stock_return, reverse=True)

        snapshot = Snapshot(
            metadata=SnapshotMetadata(
                baseline_date=baseline_date,
                last_updated=_utc_timestamp(),
                total_stocks=len(self.stocks),
                successful_fetches=len(successful),
                failed_fetches=len(failed),
            ),
            stocks=successful,
            errors=failed or None,
        )

        log_performance(
            "snapshot_build",
            (time.perf_counter() - started) * 1000,
            successful=len(successful),
            failed=len(failed),
        )

        return snapshot

    def write(self, snapshot: Snapshot, output_path: Union[str, Path]) -> Path:
        """
        Write the snapshot document, replacing any previous one in a single step.

        Args:
            snapshot: Snapshot to persist
            output_path: Destination JSON file

        Returns:
            The path written

        Raises:
            SnapshotWriteError: If the file cannot be written
        """
        path = Path(output_path)

        try:
            write_text_atomic(path, snapshot.to_json())
        except OSError as e:
            self.logger.error(
                "Failed to write snapshot", path=str(path), error=str(e)
            )
            raise SnapshotWriteError(
                f"Could not write snapshot to {path}: {e}"
            ) from e

        self.logger.info("Snapshot written", path=str(path))
        return path
