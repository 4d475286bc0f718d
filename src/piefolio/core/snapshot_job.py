"""
Snapshot job - fetches price history for the pie and writes the snapshot file.

Usage:
    piefolio-snapshot

Run daily or weekly. The landing page reads the generated file, so visitors
never trigger upstream API calls.
"""

import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from ..config.logging import get_logger
from ..config.settings import Settings, get_settings
from ..exceptions import SnapshotWriteError
from ..services.snapshot.builder import SnapshotBuilder
from ..services.snapshot.models import Snapshot
from ..utils.config import initialize_application
from .universe import PORTFOLIO_STOCKS

SUMMARY_TOP_COUNT = 5


def _signed(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{value}%"


def format_summary(snapshot: Snapshot, output_path: Path) -> str:
    """Human-readable run summary: counts, top performers and failures."""
    metadata = snapshot.metadata
    rule = "=" * 60
    lines: List[str] = [
        "",
        rule,
        "Stock data fetched",
        rule,
        f"Baseline date: {metadata.baseline_date.isoformat()}",
        f"Total stocks: {metadata.total_stocks}",
        f"Successful: {metadata.successful_fetches}",
        f"Failed: {metadata.failed_fetches}",
        f"Saved to: {output_path}",
        rule,
    ]

    if snapshot.stocks:
        lines.append("")
        lines.append(f"Top {SUMMARY_TOP_COUNT} performers:")
        for rank, stock in enumerate(snapshot.stocks[:SUMMARY_TOP_COUNT], start=1):
            lines.append(
                f"{rank}. {stock.ticker} ({stock.name}): {_signed(stock.stock_return)}"
            )

    if snapshot.errors:
        lines.append("")
        lines.append("Failed stocks:")
        for failure in snapshot.errors:
            lines.append(f"- {failure.ticker} ({failure.name}): {failure.error}")

    return "\n".join(lines)


def run_snapshot(
    settings: Optional[Settings] = None, builder: Optional[SnapshotBuilder] = None
) -> Snapshot:
    """
    Build the snapshot for the configured universe and write it.

    Args:
        settings: Application settings (defaults to the cached settings)
        builder: Snapshot builder to use (built from settings if omitted)

    Returns:
        The snapshot that was written

    Raises:
        SnapshotWriteError: If the snapshot file cannot be written
    """
    settings = settings or get_settings()
    output_path = settings.get_snapshot_output_path()

    builder = builder or SnapshotBuilder(
        stocks=PORTFOLIO_STOCKS,
        delay_seconds=settings.request_delay_seconds,
        history_months=settings.history_months,
    )
    snapshot = builder.build()
    builder.write(snapshot, output_path)

    print(format_summary(snapshot, output_path))
    return snapshot


def run_snapshot_job() -> None:
    """Scheduler entry point: run the snapshot without exiting the process."""
    logger = get_logger(__name__)
    try:
        run_snapshot()
    except SnapshotWriteError as e:
        logger.error("Scheduled snapshot run failed", error=e.message)


def main() -> None:
    """Command-line entry point. Takes no arguments."""
    load_dotenv()

    initialize_application()
    logger = get_logger(__name__)
    logger.info("Starting snapshot job", total_stocks=len(PORTFOLIO_STOCKS))

    try:
        run_snapshot()
    except SnapshotWriteError as e:
        logger.error("Snapshot job failed", error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    logger.info("Snapshot job completed")


if __name__ == "__main__":
    main()
