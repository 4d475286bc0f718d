"""Exception hierarchy shared by the snapshot builder and the presentation loader."""

from typing import Any, Dict, Optional


class PiefolioError(Exception):
    """Base exception for piefolio."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ReturnCalculationError(PiefolioError):
    """A ticker's price history could not be turned into returns."""


class NoDataError(ReturnCalculationError):
    """The upstream provider returned an empty price history."""

    def __init__(self, message: str = "No data available"):
        super().__init__(message)


class MissingPriceError(ReturnCalculationError):
    """A close price needed for a return calculation is missing or zero."""

    def __init__(self, message: str = "Missing price data"):
        super().__init__(message)


class UpstreamRequestError(PiefolioError):
    """The historical price request for a single ticker failed."""

    def __init__(self, symbol: str, reason: str):
        super().__init__(reason, details={"symbol": symbol})
        self.symbol = symbol


class SnapshotWriteError(PiefolioError):
    """The snapshot document could not be written to durable storage."""


class DataLoadError(PiefolioError):
    """A required input of the presentation loader could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(reason, details={"source": source})
        self.source = source


class MergeError(PiefolioError):
    """Snapshot and allocation data could not be merged."""
