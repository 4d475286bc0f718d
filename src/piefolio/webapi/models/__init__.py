"""API models for piefolio."""

from .responses import (
    AllocationResponse,
    BaseResponse,
    ErrorResponse,
    HoldingsResponse,
    PortfolioResponse,
    SnapshotResponse,
    StatusResponse,
    SuccessResponse,
    TopPerformersResponse,
)

__all__ = [
    "AllocationResponse",
    "BaseResponse",
    "ErrorResponse",
    "HoldingsResponse",
    "PortfolioResponse",
    "SnapshotResponse",
    "StatusResponse",
    "SuccessResponse",
    "TopPerformersResponse",
]
