"""Response models for the piefolio API."""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ...services.portfolio.models import (
    AllocationSlice,
    Holding,
    PortfolioPerformance,
)
from ...services.snapshot.models import Snapshot, TickerReturn

# Generic type for data responses
T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseResponse(BaseModel):
    """Base response model for all API responses."""

    success: bool = Field(..., description="Whether the request was successful")
    timestamp: datetime = Field(
        default_factory=_utcnow, description="Response timestamp"
    )
    request_id: Optional[str] = Field(
        None, description="Unique request identifier for tracking"
    )

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    @field_serializer("timestamp")
    def serialize_timestamp(self, dt: datetime) -> str:
        """Serialize datetime to ISO format with Z suffix."""
        return dt.isoformat().replace("+00:00", "Z")


class SuccessResponse(BaseResponse, Generic[T]):
    """Generic success response with typed data."""

    success: bool = Field(True, description="Always true for success responses")
    data: T = Field(..., description="Response data")
    message: Optional[str] = Field(None, description="Optional success message")


class ErrorResponse(BaseResponse):
    """Error response model."""

    success: bool = Field(False, description="Always false for error responses")
    error: Dict[str, Any] = Field(..., description="Error details")


class PortfolioResponse(SuccessResponse[PortfolioPerformance]):
    """Merged portfolio view-model."""

    data: PortfolioPerformance = Field(..., description="Portfolio performance")


class HoldingsResponse(SuccessResponse[List[Holding]]):
    """Holdings in display order."""

    data: List[Holding] = Field(..., description="Merged holdings")


class TopPerformersResponse(SuccessResponse[List[TickerReturn]]):
    """Best performing tickers in the snapshot."""

    data: List[TickerReturn] = Field(..., description="Top performers")


class AllocationResponse(SuccessResponse[List[AllocationSlice]]):
    """Allocation breakdown with sector colours."""

    data: List[AllocationSlice] = Field(..., description="Allocation slices")


class SnapshotResponse(SuccessResponse[Snapshot]):
    """Raw generated snapshot."""

    data: Snapshot = Field(..., description="Snapshot document")


class StatusResponse(SuccessResponse[Dict[str, Any]]):
    """Generic status response."""

    data: Dict[str, Any] = Field(..., description="Status data")

    @classmethod
    def create(
        cls,
        data: Dict[str, Any],
        message: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> "StatusResponse":
        """Create a status response."""
        return cls(success=True, data=data, message=message, request_id=request_id)
