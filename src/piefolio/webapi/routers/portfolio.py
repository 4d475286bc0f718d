"""Portfolio view-model and snapshot endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from ...config.logging import get_logger
from ...services.loader import PresentationLoader
from ...services.portfolio.presentation import (
    allocation_breakdown,
    get_top_performers,
    order_holdings_for_display,
)
from ..models.responses import (
    AllocationResponse,
    HoldingsResponse,
    PortfolioResponse,
    SnapshotResponse,
    TopPerformersResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def get_loader(request: Request) -> PresentationLoader:
    """Dependency returning the application's presentation loader."""
    return request.app.state.loader


@router.get(
    "/portfolio",
    response_model=PortfolioResponse,
    summary="Portfolio Performance",
    description="Holdings merged with live returns plus weighted portfolio metrics",
)
async def get_portfolio(
    request: Request, loader: PresentationLoader = Depends(get_loader)
):
    """Build the landing page view-model."""
    request_id = getattr(request.state, "request_id", None)

    performance = await loader.initialize()

    return PortfolioResponse(success=True, data=performance, request_id=request_id)


@router.get(
    "/portfolio/holdings",
    response_model=HoldingsResponse,
    summary="Holdings Table",
    description="Merged holdings ordered for display",
)
async def get_holdings(
    request: Request, loader: PresentationLoader = Depends(get_loader)
):
    """
    Get holdings for the holdings table.

    Top three performers first, the next six alphabetically, then the rest.
    """
    request_id = getattr(request.state, "request_id", None)

    performance = await loader.initialize()

    return HoldingsResponse(
        success=True,
        data=order_holdings_for_display(performance.holdings),
        request_id=request_id,
    )


@router.get(
    "/portfolio/top-performers",
    response_model=TopPerformersResponse,
    summary="Top Performers",
    description="Best positive performers in the current snapshot",
)
async def get_top_performers_endpoint(
    request: Request,
    count: int = Query(3, ge=1, le=25, description="Number of performers"),
    loader: PresentationLoader = Depends(get_loader),
):
    """Get the top performing tickers by total return."""
    request_id = getattr(request.state, "request_id", None)

    snapshot = await loader.get_snapshot()

    return TopPerformersResponse(
        success=True,
        data=get_top_performers(snapshot, count),
        request_id=request_id,
    )


@router.get(
    "/portfolio/allocation",
    response_model=AllocationResponse,
    summary="Allocation Breakdown",
    description="Allocation per holding with sector colours",
)
async def get_allocation(
    request: Request, loader: PresentationLoader = Depends(get_loader)
):
    """Get the allocation breakdown."""
    request_id = getattr(request.state, "request_id", None)

    performance = await loader.initialize()

    return AllocationResponse(
        success=True,
        data=allocation_breakdown(performance),
        request_id=request_id,
    )


@router.post(
    "/portfolio/refresh",
    response_model=PortfolioResponse,
    summary="Refresh Portfolio Data",
    description="Drop the cached snapshot and reload both inputs",
)
async def refresh_portfolio(
    request: Request, loader: PresentationLoader = Depends(get_loader)
):
    """Clear the snapshot cache and rebuild the view-model."""
    request_id = getattr(request.state, "request_id", None)

    logger.info("Portfolio refresh requested", request_id=request_id)
    performance = await loader.refresh()

    return PortfolioResponse(
        success=True,
        data=performance,
        message="Portfolio data refreshed",
        request_id=request_id,
    )


@router.get(
    "/snapshot",
    response_model=SnapshotResponse,
    summary="Snapshot",
    description="The generated snapshot document",
)
async def get_snapshot(
    request: Request, loader: PresentationLoader = Depends(get_loader)
):
    """Get the raw snapshot."""
    request_id = getattr(request.state, "request_id", None)

    snapshot = await loader.get_snapshot()

    return SnapshotResponse(success=True, data=snapshot, request_id=request_id)
