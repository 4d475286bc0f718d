"""FastAPI application serving the landing page data."""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config.logging import get_logger
from ..config.settings import get_settings
from ..services.loader import PresentationLoader
from .exceptions import setup_exception_handlers
from .health import router as health_router
from .routers import portfolio_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "Starting piefolio API",
        snapshot_source=app.state.loader.snapshot_source,
        allocations_source=app.state.loader.allocations_source,
    )

    yield

    logger.info("piefolio API shutdown completed")


async def add_request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.info(
        "Request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        query_params=str(request.query_params),
        user_agent=request.headers.get("user-agent"),
        remote_addr=request.client.host if request.client else None,
    )

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id

    logger.info(
        "Request completed",
        request_id=request_id,
        status_code=response.status_code,
        method=request.method,
        path=request.url.path,
    )

    return response


def create_app(loader: Optional[PresentationLoader] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        loader: Presentation loader to serve from (built from settings if omitted)
    """
    app = FastAPI(
        title="piefolio API",
        description="""
        Portfolio pie performance data for the landing page.

        * **Portfolio**: holdings merged with live returns and weighted metrics
        * **Top performers**: best tickers from the latest snapshot
        * **Allocation**: per-holding allocation with sector colours
        * **Snapshot**: the generated snapshot document
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.loader = loader or PresentationLoader.from_settings(get_settings())

    app.middleware("http")(add_request_id_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(portfolio_router, prefix="/api/v1", tags=["Portfolio"])

    logger.info("FastAPI application created")
    return app
