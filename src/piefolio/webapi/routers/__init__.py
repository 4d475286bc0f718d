"""API routers for piefolio."""

from .portfolio import router as portfolio_router

__all__ = ["portfolio_router"]
