"""Exception handlers mapping piefolio errors onto API responses."""

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config.logging import get_logger
from ..exceptions import DataLoadError, PiefolioError
from .models.responses import ErrorResponse

logger = get_logger(__name__)

REFRESH_PATH = "/api/v1/portfolio/refresh"


async def data_load_exception_handler(
    request: Request, exc: DataLoadError
) -> JSONResponse:
    """
    Handle failures to load the allocation file or the snapshot.

    There is no partial-data mode, so the page gets a blocking error with a
    retry hint.
    """
    request_id = getattr(request.state, "request_id", None)

    logger.error(
        "Portfolio data unavailable",
        source=exc.source,
        message=exc.message,
        request_id=request_id,
        path=request.url.path,
    )

    error_response = ErrorResponse(
        success=False,
        error={
            "type": "DataLoadError",
            "message": exc.message,
            "details": {**exc.details, "retry": REFRESH_PATH},
            "status_code": 503,
        },
        request_id=request_id,
    )

    return JSONResponse(status_code=503, content=error_response.model_dump())


async def piefolio_exception_handler(
    request: Request, exc: PiefolioError
) -> JSONResponse:
    """Handle other piefolio exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.error(
        "Piefolio exception occurred",
        exception_type=type(exc).__name__,
        message=exc.message,
        details=exc.details,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    error_response = ErrorResponse(
        success=False,
        error={
            "type": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
            "status_code": 500,
        },
        request_id=request_id,
    )

    return JSONResponse(status_code=500, content=error_response.model_dump())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation exceptions."""
    request_id = getattr(request.state, "request_id", None)

    field_errors = {}
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        field_errors[field_path] = error["msg"]

    logger.warning(
        "Validation error occurred",
        field_errors=field_errors,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    error_response = ErrorResponse(
        success=False,
        error={
            "type": "ValidationError",
            "message": "Request validation failed",
            "details": {"field_errors": field_errors},
            "status_code": 422,
        },
        request_id=request_id,
    )

    return JSONResponse(status_code=422, content=error_response.model_dump())


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    error_response = ErrorResponse(
        success=False,
        error={
            "type": "HTTPException",
            "message": str(exc.detail),
            "status_code": exc.status_code,
        },
        request_id=request_id,
    )

    return JSONResponse(
        status_code=exc.status_code, content=error_response.model_dump()
    )


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(DataLoadError, data_load_exception_handler)
    app.add_exception_handler(PiefolioError, piefolio_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    logger.info("Exception handlers registered")
