"""
Error Handling
==============

Two layers turn exceptions into JSON responses:

1. ``register_exception_handlers``: domain errors (CatalogBaseError
   subclasses) mapped to their HTTP status with the error's ``to_dict()``
   body.

       ProductNotFoundError   -> 404
       RevisionConflictError  -> 409
       InvalidProductError    -> 422
       any other domain error -> 500

2. ``ErrorHandlingMiddleware``: last line of defense for everything else.
   Logs with the stack trace, counts the error, and returns a generic 500.
   The traceback is only included in development.
"""

import traceback
from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from product_catalog.core.exceptions import (
    CatalogBaseError,
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.monitoring.metrics_collector import get_metrics_collector

logger = get_logger(__name__)

_STATUS_BY_ERROR: dict[type[CatalogBaseError], int] = {
    ProductNotFoundError: 404,
    RevisionConflictError: 409,
    InvalidProductError: 422,
}


def status_for(exc: CatalogBaseError) -> int:
    """HTTP status of a domain error (most specific mapped base class wins)."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return 500


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Catch-all for exceptions no exception handler claimed.

    Args:
        app: The ASGI application
        include_traceback: Include the stack trace in the response body
    """

    def __init__(self, app, include_traceback: bool = False):
        super().__init__(app)
        self.include_traceback = include_traceback

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            error_type = type(e).__name__
            logger.error(
                f"Unhandled exception in request: {request.method} {request.url.path}",
                method=request.method,
                path=request.url.path,
                error_type=error_type,
                error_message=str(e),
                exc_info=True,
            )
            get_metrics_collector().record_error(error_type, "unhandled_exception")

            error_response = {
                "error": "internal_server_error",
                "message": "An unexpected error occurred while processing your request",
                "error_type": error_type,
            }
            if self.include_traceback:
                error_response["traceback"] = traceback.format_exc()
                error_response["detail"] = str(e)

            return JSONResponse(status_code=500, content=error_response)


async def catalog_exception_handler(request: Request, exc: CatalogBaseError) -> JSONResponse:
    """Render a domain error with its mapped status."""
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        f"Request failed: {exc.message}",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
    )
    if status_code >= 500:
        get_metrics_collector().record_error(type(exc).__name__, "request")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogBaseError, catalog_exception_handler)
