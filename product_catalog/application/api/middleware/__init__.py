"""
API Middleware Package
"""

from product_catalog.application.api.middleware.error_handler import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
    status_for,
)

__all__ = ["ErrorHandlingMiddleware", "register_exception_handlers", "status_for"]
