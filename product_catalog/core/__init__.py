"""
Core Module

Foundational components: configuration, logging, exceptions, and interfaces.
"""

from .exceptions import (
    CacheConnectionError,
    CacheError,
    CacheOperationError,
    CatalogBaseError,
    CatalogError,
    ConfigurationError,
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)
from .logging import (
    clear_request_id,
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    # Exceptions
    "CatalogBaseError",
    "ConfigurationError",
    "CacheError",
    "CacheConnectionError",
    "CacheOperationError",
    "CatalogError",
    "ProductNotFoundError",
    "RevisionConflictError",
    "InvalidProductError",
    # Logging
    "clear_request_id",
    "get_logger",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
