"""
Cache-Related Exceptions

Raised by cache backends. The cache store catches them at its boundary and
turns them into miss / no-op results, so they never reach catalog callers.
"""

from product_catalog.core.exceptions.base import CatalogBaseError


class CacheError(CatalogBaseError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to the networked cache.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Malformed service address
    - Authentication failure
    """
    pass


class CacheOperationError(CacheError):
    """
    Raised when a cache read, write or delete fails.

    Common causes:
    - Serialization failure
    - Transient backend error or timeout
    - Local storage full or unwritable
    """
    pass
