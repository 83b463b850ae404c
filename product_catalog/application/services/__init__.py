"""
Application Services Package
=============================

Business logic used by the API routes:

- CatalogService: read-through product listing/search and write paths
- InvalidationCoordinator: post-mutation cache eviction
"""

from product_catalog.application.services.catalog_service import (
    CatalogService,
    SaveResult,
    normalize_search_term,
)
from product_catalog.application.services.invalidation import (
    InvalidationCoordinator,
    InvalidationResult,
)

__all__ = [
    "CatalogService",
    "InvalidationCoordinator",
    "InvalidationResult",
    "SaveResult",
    "normalize_search_term",
]
