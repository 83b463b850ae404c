"""
Catalog-Related Exceptions

Raised by catalog stores and the catalog service. Unlike cache errors these
propagate to callers.
"""

from product_catalog.core.exceptions.base import CatalogBaseError


class CatalogError(CatalogBaseError):
    """Base exception for catalog errors."""
    pass


class ProductNotFoundError(CatalogError):
    """Raised when a product id does not exist (or was deleted)."""
    pass


class RevisionConflictError(CatalogError):
    """
    Raised when a write carries a stale or missing revision.

    Common causes:
    - Concurrent edit through another replica
    - Client holding an outdated revision token
    """
    pass


class InvalidProductError(CatalogError):
    """Raised when a product record cannot be accepted by the catalog."""
    pass
