"""
Exception Module

Structured exception hierarchy for the product catalog service.

Module Structure:
-----------------
- **base.py**: CatalogBaseError base class + ConfigurationError
- **cache.py**: Cache backend exceptions (swallowed by the cache store)
- **catalog.py**: Catalog exceptions (propagated to callers)

Usage:
------
```python
from product_catalog.core.exceptions import ProductNotFoundError, RevisionConflictError
```
"""

from product_catalog.core.exceptions.base import CatalogBaseError, ConfigurationError
from product_catalog.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheOperationError,
)
from product_catalog.core.exceptions.catalog import (
    CatalogError,
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)

__all__ = [
    # Base
    "CatalogBaseError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheOperationError",
    # Catalog
    "CatalogError",
    "ProductNotFoundError",
    "RevisionConflictError",
    "InvalidProductError",
]
