"""
API Models Package

- products.py: product write requests and write results
- cache.py: cache diagnostics and admin responses
"""

from product_catalog.application.api.models.cache import (
    CacheOperationResponse,
    CacheProbeResponse,
    CacheStatusResponse,
)
from product_catalog.application.api.models.products import (
    CleanupResponse,
    ProductWriteRequest,
    SaveResponse,
)

__all__ = [
    "CacheOperationResponse",
    "CacheProbeResponse",
    "CacheStatusResponse",
    "CleanupResponse",
    "ProductWriteRequest",
    "SaveResponse",
]
