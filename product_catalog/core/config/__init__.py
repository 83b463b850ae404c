"""
Configuration Module

Centralized, type-safe configuration management for the product catalog
service.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Cache keys, status strings, stage identifiers

Usage:
------
```python
from product_catalog.core.config import get_settings
from product_catalog.core.config.constants import CACHE_KEY_PRODUCTS_LIST

settings = get_settings()
namespace = settings.cache.CACHE_NAMESPACE
```

Environment Variables:
---------------------
```bash
CACHE_NAMESPACE=cache:
CACHE_SERVICE_ADDRESS=redis://localhost:6379
CACHE_LOCAL_DIRECTORY=.cache/product_catalog
LOG_LEVEL=INFO
LOG_FORMAT=json
```
"""

from product_catalog.core.config.settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
