from .cache import CacheBackend
from .catalog import CatalogStore, ChangeCallback

__all__ = ["CacheBackend", "CatalogStore", "ChangeCallback"]
