"""
Catalog Store Implementations
"""

from .memory_store import InMemoryCatalogStore, next_revision

__all__ = ["InMemoryCatalogStore", "next_revision"]
