"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory, FakeBackend, StaticSelector
from .catalog_factory import CatalogTestFactory, FlakyCatalogStore

__all__ = [
    "CacheTestFactory",
    "CatalogTestFactory",
    "FakeBackend",
    "FlakyCatalogStore",
    "StaticSelector",
]
