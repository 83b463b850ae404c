"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import pytest

from product_catalog.core.config.constants import CacheBackendKind
from product_catalog.core.config.settings import CacheSettings, CatalogSettings, reload_settings
from product_catalog.infrastructure.cache.store import CacheStore
from product_catalog.infrastructure.catalog.memory_store import InMemoryCatalogStore
from test_fixtures.cache_factory import CacheTestFactory, FakeBackend, StaticSelector
from test_fixtures.catalog_factory import FlakyCatalogStore

# pytest-asyncio runs in auto mode (see pyproject.toml)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def cache_settings(tmp_path):
    """
    Cache settings with networking disabled and a per-test local directory.
    """
    return CacheSettings(
        CACHE_NAMESPACE="cache:",
        CACHE_SERVICE_ADDRESS="",
        CACHE_LOCAL_DIRECTORY=str(tmp_path / "local-cache"),
        CACHE_SOCKET_TIMEOUT=0.5,
        CACHE_LIST_TTL=300,
        CACHE_SEARCH_TTL=120,
    )


@pytest.fixture
def catalog_settings():
    return CatalogSettings(CATALOG_LIST_LIMIT=100, CATALOG_WATCH_CHANGES=True)


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    """
    Environment for application tests: local cache only, quiet logs.

    Settings are reloaded from the patched environment and restored after.
    """
    monkeypatch.setenv("CACHE_SERVICE_ADDRESS", "")
    monkeypatch.setenv("CACHE_LOCAL_DIRECTORY", str(tmp_path / "app-cache"))
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    settings = reload_settings()
    yield settings
    monkeypatch.undo()
    reload_settings()


# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Manually advanced wall clock (epoch seconds)."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def mock_metrics():
    """MetricsCollector mock (keeps the Prometheus registry untouched)."""
    return CacheTestFactory.mock_metrics()


@pytest.fixture
def fake_backend():
    return FakeBackend(kind=CacheBackendKind.LOCAL)


@pytest.fixture
def networked_backend():
    return FakeBackend(kind=CacheBackendKind.NETWORKED)


@pytest.fixture
def cache_store(cache_settings, fake_backend, mock_metrics):
    """CacheStore over an in-memory fake backend."""
    return CacheStore(cache_settings, selector=StaticSelector(fake_backend), metrics=mock_metrics)


@pytest.fixture
def mock_redis_client():
    return CacheTestFactory.mock_redis_client()


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def catalog_store():
    return InMemoryCatalogStore()


@pytest.fixture
def flaky_catalog_store():
    return FlakyCatalogStore()
