"""
Unit Tests for CacheDiagnostics

Tests probe tokens, status strings and statistics for both backend kinds.
"""

import pytest

from product_catalog.core.config.constants import (
    PROBE_TOKEN_LOCAL,
    PROBE_TOKEN_NETWORKED,
    STATUS_LOCAL_FALLBACK,
    STATUS_NETWORKED_CONNECTED,
    STATUS_NETWORKED_DISCONNECTED,
    STATUS_UNAVAILABLE,
    CacheBackendKind,
)
from product_catalog.core.exceptions import CacheConnectionError
from product_catalog.infrastructure.cache.diagnostics import CacheDiagnostics
from product_catalog.infrastructure.cache.store import CacheStore
from test_fixtures.cache_factory import FakeBackend, StaticSelector


def diagnostics_for(cache_settings, mock_metrics, backend=None, error=None):
    store = CacheStore(cache_settings, selector=StaticSelector(backend, error), metrics=mock_metrics)
    return store, CacheDiagnostics(store)


@pytest.mark.unit
class TestProbe:
    """Test liveness probe."""

    async def test_networked_probe(self, cache_settings, mock_metrics):
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend(CacheBackendKind.NETWORKED))
        assert await diagnostics.probe() == PROBE_TOKEN_NETWORKED

    async def test_local_probe(self, cache_settings, mock_metrics):
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend())
        assert await diagnostics.probe() == PROBE_TOKEN_LOCAL

    async def test_failed_probe_returns_none(self, cache_settings, mock_metrics):
        backend = FakeBackend(CacheBackendKind.NETWORKED, fail_on={"ping"})
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, backend)
        assert await diagnostics.probe() is None

    async def test_probe_without_backend(self, cache_settings, mock_metrics):
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, error=CacheConnectionError("x"))
        assert await diagnostics.probe() is None


@pytest.mark.unit
class TestStatus:
    """Test status strings."""

    async def test_networked_connected(self, cache_settings, mock_metrics):
        store, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend(CacheBackendKind.NETWORKED))
        await store.initialize()

        assert diagnostics.status() == STATUS_NETWORKED_CONNECTED

    async def test_networked_after_close(self, cache_settings, mock_metrics):
        store, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend(CacheBackendKind.NETWORKED))
        await store.initialize()
        await store.close()

        assert diagnostics.status() == STATUS_NETWORKED_DISCONNECTED

    async def test_local_fallback(self, cache_settings, mock_metrics):
        store, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend())
        await store.initialize()

        assert diagnostics.status() == STATUS_LOCAL_FALLBACK

    async def test_unavailable(self, cache_settings, mock_metrics):
        store, diagnostics = diagnostics_for(cache_settings, mock_metrics, error=CacheConnectionError("x"))
        await store.initialize()

        assert diagnostics.status() == STATUS_UNAVAILABLE


@pytest.mark.unit
class TestStatistics:
    """Test statistics payloads."""

    async def test_local_statistics_list_logical_keys(self, cache_settings, mock_metrics):
        store, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend())
        await store.set("search_lip", [])
        await store.set("products_list", [])

        stats = await diagnostics.statistics()

        assert stats == {
            "connected": False,
            "backend": "Local Store",
            "prefix": "cache:",
            "cached_items": 2,
            "keys": ["products_list", "search_lip"],
        }

    async def test_networked_statistics_include_info(self, cache_settings, mock_metrics):
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, FakeBackend(CacheBackendKind.NETWORKED))

        stats = await diagnostics.statistics()

        assert stats["connected"] is True
        assert stats["backend"] == "Redis Server"
        assert stats["redis_info"]["redis_version"] == "7.2.0"

    async def test_failure_returns_error(self, cache_settings, mock_metrics):
        backend = FakeBackend(CacheBackendKind.NETWORKED, fail_on={"info"})
        _, diagnostics = diagnostics_for(cache_settings, mock_metrics, backend)

        stats = await diagnostics.statistics()

        assert list(stats) == ["error"]
