"""
Unit Tests for InvalidationCoordinator

Tests that mutations evict the product list and the whole search group.
"""

import pytest

from product_catalog.application.services.invalidation import InvalidationCoordinator
from product_catalog.core.config.constants import MutationKind
from product_catalog.infrastructure.cache.store import CacheStore
from test_fixtures.cache_factory import FakeBackend, StaticSelector


@pytest.mark.unit
class TestInvalidationCoordinator:
    """Test suite for InvalidationCoordinator."""

    async def test_evicts_list_and_all_searches(self, cache_store, fake_backend, mock_metrics):
        await cache_store.set("products_list", [])
        await cache_store.set("search_lip", [])
        await cache_store.set("search_eye", [])
        await cache_store.set("unrelated", 1)

        result = await InvalidationCoordinator(cache_store, mock_metrics).invalidate(MutationKind.CREATE)

        assert result.list_evicted and result.search_evicted and result.complete
        assert list(fake_backend.data) == ["cache:unrelated"]
        mock_metrics.record_invalidation.assert_called_once_with("create", True)

    async def test_invalidation_on_empty_cache_succeeds(self, cache_store, mock_metrics):
        result = await InvalidationCoordinator(cache_store, mock_metrics).invalidate(MutationKind.DELETE)

        assert result.complete

    async def test_partial_failure_is_reported_not_raised(self, cache_settings, mock_metrics):
        backend = FakeBackend(fail_on={"delete_by_prefix"})
        store = CacheStore(cache_settings, selector=StaticSelector(backend), metrics=mock_metrics)
        await store.set("products_list", [])

        result = await InvalidationCoordinator(store, mock_metrics).invalidate(MutationKind.UPDATE)

        assert result.list_evicted is True
        assert result.search_evicted is False
        assert not result.complete
        mock_metrics.record_invalidation.assert_called_once_with("update", False)
