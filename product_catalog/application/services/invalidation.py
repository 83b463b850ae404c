"""
Invalidation Coordinator
========================

Keeps cached reads consistent with the catalog after writes.

INVALIDATION RULE:
------------------
After every catalog mutation the catalog has ACCEPTED:

    1. delete "products_list"
    2. delete_by_prefix "search_"   (every cached search, whatever the term)

Search entries are evicted as a whole group: a single product edit can
change the result of any search term, so no per-term bookkeeping is kept.

Failures are logged and counted. The mutation itself is never rolled back
or retried; a stale entry that survives a failed eviction lives at most
until its TTL.
"""

from dataclasses import dataclass

from product_catalog.core.config.constants import (
    CACHE_KEY_PRODUCTS_LIST,
    CACHE_PREFIX_SEARCH,
    MutationKind,
    Stage,
)
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.cache.store import CacheStore
from product_catalog.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class InvalidationResult:
    """Outcome of one invalidation pass."""

    list_evicted: bool
    search_evicted: bool

    @property
    def complete(self) -> bool:
        return self.list_evicted and self.search_evicted


class InvalidationCoordinator:
    """
    Evicts cached list and search results after catalog mutations.

    Usage:
        coordinator = InvalidationCoordinator(cache_store)
        await coordinator.invalidate(MutationKind.CREATE)
    """

    def __init__(self, cache: CacheStore, metrics: MetricsCollector | None = None):
        self._cache = cache
        self._metrics = metrics or get_metrics_collector()

    async def invalidate(self, reason: MutationKind) -> InvalidationResult:
        """
        Evict the product list and every cached search.

        STAGE-INV: Post-mutation invalidation

        Args:
            reason: Mutation that triggered the pass

        Returns:
            InvalidationResult: Which evictions succeeded
        """
        result = InvalidationResult(
            list_evicted=await self._cache.delete(CACHE_KEY_PRODUCTS_LIST),
            search_evicted=await self._cache.delete_by_prefix(CACHE_PREFIX_SEARCH),
        )
        self._metrics.record_invalidation(reason.value, result.complete)

        if result.complete:
            logger.debug("Cache invalidated", stage=Stage.INVALIDATION, reason=reason.value)
        else:
            logger.warning(
                "Cache invalidation incomplete",
                stage=Stage.INVALIDATION,
                reason=reason.value,
                list_evicted=result.list_evicted,
                search_evicted=result.search_evicted,
            )
        return result
