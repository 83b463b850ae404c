"""
Catalog Service
===============

Business logic for the product catalog, on top of a CatalogStore and the
cache subsystem.

READ PATH (read-through):
-------------------------
    list_products / search_products
        1. CacheStore.lookup(key)          -> hit: return cached records
        2. miss: query the catalog
        3. filter + sort (+ match for search)
        4. CacheStore.set(key, records, ttl)

WRITE PATH:
-----------
    save_product / delete_product / cleanup_empty_products
        1. mutate the catalog (errors propagate)
        2. InvalidationCoordinator.invalidate(kind)

The cache never decides an outcome: a cache failure only costs a catalog
query, while a catalog failure reaches the caller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from product_catalog.application.services.invalidation import InvalidationCoordinator
from product_catalog.core.config.constants import (
    CACHE_KEY_PRODUCTS_LIST,
    CACHE_PREFIX_SEARCH,
    MutationKind,
    Stage,
)
from product_catalog.core.config.settings import CacheSettings, CatalogSettings
from product_catalog.core.exceptions import (
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)
from product_catalog.core.interfaces.catalog import CatalogStore
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.cache.store import CacheStore
from product_catalog.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)
from product_catalog.models.product import Product, new_product_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class SaveResult:
    """Id and new revision of a written record."""

    id: str
    rev: str


def normalize_search_term(term: str | None) -> str:
    """Trimmed, lower-cased search term (cache key suffix)."""
    return (term or "").strip().lower()


class CatalogService:
    """
    Product catalog operations with read-through caching.

    Usage:
        service = CatalogService(catalog_store, cache_store, settings.cache, settings.catalog)
        products = await service.list_products()
        result = await service.save_product(Product(brand="Acme", product_name="Anvil"))
    """

    def __init__(
        self,
        catalog: CatalogStore,
        cache: CacheStore,
        cache_settings: CacheSettings,
        catalog_settings: CatalogSettings,
        invalidation: InvalidationCoordinator | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._catalog = catalog
        self._cache = cache
        self._cache_settings = cache_settings
        self._catalog_settings = catalog_settings
        self._metrics = metrics or get_metrics_collector()
        self._invalidation = invalidation or InvalidationCoordinator(cache, self._metrics)
        self._unsubscribe: Callable[[], None] | None = None

    # =========================================================================
    # Read Path
    # =========================================================================

    async def list_products(self) -> list[Product]:
        """
        Complete, non-internal products sorted by brand.

        STAGE-CAT.1: Product listing (read-through on products_list)
        """
        cached = await self._cached_products(CACHE_KEY_PRODUCTS_LIST, Stage.CATALOG_LIST)
        if cached is not None:
            return cached

        records = await self._catalog.list_all(limit=self._catalog_settings.CATALOG_LIST_LIMIT)
        products = [
            product
            for product in map(Product.from_record, records)
            if not product.is_internal and product.is_complete
        ]
        products.sort(key=lambda p: (p.brand or "").lower())

        await self._cache.set(
            CACHE_KEY_PRODUCTS_LIST,
            [product.to_record() for product in products],
            ttl=self._cache_settings.CACHE_LIST_TTL,
        )
        logger.debug("Products listed from catalog", stage=Stage.CATALOG_LIST, count=len(products))
        return products

    async def search_products(self, term: str | None) -> list[Product]:
        """
        Products whose brand, name or category contains ``term``.

        STAGE-CAT.2: Product search (read-through on search_<term>)

        A blank term returns the full listing.
        """
        normalized = normalize_search_term(term)
        if not normalized:
            return await self.list_products()

        key = f"{CACHE_PREFIX_SEARCH}{normalized}"
        cached = await self._cached_products(key, Stage.CATALOG_SEARCH)
        if cached is not None:
            return cached

        matches = [product for product in await self.list_products() if product.matches(normalized)]
        await self._cache.set(
            key,
            [product.to_record() for product in matches],
            ttl=self._cache_settings.CACHE_SEARCH_TTL,
        )
        logger.debug("Search computed", stage=Stage.CATALOG_SEARCH, term=normalized, count=len(matches))
        return matches

    async def get_product(self, product_id: str) -> Product:
        """
        Direct catalog read, never cached.

        Raises:
            ProductNotFoundError: Unknown or internal id
        """
        product = Product.from_record(await self._catalog.get_by_id(product_id))
        if product.is_internal:
            raise ProductNotFoundError("Product not found", details={"id": product_id})
        return product

    # =========================================================================
    # Write Path
    # =========================================================================

    async def save_product(self, product: Product) -> SaveResult:
        """
        Create or update a product, last write wins.

        STAGE-CAT.3: Product save

        Flow:
            1. Assign product:<uuid4> when there is no id
            2. Existing record: take over its current revision
            3. Put; on a revision conflict re-read the revision and put once more
            4. Invalidate list and search caches

        Raises:
            InvalidProductError: Incomplete product or internal id
            RevisionConflictError: Conflict persisted through the retry
        """
        if product.is_internal:
            raise InvalidProductError("Internal documents cannot be saved", details={"id": product.id})
        if not product.is_complete:
            raise InvalidProductError(
                "brand and product_name are required",
                details={"id": product.id},
            )

        record: dict[str, Any] = product.to_record()
        record["_id"] = record.get("_id") or new_product_id()
        record.pop("_rev", None)

        existing = await self._find(record["_id"])
        kind = MutationKind.CREATE
        if existing is not None:
            record["_rev"] = existing["_rev"]
            kind = MutationKind.UPDATE

        try:
            rev = await self._catalog.put(record)
        except RevisionConflictError:
            logger.info("Revision conflict, retrying once", stage=Stage.CATALOG_SAVE, id=record["_id"])
            current = await self._catalog.get_by_id(record["_id"])
            record["_rev"] = current["_rev"]
            rev = await self._catalog.put(record)
            kind = MutationKind.UPDATE_RETRY

        await self._after_mutation(kind)
        logger.info("Product saved", stage=Stage.CATALOG_SAVE, id=record["_id"], rev=rev, kind=kind.value)
        return SaveResult(id=record["_id"], rev=rev)

    async def delete_product(self, product_id: str, rev: str) -> SaveResult:
        """
        Remove a product at revision ``rev``.

        STAGE-CAT.4: Product delete

        Raises:
            ProductNotFoundError: Unknown id
            RevisionConflictError: Stale revision
        """
        tombstone = await self._catalog.remove(product_id, rev)
        await self._after_mutation(MutationKind.DELETE)
        logger.info("Product deleted", stage=Stage.CATALOG_DELETE, id=product_id)
        return SaveResult(id=product_id, rev=tombstone)

    async def cleanup_empty_products(self) -> int:
        """
        Remove incomplete records among the first CATALOG_LIST_LIMIT records.

        STAGE-CAT.5: Cleanup

        Catalog errors end the pass early; they are logged, not raised.

        Returns:
            int: Number of records removed
        """
        removed = 0
        try:
            records = await self._catalog.list_all(limit=self._catalog_settings.CATALOG_LIST_LIMIT)
            for record in records:
                product = Product.from_record(record)
                if product.is_internal or product.is_complete:
                    continue
                await self._catalog.remove(product.id, product.rev)
                removed += 1
        except Exception as e:
            self._metrics.record_error(type(e).__name__, Stage.CATALOG_CLEANUP.value)
            logger.warning(
                "Cleanup stopped on catalog error",
                stage=Stage.CATALOG_CLEANUP,
                removed=removed,
                error=str(e),
            )

        if removed:
            await self._after_mutation(MutationKind.CLEANUP)
        logger.info("Cleanup finished", stage=Stage.CATALOG_CLEANUP, removed=removed)
        return removed

    # =========================================================================
    # Change Feed
    # =========================================================================

    def watch_changes(self) -> None:
        """
        Invalidate on every catalog change, including replicated ones.

        STAGE-CAT.6: Change feed subscription

        Idempotent; a second call keeps the existing subscription.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._catalog.subscribe(self._on_change)
            logger.info("Watching catalog changes", stage=Stage.CATALOG_CHANGES)

    def stop_watching(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def watching(self) -> bool:
        return self._unsubscribe is not None

    async def _on_change(self, change: dict[str, Any]) -> None:
        logger.debug(
            "Catalog change received",
            stage=Stage.CATALOG_CHANGES,
            id=change.get("id"),
            deleted=change.get("deleted", False),
        )
        await self._invalidation.invalidate(MutationKind.EXTERNAL)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _cached_products(self, key: str, stage: Stage) -> list[Product] | None:
        """
        Products cached under ``key``, or None on a miss.

        An entry that is not a list of product records is evicted and
        reported as a miss.
        """
        cached = await self._cache.lookup(key)
        if not cached.hit:
            return None
        try:
            if not isinstance(cached.value, list):
                raise TypeError(f"expected a list, got {type(cached.value).__name__}")
            return [Product.from_record(record) for record in cached.value]
        except (TypeError, ValidationError) as e:
            logger.warning(
                "Malformed cache entry evicted",
                stage=stage,
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            await self._cache.delete(key)
            return None

    async def _find(self, product_id: str) -> dict[str, Any] | None:
        try:
            return await self._catalog.get_by_id(product_id)
        except ProductNotFoundError:
            return None

    async def _after_mutation(self, kind: MutationKind) -> None:
        self._metrics.record_mutation(kind.value)
        await self._invalidation.invalidate(kind)
