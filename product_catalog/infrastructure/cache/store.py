"""
TTL-Aware Cache Store

Public API of the cache subsystem:

    CacheStore
        ├── BackendSelector (one-time backend choice, awaited by every call)
        ├── KeyCodec (namespacing)
        ├── orjson (value serialization)
        └── CacheBackend (RedisBackend | LocalBackend)

Contract: no operation raises. Reads degrade to a miss, writes and deletes
report ``False``. Callers treat ``False`` as "proceed without caching".
``lookup`` exposes the same read as a typed result so a miss and a failure
can still be told apart in tests and diagnostics.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

import orjson

from product_catalog.core.config.constants import Stage
from product_catalog.core.config.settings import CacheSettings
from product_catalog.core.exceptions import CacheConnectionError
from product_catalog.core.interfaces.cache import CacheBackend
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.cache.keys import KeyCodec
from product_catalog.infrastructure.cache.selector import BackendSelector
from product_catalog.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)

logger = get_logger(__name__)

_OPERATION_STAGES = {
    "get": Stage.CACHE_GET,
    "set": Stage.CACHE_SET,
    "delete": Stage.CACHE_DELETE,
    "delete_by_prefix": Stage.CACHE_DELETE_PREFIX,
    "clear": Stage.CACHE_CLEAR,
}


@dataclass(frozen=True)
class CacheLookup:
    """
    Result of a cache read.

    Attributes:
        hit: True when a live entry was found
        value: Deserialized value (None on miss or failure)
        error: Failure description when the read itself failed
    """

    hit: bool
    value: Any = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class CacheStore:
    """
    Namespaced, TTL-aware key-value cache over a selected backend.

    Usage:
        store = CacheStore(settings.cache)
        await store.initialize()

        await store.set("products_list", products, ttl=300)
        products = await store.get("products_list")
        await store.delete_by_prefix("search_")

        await store.close()

    TTL semantics: ``ttl`` in seconds; ``None`` or a non-positive value
    stores the entry without expiry.
    """

    def __init__(
        self,
        settings: CacheSettings,
        selector: BackendSelector | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._settings = settings
        self._codec = KeyCodec(settings.CACHE_NAMESPACE)
        self._selector = selector or BackendSelector(settings)
        self._metrics = metrics or get_metrics_collector()
        self._backend: CacheBackend | None = None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def codec(self) -> KeyCodec:
        return self._codec

    @property
    def namespace(self) -> str:
        return self._codec.namespace

    @property
    def backend(self) -> CacheBackend | None:
        """Selected backend; None before initialization or if no backend could be opened."""
        return self._backend

    @property
    def initialized(self) -> bool:
        return self._initialized

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self) -> CacheBackend | None:
        """
        Run backend selection exactly once.

        STAGE-CACHE.0: Backend selection

        Concurrent callers wait on the same attempt. If even the local store
        cannot be opened the cache runs disabled: every read misses and
        every write reports False.
        """
        if self._initialized:
            return self._backend

        async with self._init_lock:
            if self._initialized:
                return self._backend
            try:
                self._backend = await self._selector.initialize()
            except CacheConnectionError as e:
                logger.error(
                    "No cache backend available, caching disabled",
                    stage=Stage.CACHE_INIT,
                    error=str(e),
                )
                self._backend = None
            self._initialized = True

        return self._backend

    async def close(self) -> None:
        """
        Release the backend. The selection is not redone afterwards.

        STAGE-CACHE.6: Cache shutdown
        """
        if self._backend is not None:
            await self._backend.disconnect()

    # -------------------------------------------------------------------------
    # Value Operations
    # -------------------------------------------------------------------------

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Serialize and store ``value`` under ``key``.

        STAGE-CACHE.2: Cache write

        Returns:
            True if stored, False on any failure
        """
        backend = await self.initialize()
        if backend is None:
            return False

        physical_key = self._codec.encode(key)
        expiry = ttl if ttl and ttl > 0 else None
        try:
            payload = orjson.dumps(value).decode("utf-8")
            await backend.set(physical_key, payload, expiry)
        except Exception as e:
            self._record_failure(backend, "set", key, e)
            return False

        logger.debug("Cache set", stage=Stage.CACHE_SET, key=physical_key, ttl=expiry)
        return True

    async def lookup(self, key: str) -> CacheLookup:
        """
        Read ``key`` as a typed result.

        STAGE-CACHE.1: Cache read
        """
        backend = await self.initialize()
        if backend is None:
            return CacheLookup(hit=False, error="cache unavailable")

        physical_key = self._codec.encode(key)
        try:
            payload = await backend.get(physical_key)
            if payload is None:
                self._metrics.record_cache_miss(backend.kind.value)
                return CacheLookup(hit=False)
            value = orjson.loads(payload)
        except Exception as e:
            self._record_failure(backend, "get", key, e)
            return CacheLookup(hit=False, error=str(e))

        self._metrics.record_cache_hit(backend.kind.value)
        logger.debug("Cache hit", stage=Stage.CACHE_GET, key=physical_key)
        return CacheLookup(hit=True, value=value)

    async def get(self, key: str) -> Any | None:
        """
        Read ``key``; None on miss, expiry, or failure.
        """
        return (await self.lookup(key)).value

    async def delete(self, key: str) -> bool:
        """
        Remove ``key``. Deleting an absent key is a success.

        STAGE-CACHE.3: Cache delete
        """
        backend = await self.initialize()
        if backend is None:
            return False

        try:
            await backend.delete(self._codec.encode(key))
        except Exception as e:
            self._record_failure(backend, "delete", key, e)
            return False
        return True

    async def delete_by_prefix(self, sub_prefix: str) -> bool:
        """
        Remove every entry whose logical key starts with ``sub_prefix``.

        STAGE-CACHE.4: Prefix eviction
        """
        backend = await self.initialize()
        if backend is None:
            return False

        prefix = self._codec.prefix(sub_prefix)
        try:
            deleted = await backend.delete_by_prefix(prefix)
        except Exception as e:
            self._record_failure(backend, "delete_by_prefix", sub_prefix, e)
            return False

        logger.debug("Cache prefix evicted", stage=Stage.CACHE_DELETE_PREFIX, prefix=prefix, deleted=deleted)
        return True

    async def clear(self) -> bool:
        """
        Remove every entry in the namespace.

        STAGE-CACHE.5: Full flush
        """
        backend = await self.initialize()
        if backend is None:
            return False

        try:
            deleted = await backend.delete_by_prefix(self._codec.prefix())
        except Exception as e:
            self._record_failure(backend, "clear", self.namespace, e)
            return False

        logger.info("Cache cleared", stage=Stage.CACHE_CLEAR, namespace=self.namespace, deleted=deleted)
        return True

    def _record_failure(self, backend: CacheBackend, operation: str, key: str, error: Exception) -> None:
        self._metrics.record_cache_failure(backend.kind.value, operation)
        logger.warning(
            "Cache operation failed, continuing without cache",
            stage=_OPERATION_STAGES[operation],
            operation=operation,
            key=key,
            backend=backend.name,
            error=str(error),
            error_type=type(error).__name__,
        )
