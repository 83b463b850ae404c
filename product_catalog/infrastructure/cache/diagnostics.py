"""
Cache Diagnostics

Operational view of the cache: liveness probe, a one-line status, and
aggregate statistics. Like the store itself, nothing here raises.
"""

from typing import Any

from product_catalog.core.config.constants import (
    STATUS_LOCAL_FALLBACK,
    STATUS_NETWORKED_CONNECTED,
    STATUS_NETWORKED_DISCONNECTED,
    STATUS_UNAVAILABLE,
    CacheBackendKind,
    Stage,
)
from product_catalog.core.logging.logger import get_logger
from product_catalog.infrastructure.cache.store import CacheStore

logger = get_logger(__name__)


class CacheDiagnostics:
    """
    Diagnostics surface over a CacheStore.

    Usage:
        diagnostics = CacheDiagnostics(store)
        token = await diagnostics.probe()      # "PONG" or "LocalStore OK"
        diagnostics.status()                   # "Redis Server Connected"
        stats = await diagnostics.statistics()
    """

    def __init__(self, store: CacheStore):
        self._store = store

    async def probe(self) -> str | None:
        """
        Liveness check against the active backend.

        Returns:
            Backend acknowledgement token, or None if the probe failed
        """
        backend = await self._store.initialize()
        if backend is None:
            return None
        try:
            return await backend.ping()
        except Exception as e:
            logger.warning("Cache probe failed", stage=Stage.CACHE_DIAGNOSTICS, backend=backend.name, error=str(e))
            return None

    def status(self) -> str:
        """
        Human-readable backend status, recomputed from current state.
        """
        backend = self._store.backend
        if backend is None:
            return STATUS_UNAVAILABLE
        if backend.kind is CacheBackendKind.LOCAL:
            return STATUS_LOCAL_FALLBACK
        if backend.is_connected():
            return STATUS_NETWORKED_CONNECTED
        return STATUS_NETWORKED_DISCONNECTED

    async def statistics(self) -> dict[str, Any]:
        """
        Aggregate statistics.

        Local backend: cached_items and the logical keys under the namespace.
        Networked backend: raw INFO output.

        Returns:
            Stats dict, or ``{"error": message}`` on failure
        """
        backend = await self._store.initialize()
        if backend is None:
            return {"error": STATUS_UNAVAILABLE}

        try:
            stats: dict[str, Any] = {
                "connected": backend.kind is CacheBackendKind.NETWORKED and backend.is_connected(),
                "backend": backend.name,
                "prefix": self._store.namespace,
            }
            if backend.kind is CacheBackendKind.NETWORKED:
                stats["redis_info"] = await backend.info()
            else:
                codec = self._store.codec
                keys = sorted(codec.decode(key) for key in await backend.keys(codec.prefix()))
                stats["cached_items"] = len(keys)
                stats["keys"] = keys
            return stats
        except Exception as e:
            logger.warning("Cache statistics failed", stage=Stage.CACHE_DIAGNOSTICS, error=str(e))
            return {"error": str(e)}
