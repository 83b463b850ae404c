"""
Local Persistent Cache Backend (diskcache)

Fallback used when the networked cache is unreachable. Entries live in an
on-disk diskcache directory and survive restarts.

Expiry is emulated rather than delegated to diskcache: each payload is
wrapped in a CacheEntry carrying an absolute ``expires_at`` and checked on
every read. A read that finds an expired entry deletes it, so expired
garbage does not accumulate for keys that are read again.

Boundary: an entry is still valid at exactly ``expires_at`` and expired
strictly after it.

All disk I/O runs in a worker thread so the event loop is never blocked.
"""

import asyncio
import sqlite3
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, TypeVar

from diskcache import Cache, Timeout

from product_catalog.core.config.constants import (
    BACKEND_NAME_LOCAL,
    PROBE_TOKEN_LOCAL,
    CacheBackendKind,
    Stage,
)
from product_catalog.core.exceptions import CacheConnectionError, CacheOperationError
from product_catalog.core.logging.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_STORAGE_ERRORS = (OSError, sqlite3.Error, Timeout)


@dataclass(frozen=True)
class CacheEntry:
    """Stored record: serialized payload plus absolute expiry (epoch seconds)."""

    value: str
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now > self.expires_at

    @classmethod
    def from_record(cls, record: Any) -> "CacheEntry":
        if not isinstance(record, dict) or not isinstance(record.get("value"), str):
            raise ValueError("Malformed cache entry")
        return cls(value=record["value"], expires_at=record.get("expires_at"))


class LocalBackend:
    """
    Cache backend bound to a local diskcache directory.

    Usage:
        backend = LocalBackend(".cache/product_catalog")
        await backend.connect()
        await backend.set("cache:search_lip", "[]", ttl=120)

    Args:
        directory: Cache directory (created if missing)
        clock: Wall-clock source in epoch seconds, injectable for tests
    """

    kind = CacheBackendKind.LOCAL
    name = BACKEND_NAME_LOCAL

    def __init__(self, directory: str | Path, clock: Callable[[], float] = time.time):
        self._directory = str(directory)
        self._clock = clock
        self._cache: Cache | None = None

    def is_connected(self) -> bool:
        return self._cache is not None

    async def connect(self) -> None:
        """
        Open (or create) the cache directory.

        Raises:
            CacheConnectionError: If the directory cannot be opened
        """
        if self._cache is not None:
            return
        try:
            self._cache = await asyncio.to_thread(Cache, self._directory)
        except _STORAGE_ERRORS as e:
            raise CacheConnectionError.from_exception(
                e,
                message=f"Failed to open local cache: {e}",
                directory=self._directory,
            )
        logger.info("Local cache opened", stage=Stage.CACHE_INIT, directory=self._directory)

    async def disconnect(self) -> None:
        cache, self._cache = self._cache, None
        if cache is None:
            return
        await asyncio.to_thread(cache.close)
        logger.info("Local cache closed", stage=Stage.CACHE_CLOSE)

    async def _run(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        if self._cache is None:
            raise CacheOperationError("Local cache is not open", details={"operation": operation})
        try:
            return await asyncio.to_thread(func, *args)
        except _STORAGE_ERRORS as e:
            raise CacheOperationError(
                f"Local cache {operation} failed: {e}",
                details={"operation": operation, "args": [str(a) for a in args]},
            )

    # -------------------------------------------------------------------------
    # Basic Operations
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        return await self._run("get", self._get_sync, key)

    def _get_sync(self, key: str) -> str | None:
        record = self._cache.get(key)
        if record is None:
            return None
        try:
            entry = CacheEntry.from_record(record)
        except ValueError:
            self._cache.delete(key)
            raise CacheOperationError("Malformed local cache entry", details={"key": key})
        if entry.is_expired(self._clock()):
            self._cache.delete(key)
            logger.debug("Expired local entry removed", stage=Stage.CACHE_GET, key=key)
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = self._clock() + ttl if ttl else None
        entry = CacheEntry(value=value, expires_at=expires_at)
        await self._run("set", self._cache_set, key, asdict(entry))

    def _cache_set(self, key: str, record: dict[str, Any]) -> None:
        self._cache.set(key, record)

    async def delete(self, *keys: str) -> int:
        return await self._run("delete", self._delete_sync, keys)

    def _delete_sync(self, keys: tuple[str, ...]) -> int:
        return sum(1 for key in keys if self._cache.delete(key))

    # -------------------------------------------------------------------------
    # Prefix Operations
    # -------------------------------------------------------------------------

    async def keys(self, prefix: str) -> list[str]:
        return await self._run("keys", self._keys_sync, prefix)

    def _keys_sync(self, prefix: str) -> list[str]:
        return [
            key for key in self._cache.iterkeys()
            if isinstance(key, str) and key.startswith(prefix)
        ]

    async def delete_by_prefix(self, prefix: str) -> int:
        return await self._run("delete_by_prefix", self._delete_by_prefix_sync, prefix)

    def _delete_by_prefix_sync(self, prefix: str) -> int:
        # Snapshot first: deleting while iterating the sqlite cursor is unsafe
        return self._delete_sync(tuple(self._keys_sync(prefix)))

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    async def ping(self) -> str:
        if self._cache is None:
            raise CacheOperationError("Local cache is not open", details={"operation": "ping"})
        return PROBE_TOKEN_LOCAL

    async def info(self) -> dict[str, Any]:
        return await self._run("info", self._info_sync)

    def _info_sync(self) -> dict[str, Any]:
        return {
            "directory": self._directory,
            "entries": len(self._cache),
            "volume_bytes": self._cache.volume(),
        }
