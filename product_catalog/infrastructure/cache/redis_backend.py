"""
Networked Cache Backend (Redis)

Architecture:
    RedisBackend
        ├── connect / disconnect (connection lifecycle)
        ├── get / set / delete (expiry enforced by Redis itself)
        ├── keys / delete_by_prefix (SCAN + UNLINK in batches)
        └── ping / info (diagnostics)

Every Redis failure is re-raised as ``CacheOperationError`` with the key in
its details; the cache store decides what a failure means for the caller.
"""

from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from product_catalog.core.config.constants import (
    BACKEND_NAME_NETWORKED,
    PROBE_TOKEN_NETWORKED,
    REDIS_SCAN_BATCH_SIZE,
    CacheBackendKind,
    Stage,
)
from product_catalog.core.exceptions import CacheConnectionError, CacheOperationError
from product_catalog.core.logging.logger import get_logger

logger = get_logger(__name__)

_GLOB_SPECIAL = "\\*?[]"


def escape_glob(text: str) -> str:
    """Escape Redis MATCH glob metacharacters so ``text`` matches literally."""
    return "".join("\\" + ch if ch in _GLOB_SPECIAL else ch for ch in text)


class RedisBackend:
    """
    Cache backend bound to a Redis server.

    Usage:
        backend = RedisBackend("redis://localhost:6379", socket_timeout=5)
        await backend.connect()
        await backend.set("cache:products_list", "[]", ttl=300)
        await backend.disconnect()

    Args:
        address: Redis URL
        socket_timeout: Connect and per-command socket timeout in seconds
        client: Pre-built client (tests); skips URL parsing
    """

    kind = CacheBackendKind.NETWORKED
    name = BACKEND_NAME_NETWORKED

    def __init__(
        self,
        address: str,
        socket_timeout: float = 5,
        client: redis.Redis | None = None,
    ):
        self._address = address
        self._socket_timeout = socket_timeout
        self._client = client
        self._is_connected = False

    def is_connected(self) -> bool:
        return self._is_connected

    async def connect(self) -> None:
        """
        Open the client and verify it with PING.

        STAGE-CACHE.0.1: Networked connection attempt

        Raises:
            CacheConnectionError: If the address is invalid or the server is unreachable
        """
        if self._is_connected:
            return

        try:
            if self._client is None:
                self._client = redis.from_url(
                    self._address,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_connect_timeout=self._socket_timeout,
                    socket_timeout=self._socket_timeout,
                    health_check_interval=30,
                )
            await self._client.ping()
        except (RedisError, OSError, ValueError) as e:
            await self._close_client()
            raise CacheConnectionError.from_exception(
                e,
                message=f"Failed to connect to Redis: {e}",
                address=self._address,
            )

        self._is_connected = True
        logger.info("Redis connected", stage=Stage.CACHE_INIT, address=self._address)

    async def disconnect(self) -> None:
        """Close the client. Safe to call more than once."""
        if self._client is None:
            return
        await self._close_client()
        self._is_connected = False
        logger.info("Redis disconnected", stage=Stage.CACHE_CLOSE)

    async def _close_client(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.aclose()
        except (RedisError, OSError) as e:
            logger.warning("Error closing Redis client", stage=Stage.CACHE_CLOSE, error=str(e))

    def _require_client(self) -> redis.Redis:
        if self._client is None or not self._is_connected:
            raise CacheOperationError("Redis backend is not connected", details={"address": self._address})
        return self._client

    # -------------------------------------------------------------------------
    # Basic Operations
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        client = self._require_client()
        try:
            return await client.get(key)
        except RedisError as e:
            raise CacheOperationError(f"Redis GET failed: {e}", details={"key": key})

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """
        Write ``value``; ``ttl`` maps to SET EX, None writes without expiry.
        """
        client = self._require_client()
        try:
            await client.set(key, value, ex=ttl)
        except RedisError as e:
            raise CacheOperationError(f"Redis SET failed: {e}", details={"key": key, "ttl": ttl})

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        client = self._require_client()
        try:
            return await client.delete(*keys)
        except RedisError as e:
            raise CacheOperationError(f"Redis DELETE failed: {e}", details={"keys": keys})

    # -------------------------------------------------------------------------
    # Prefix Operations
    # -------------------------------------------------------------------------

    async def keys(self, prefix: str) -> list[str]:
        """
        List keys under ``prefix`` with SCAN (non-blocking, unlike KEYS).
        """
        client = self._require_client()
        try:
            return [
                key
                async for key in client.scan_iter(
                    match=escape_glob(prefix) + "*", count=REDIS_SCAN_BATCH_SIZE
                )
            ]
        except RedisError as e:
            raise CacheOperationError(f"Redis SCAN failed: {e}", details={"prefix": prefix})

    async def delete_by_prefix(self, prefix: str) -> int:
        """
        Delete every key under ``prefix``.

        Keys are collected with SCAN and removed with UNLINK in batches of
        REDIS_SCAN_BATCH_SIZE. A failure mid-way can leave part of the group
        behind.
        """
        client = self._require_client()
        deleted = 0
        batch: list[str] = []
        try:
            async for key in client.scan_iter(
                match=escape_glob(prefix) + "*", count=REDIS_SCAN_BATCH_SIZE
            ):
                batch.append(key)
                if len(batch) >= REDIS_SCAN_BATCH_SIZE:
                    deleted += await client.unlink(*batch)
                    batch = []
            if batch:
                deleted += await client.unlink(*batch)
        except RedisError as e:
            raise CacheOperationError(
                f"Redis prefix delete failed: {e}",
                details={"prefix": prefix, "deleted": deleted},
            )
        return deleted

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    async def ping(self) -> str:
        client = self._require_client()
        try:
            await client.ping()
        except RedisError as e:
            raise CacheOperationError(f"Redis PING failed: {e}", details={"address": self._address})
        return PROBE_TOKEN_NETWORKED

    async def info(self) -> dict[str, Any]:
        client = self._require_client()
        try:
            return await client.info()
        except RedisError as e:
            raise CacheOperationError(f"Redis INFO failed: {e}", details={"address": self._address})
