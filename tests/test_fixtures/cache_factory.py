"""
Cache Test Factory

Creates cache backends and Redis clients with various configurations for testing.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

from product_catalog.core.config.constants import (
    BACKEND_NAME_LOCAL,
    BACKEND_NAME_NETWORKED,
    PROBE_TOKEN_LOCAL,
    PROBE_TOKEN_NETWORKED,
    CacheBackendKind,
)
from product_catalog.core.exceptions import CacheConnectionError, CacheOperationError


class FakeBackend:
    """
    Dict-backed CacheBackend with failure injection.

    Args:
        kind: Backend kind to report
        fail_on: Operation names that raise CacheOperationError
        fail_connect: Whether connect() raises CacheConnectionError
    """

    def __init__(
        self,
        kind: CacheBackendKind = CacheBackendKind.LOCAL,
        fail_on: set[str] | None = None,
        fail_connect: bool = False,
    ):
        self.kind = kind
        self.name = BACKEND_NAME_NETWORKED if kind is CacheBackendKind.NETWORKED else BACKEND_NAME_LOCAL
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail_on = fail_on or set()
        self.fail_connect = fail_connect
        self.connected = False
        self.connect_calls = 0

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise CacheOperationError(f"injected {operation} failure")

    def is_connected(self) -> bool:
        return self.connected

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise CacheConnectionError("injected connect failure")
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def ping(self) -> str:
        self._check("ping")
        return PROBE_TOKEN_NETWORKED if self.kind is CacheBackendKind.NETWORKED else PROBE_TOKEN_LOCAL

    async def get(self, key: str) -> str | None:
        self._check("get")
        return self.data.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        self._check("set")
        self.data[key] = value
        self.ttls[key] = ttl

    async def delete(self, *keys: str) -> int:
        self._check("delete")
        return sum(1 for key in keys if self.data.pop(key, None) is not None)

    async def keys(self, prefix: str) -> list[str]:
        self._check("keys")
        return [key for key in self.data if key.startswith(prefix)]

    async def delete_by_prefix(self, prefix: str) -> int:
        self._check("delete_by_prefix")
        return await self.delete(*[key for key in list(self.data) if key.startswith(prefix)])

    async def info(self) -> dict[str, Any]:
        self._check("info")
        return {"redis_version": "7.2.0", "used_memory_human": "1M"}


class StaticSelector:
    """Selector stub returning a fixed backend (or raising)."""

    def __init__(self, backend: FakeBackend | None = None, error: Exception | None = None):
        self.backend = backend
        self.error = error
        self.calls = 0

    async def initialize(self) -> FakeBackend:
        self.calls += 1
        if self.error is not None:
            raise self.error
        await self.backend.connect()
        return self.backend


class CacheTestFactory:
    """Factory for creating cache test objects."""

    @staticmethod
    def fake_backend(kind: CacheBackendKind = CacheBackendKind.LOCAL, **kwargs) -> FakeBackend:
        return FakeBackend(kind=kind, **kwargs)

    @staticmethod
    def mock_redis_client(scan_keys: list[str] | None = None) -> AsyncMock:
        """
        Create a redis.asyncio client mock.

        ``scan_iter`` is an async generator over ``scan_keys``.
        """
        client = AsyncMock()
        client.ping = AsyncMock(return_value=True)
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        client.delete = AsyncMock(return_value=1)
        client.unlink = AsyncMock(side_effect=lambda *keys: len(keys))
        client.info = AsyncMock(return_value={"redis_version": "7.2.0"})
        client.aclose = AsyncMock()

        async def scan_iter(**kwargs):
            for key in scan_keys or []:
                yield key

        client.scan_iter = MagicMock(side_effect=scan_iter)
        return client

    @staticmethod
    def mock_metrics() -> MagicMock:
        from product_catalog.infrastructure.monitoring.metrics_collector import MetricsCollector

        return MagicMock(spec=MetricsCollector)
