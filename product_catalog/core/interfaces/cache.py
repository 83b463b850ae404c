"""
Cache Backend Protocol

This module defines the abstract protocol for cache backend implementations,
so the cache store runs unchanged against either storage variant.

Architectural Decision: Protocol-based abstraction
- One interface, two implementations chosen once at startup
- No branching on a connection flag at every call site
- Facilitates testing with mock implementations

Implementations:
- RedisBackend: Networked, native expiry
- LocalBackend: On-disk store, emulated expiry
"""

from typing import Any, Protocol, runtime_checkable

from product_catalog.core.config.constants import CacheBackendKind


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol defining the capability set of a cache backend.

    Backends operate on physical (already namespaced) keys and serialized
    string payloads. They raise ``CacheOperationError`` on failure; turning
    failures into misses is the cache store's job, not the backend's.

    Usage:
        async def read(backend: CacheBackend, key: str) -> str | None:
            return await backend.get(key)
    """

    kind: CacheBackendKind
    name: str

    def is_connected(self) -> bool:
        """Whether the backend is currently usable."""
        ...

    async def connect(self) -> None:
        """
        Establish the backend connection.

        Raises:
            CacheConnectionError: If connection fails
        """
        ...

    async def disconnect(self) -> None:
        """Release the backend. Safe to call more than once."""
        ...

    async def ping(self) -> str:
        """
        Liveness check.

        Returns:
            str: Backend-specific acknowledgement token
        """
        ...

    async def get(self, key: str) -> str | None:
        """
        Read a payload.

        Returns:
            Optional[str]: Payload, or None if absent or expired
        """
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """
        Write a payload.

        Args:
            key: Physical key
            value: Serialized payload
            ttl: Time-to-live in seconds; None means no expiry
        """
        ...

    async def delete(self, *keys: str) -> int:
        """
        Delete keys.

        Returns:
            int: Number of keys that existed
        """
        ...

    async def keys(self, prefix: str) -> list[str]:
        """List physical keys starting with ``prefix``."""
        ...

    async def delete_by_prefix(self, prefix: str) -> int:
        """
        Delete every key starting with ``prefix``.

        Returns:
            int: Number of keys deleted
        """
        ...

    async def info(self) -> dict[str, Any]:
        """Backend-native diagnostic information."""
        ...
