"""
Cache Module

Dual-backend cache: Redis when reachable at startup, otherwise a local
on-disk store, behind one TTL-aware, never-raising store API.
"""

from .diagnostics import CacheDiagnostics
from .keys import KeyCodec
from .local_backend import CacheEntry, LocalBackend
from .redis_backend import RedisBackend
from .selector import BackendSelector
from .store import CacheLookup, CacheStore

__all__ = [
    "BackendSelector",
    "CacheDiagnostics",
    "CacheEntry",
    "CacheLookup",
    "CacheStore",
    "KeyCodec",
    "LocalBackend",
    "RedisBackend",
]
