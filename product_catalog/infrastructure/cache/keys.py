"""
Namespaced Key Codec

Maps logical cache keys to physical backend keys. Callers never build
physical keys themselves; every key written to a backend goes through
``KeyCodec.encode`` so prefix-scoped deletion cannot touch foreign data.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyCodec:
    """
    Deterministic logical <-> physical key mapping.

    Usage:
        codec = KeyCodec("cache:")
        codec.encode("products_list")   # "cache:products_list"
        codec.prefix("search_")         # "cache:search_"
    """

    namespace: str

    def encode(self, logical_key: str) -> str:
        """Physical key for ``logical_key``."""
        return self.namespace + logical_key

    def prefix(self, sub_prefix: str = "") -> str:
        """Physical prefix covering every logical key starting with ``sub_prefix``."""
        return self.namespace + sub_prefix

    def owns(self, physical_key: str) -> bool:
        """Whether ``physical_key`` lives under this namespace."""
        return physical_key.startswith(self.namespace)

    def decode(self, physical_key: str) -> str:
        """
        Logical key for ``physical_key``.

        Raises:
            ValueError: If the key is outside the namespace
        """
        if not self.owns(physical_key):
            raise ValueError(f"Key {physical_key!r} is outside namespace {self.namespace!r}")
        return physical_key[len(self.namespace):]
