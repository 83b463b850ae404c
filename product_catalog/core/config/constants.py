"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the product catalog service.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for cache keys and status strings
- Type-safe enums for backend identity
- Easy to update and track changes
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Processing stages used as the ``stage`` field of log entries.

    Format: {PREFIX}.{STEP}_{DESCRIPTIVE_NAME}

    Examples:
        logger.info("Cache hit", stage=Stage.CACHE_GET)
    """

    # Cache lifecycle
    CACHE_INIT = "CACHE.0_BACKEND_SELECTION"
    CACHE_GET = "CACHE.1_GET"
    CACHE_SET = "CACHE.2_SET"
    CACHE_DELETE = "CACHE.3_DELETE"
    CACHE_DELETE_PREFIX = "CACHE.4_DELETE_PREFIX"
    CACHE_CLEAR = "CACHE.5_CLEAR"
    CACHE_CLOSE = "CACHE.6_CLOSE"
    CACHE_DIAGNOSTICS = "CACHE.D_DIAGNOSTICS"

    # Catalog lifecycle
    CATALOG_LIST = "CAT.1_LIST"
    CATALOG_SEARCH = "CAT.2_SEARCH"
    CATALOG_SAVE = "CAT.3_SAVE"
    CATALOG_DELETE = "CAT.4_DELETE"
    CATALOG_CLEANUP = "CAT.5_CLEANUP"
    CATALOG_CHANGES = "CAT.6_CHANGE_FEED"

    # Cross-cutting
    INVALIDATION = "INV_INVALIDATION"
    HEALTH = "H_HEALTH_CHECK"


# ============================================================================
# Cache Backends
# ============================================================================


class CacheBackendKind(str, Enum):
    """
    Cache storage variants.

    NETWORKED: Redis server, native expiry
    LOCAL: On-disk key-value store, emulated expiry
    """

    NETWORKED = "networked"
    LOCAL = "local"


BACKEND_NAME_NETWORKED = "Redis Server"
BACKEND_NAME_LOCAL = "Local Store"

STATUS_NETWORKED_CONNECTED = "Redis Server Connected"
STATUS_NETWORKED_DISCONNECTED = "Redis Server Disconnected"
STATUS_LOCAL_FALLBACK = "Redis Fallback Mode (local store)"
STATUS_UNAVAILABLE = "Cache Unavailable"

PROBE_TOKEN_NETWORKED = "PONG"
PROBE_TOKEN_LOCAL = "LocalStore OK"


# ============================================================================
# Cache Keys (logical, namespace is added by the key codec)
# ============================================================================

CACHE_KEY_PRODUCTS_LIST = "products_list"
CACHE_PREFIX_SEARCH = "search_"

# Batch size for SCAN / UNLINK during prefix deletion
REDIS_SCAN_BATCH_SIZE = 500


# ============================================================================
# Catalog
# ============================================================================

PRODUCT_ID_PREFIX = "product:"
DESIGN_DOC_PREFIX = "_design"


class MutationKind(str, Enum):
    """Catalog mutations that trigger cache invalidation."""

    CREATE = "create"
    UPDATE = "update"
    UPDATE_RETRY = "update_conflict_retry"
    DELETE = "delete"
    CLEANUP = "cleanup"
    EXTERNAL = "external_change"


# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"
