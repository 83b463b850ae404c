"""
Cache Routes
============

Diagnostics and administrative eviction for the cache subsystem.

None of these endpoints fail when the cache is degraded: the cache is an
accelerator, so its state is reported, never raised.
"""

from typing import Any

from fastapi import APIRouter

from product_catalog.application.api.dependencies import CacheDiagnosticsDep, CacheStoreDep
from product_catalog.application.api.models.cache import (
    CacheOperationResponse,
    CacheProbeResponse,
    CacheStatusResponse,
)
from product_catalog.core.config.constants import Stage
from product_catalog.core.logging.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"])


@router.get("/ping", response_model=CacheProbeResponse)
async def ping_cache(diagnostics: CacheDiagnosticsDep):
    token = await diagnostics.probe()
    return CacheProbeResponse(ok=token is not None, token=token)


@router.get("/status", response_model=CacheStatusResponse)
async def cache_status(diagnostics: CacheDiagnosticsDep):
    return CacheStatusResponse(status=diagnostics.status())


@router.get("/stats")
async def cache_statistics(diagnostics: CacheDiagnosticsDep) -> dict[str, Any]:
    """
    Backend statistics. Networked backends include raw Redis INFO; the
    local store lists its keys.
    """
    return await diagnostics.statistics()


@router.delete("", response_model=CacheOperationResponse)
async def clear_cache(cache: CacheStoreDep):
    """Remove every entry under the namespace."""
    logger.info("Cache clear requested", stage=Stage.CACHE_CLEAR)
    success = await cache.clear()
    return CacheOperationResponse(success=success, prefix=cache.codec.prefix())


@router.delete("/prefix/{sub_prefix}", response_model=CacheOperationResponse)
async def evict_prefix(sub_prefix: str, cache: CacheStoreDep):
    """Remove every entry whose logical key starts with ``sub_prefix``."""
    logger.info("Cache prefix eviction requested", stage=Stage.CACHE_DELETE_PREFIX, sub_prefix=sub_prefix)
    success = await cache.delete_by_prefix(sub_prefix)
    return CacheOperationResponse(success=success, prefix=cache.codec.prefix(sub_prefix))
