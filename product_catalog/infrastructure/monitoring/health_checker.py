#!/usr/bin/env python3
"""
Health Checker Module

Aggregates component health for the /health endpoint:
- Cache backend (networked, local fallback, or unavailable)
- Catalog store reachability

Cache problems only ever degrade the report: the cache is an accelerator,
so the service stays fully functional without it. Only an unreachable
catalog makes the service unhealthy.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from product_catalog.core.config.constants import (
    PROBE_TOKEN_LOCAL,
    Stage,
)
from product_catalog.core.config.settings import get_settings
from product_catalog.core.interfaces.catalog import CatalogStore
from product_catalog.core.logging.logger import get_logger

if TYPE_CHECKING:
    from product_catalog.infrastructure.cache.diagnostics import CacheDiagnostics

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthChecker:
    """
    Health checker for the catalog service components.

    STAGE-H: Health check orchestration

    Usage:
        checker = HealthChecker(diagnostics, catalog_store)
        report = await checker.check_health()
    """

    def __init__(self, diagnostics: CacheDiagnostics, catalog: CatalogStore):
        self.settings = get_settings()
        self._diagnostics = diagnostics
        self._catalog = catalog

    async def check_health(self) -> dict[str, Any]:
        """
        Aggregated health report.

        STAGE-H.1: Component checks

        Returns:
            Dict with overall status, version and per-component detail
        """
        cache_health = await self._check_cache()
        catalog_health = await self._check_catalog()

        if catalog_health["status"] != HealthStatus.HEALTHY.value:
            status = HealthStatus.UNHEALTHY
        elif cache_health["status"] != HealthStatus.HEALTHY.value:
            status = HealthStatus.DEGRADED
        else:
            status = HealthStatus.HEALTHY

        if status is not HealthStatus.HEALTHY:
            logger.warning("Health check not healthy", stage=Stage.HEALTH, status=status.value)

        return {
            "status": status.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": self.settings.app.APP_VERSION,
            "environment": self.settings.app.ENVIRONMENT,
            "components": {
                "cache": cache_health,
                "catalog": catalog_health,
            },
        }

    async def _check_cache(self) -> dict[str, Any]:
        token = await self._diagnostics.probe()
        detail = {"backend_status": self._diagnostics.status(), "probe": token}

        if token is None:
            return {"status": HealthStatus.UNHEALTHY.value, **detail}
        if token == PROBE_TOKEN_LOCAL:
            return {"status": HealthStatus.DEGRADED.value, **detail}
        return {"status": HealthStatus.HEALTHY.value, **detail}

    async def _check_catalog(self) -> dict[str, Any]:
        try:
            await self._catalog.list_all(limit=1)
        except Exception as e:
            logger.error("Catalog health check failed", stage=Stage.HEALTH, error=str(e))
            return {"status": HealthStatus.UNHEALTHY.value, "error": str(e)}
        return {"status": HealthStatus.HEALTHY.value}
