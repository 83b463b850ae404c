"""
FastAPI Dependency Injection
============================

Request-scoped accessors for the components built by the application
lifespan. Every component lives on ``app.state``; nothing here creates a
process-wide cache or catalog.

    app.state.cache_store       CacheStore
    app.state.cache_diagnostics CacheDiagnostics
    app.state.catalog_store     CatalogStore
    app.state.catalog_service   CatalogService
    app.state.health_checker    HealthChecker

Example:
    @router.get("/products")
    async def list_products(service: CatalogServiceDep):
        return await service.list_products()
"""

from typing import Annotated, Any

from fastapi import Depends, Request

from product_catalog.application.services.catalog_service import CatalogService
from product_catalog.infrastructure.cache.diagnostics import CacheDiagnostics
from product_catalog.infrastructure.cache.store import CacheStore
from product_catalog.infrastructure.monitoring.health_checker import HealthChecker
from product_catalog.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)


def _state(request: Request, name: str) -> Any:
    """
    Fetch a lifespan-managed component.

    Raises:
        RuntimeError: If the lifespan startup did not run
    """
    component = getattr(request.app.state, name, None)
    if component is None:
        raise RuntimeError(
            f"{name} not initialized in app.state. "
            "This indicates the application lifespan startup didn't complete properly."
        )
    return component


def get_cache_store(request: Request) -> CacheStore:
    return _state(request, "cache_store")


def get_cache_diagnostics(request: Request) -> CacheDiagnostics:
    return _state(request, "cache_diagnostics")


def get_catalog_service(request: Request) -> CatalogService:
    return _state(request, "catalog_service")


def get_health_checker(request: Request) -> HealthChecker:
    return _state(request, "health_checker")


CacheStoreDep = Annotated[CacheStore, Depends(get_cache_store)]
CacheDiagnosticsDep = Annotated[CacheDiagnostics, Depends(get_cache_diagnostics)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
HealthCheckerDep = Annotated[HealthChecker, Depends(get_health_checker)]
MetricsDep = Annotated[MetricsCollector, Depends(get_metrics_collector)]
