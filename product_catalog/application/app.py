#!/usr/bin/env python3
"""
FastAPI Application Entry Point

Configures the product catalog application: lifespan-managed cache and
catalog components, middleware, exception handlers and routes.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from product_catalog.application.api.middleware.error_handler import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
)
from product_catalog.application.api.routes.cache import router as cache_router
from product_catalog.application.api.routes.health import router as health_router
from product_catalog.application.api.routes.products import router as products_router
from product_catalog.application.services.catalog_service import CatalogService
from product_catalog.core.config.constants import HEADER_REQUEST_ID
from product_catalog.core.config.settings import get_settings
from product_catalog.core.interfaces.catalog import CatalogStore
from product_catalog.core.logging.logger import (
    clear_request_id,
    get_logger,
    set_request_id,
    setup_logging,
)
from product_catalog.infrastructure.cache.diagnostics import CacheDiagnostics
from product_catalog.infrastructure.cache.store import CacheStore
from product_catalog.infrastructure.catalog.memory_store import InMemoryCatalogStore
from product_catalog.infrastructure.monitoring.health_checker import HealthChecker

logger = get_logger(__name__)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup and shutdown).

    Startup:
        1. Logging
        2. Cache store + one-time backend selection
        3. Catalog service (+ change feed subscription)
        4. Cleanup of incomplete records
    Shutdown:
        stop watching, release the cache backend
    """
    settings = get_settings()

    setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

    logger.info(
        "Starting Product Catalog Service",
        environment=settings.app.ENVIRONMENT,
        version=settings.app.APP_VERSION,
    )

    catalog_store: CatalogStore = getattr(app.state, "catalog_store", None) or InMemoryCatalogStore()
    cache_store = CacheStore(settings.cache)
    catalog_service = CatalogService(catalog_store, cache_store, settings.cache, settings.catalog)
    diagnostics = CacheDiagnostics(cache_store)

    try:
        await cache_store.initialize()
        logger.info("Cache initialized", status=diagnostics.status())

        if settings.catalog.CATALOG_WATCH_CHANGES:
            catalog_service.watch_changes()

        await catalog_service.cleanup_empty_products()

        # Store in app state for dependencies.py
        app.state.catalog_store = catalog_store
        app.state.cache_store = cache_store
        app.state.cache_diagnostics = diagnostics
        app.state.catalog_service = catalog_service
        app.state.health_checker = HealthChecker(diagnostics, catalog_store)

        logger.info("Application startup complete")

        yield

    finally:
        logger.info("Shutting down application")

        catalog_service.stop_watching()
        await cache_store.close()

        logger.info("Application shutdown complete")


# ============================================================================
# Application Factory
# ============================================================================


def create_app(catalog_store: CatalogStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        catalog_store: Document store to serve; an in-memory store when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Product catalog with a Redis cache and local-store fallback",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    if catalog_store is not None:
        app.state.catalog_store = catalog_store

    # Middleware executes in reverse order of registration:
    # request id -> CORS -> error handling -> routes
    app.add_middleware(
        ErrorHandlingMiddleware,
        include_traceback=(settings.app.ENVIRONMENT == "development")
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[HEADER_REQUEST_ID],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """
        Inject request ID into all requests for log correlation.
        """
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)
        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response
        finally:
            clear_request_id()

    register_exception_handlers(app)

    base_path = settings.app.API_BASE_PATH
    app.include_router(health_router, prefix=base_path)
    app.include_router(products_router, prefix=base_path)
    app.include_router(cache_router, prefix=base_path)

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    return app


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "product_catalog.application.app:create_app",
        factory=True,
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
