#!/usr/bin/env python3
"""
Metrics Collector with Prometheus Integration

This module provides metrics collection with:
- Cache hit/miss rates by backend
- Cache operation failures (swallowed errors stay visible here)
- Invalidation counts by triggering mutation
- Catalog mutation counts

Architectural Decision: prometheus-client for industry-standard metrics
- Compatible with Grafana dashboards
- Errors the cache swallows are still countable
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Info,
    generate_latest,
)

from product_catalog.core.config.settings import get_settings
from product_catalog.core.logging.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# Metric Definitions
# ============================================================================

CACHE_HITS = Counter(
    'catalog_cache_hits_total',
    'Total cache hits',
    ['backend']  # networked or local
)

CACHE_MISSES = Counter(
    'catalog_cache_misses_total',
    'Total cache misses',
    ['backend']
)

CACHE_FAILURES = Counter(
    'catalog_cache_failures_total',
    'Cache operations that failed and degraded to a miss or no-op',
    ['backend', 'operation']
)

INVALIDATIONS = Counter(
    'catalog_cache_invalidations_total',
    'Cache invalidations by triggering mutation',
    ['reason', 'outcome']  # outcome: complete or partial
)

CATALOG_MUTATIONS = Counter(
    'catalog_mutations_total',
    'Accepted catalog mutations',
    ['kind']
)

ERRORS = Counter(
    'catalog_errors_total',
    'Total errors by type',
    ['error_type', 'stage']
)

APP_INFO = Info(
    'catalog_app',
    'Application information'
)


class MetricsCollector:
    """
    Centralized metrics collector.

    STAGE-M: Metrics collection

    Usage:
        metrics = get_metrics_collector()
        metrics.record_cache_hit("local")
        output = metrics.get_prometheus_metrics()
    """

    def __init__(self):
        """Initialize metrics collector."""
        self.settings = get_settings()

        APP_INFO.info({
            'version': self.settings.app.APP_VERSION,
            'environment': self.settings.app.ENVIRONMENT,
            'app_name': self.settings.app.APP_NAME
        })

        logger.info("Metrics collector initialized", stage="M.0")

    # =========================================================================
    # Cache Metrics
    # =========================================================================

    def record_cache_hit(self, backend: str) -> None:
        """Record cache hit."""
        CACHE_HITS.labels(backend=backend).inc()

    def record_cache_miss(self, backend: str) -> None:
        """Record cache miss."""
        CACHE_MISSES.labels(backend=backend).inc()

    def record_cache_failure(self, backend: str, operation: str) -> None:
        """Record a swallowed cache failure."""
        CACHE_FAILURES.labels(backend=backend, operation=operation).inc()

    def record_invalidation(self, reason: str, complete: bool) -> None:
        """Record an invalidation pass."""
        INVALIDATIONS.labels(reason=reason, outcome="complete" if complete else "partial").inc()

    # =========================================================================
    # Catalog Metrics
    # =========================================================================

    def record_mutation(self, kind: str) -> None:
        """Record an accepted catalog mutation."""
        CATALOG_MUTATIONS.labels(kind=kind).inc()

    def record_error(self, error_type: str, stage: str) -> None:
        """Record error."""
        ERRORS.labels(error_type=error_type, stage=stage).inc()

    # =========================================================================
    # Export
    # =========================================================================

    def get_prometheus_metrics(self) -> bytes:
        """
        Get Prometheus metrics output.

        Returns:
            bytes: Prometheus text format metrics
        """
        return generate_latest(REGISTRY)

    def get_content_type(self) -> str:
        """Get Prometheus content type."""
        return CONTENT_TYPE_LATEST


# Global metrics collector
_metrics: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
