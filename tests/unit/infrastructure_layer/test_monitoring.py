"""
Unit Tests for Monitoring Infrastructure

Tests health aggregation and metrics collection.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client.parser import text_string_to_metric_families

from product_catalog.core.config.constants import (
    PROBE_TOKEN_LOCAL,
    PROBE_TOKEN_NETWORKED,
    STATUS_LOCAL_FALLBACK,
    STATUS_NETWORKED_CONNECTED,
)
from product_catalog.infrastructure.cache.diagnostics import CacheDiagnostics
from product_catalog.infrastructure.monitoring.health_checker import HealthChecker, HealthStatus
from product_catalog.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)


def mock_diagnostics(token, status):
    diagnostics = MagicMock(spec=CacheDiagnostics)
    diagnostics.probe = AsyncMock(return_value=token)
    diagnostics.status = MagicMock(return_value=status)
    return diagnostics


@pytest.mark.unit
class TestHealthChecker:
    """Test suite for HealthChecker."""

    async def test_healthy_with_networked_cache(self, catalog_store):
        checker = HealthChecker(mock_diagnostics(PROBE_TOKEN_NETWORKED, STATUS_NETWORKED_CONNECTED), catalog_store)

        report = await checker.check_health()

        assert report["status"] == HealthStatus.HEALTHY.value
        assert report["components"]["cache"]["backend_status"] == STATUS_NETWORKED_CONNECTED
        assert "timestamp" in report and "version" in report

    async def test_local_fallback_is_degraded(self, catalog_store):
        checker = HealthChecker(mock_diagnostics(PROBE_TOKEN_LOCAL, STATUS_LOCAL_FALLBACK), catalog_store)

        report = await checker.check_health()

        assert report["status"] == HealthStatus.DEGRADED.value
        assert report["components"]["catalog"]["status"] == "healthy"

    async def test_failed_probe_degrades(self, catalog_store):
        checker = HealthChecker(mock_diagnostics(None, "Cache Unavailable"), catalog_store)

        report = await checker.check_health()

        assert report["status"] == HealthStatus.DEGRADED.value
        assert report["components"]["cache"]["status"] == HealthStatus.UNHEALTHY.value

    async def test_catalog_failure_is_unhealthy(self, flaky_catalog_store):
        flaky_catalog_store.fail_list = True
        checker = HealthChecker(
            mock_diagnostics(PROBE_TOKEN_NETWORKED, STATUS_NETWORKED_CONNECTED), flaky_catalog_store
        )

        report = await checker.check_health()

        assert report["status"] == HealthStatus.UNHEALTHY.value
        assert "catalog unavailable" in report["components"]["catalog"]["error"]


def exported_samples(text):
    """(sample name, labels) pairs of a Prometheus exposition."""
    return [
        (sample.name, sample.labels)
        for family in text_string_to_metric_families(text)
        for sample in family.samples
    ]


@pytest.mark.unit
class TestMetricsCollector:
    """Test suite for MetricsCollector."""

    def test_singleton(self):
        assert get_metrics_collector() is get_metrics_collector()
        assert isinstance(get_metrics_collector(), MetricsCollector)

    def test_recorded_metrics_are_exported(self):
        metrics = get_metrics_collector()

        metrics.record_cache_hit("local")
        metrics.record_cache_miss("local")
        metrics.record_cache_failure("networked", "get")
        metrics.record_invalidation("create", complete=True)
        metrics.record_mutation("create")

        samples = exported_samples(metrics.get_prometheus_metrics().decode("utf-8"))

        assert ("catalog_cache_hits_total", {"backend": "local"}) in samples
        assert ("catalog_cache_failures_total", {"backend": "networked", "operation": "get"}) in samples
        assert ("catalog_cache_invalidations_total", {"reason": "create", "outcome": "complete"}) in samples
        assert ("catalog_mutations_total", {"kind": "create"}) in samples

    def test_content_type_is_prometheus_text(self):
        assert get_metrics_collector().get_content_type().startswith("text/plain")
