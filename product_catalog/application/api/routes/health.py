"""
Health and Metrics Routes
=========================

    GET /health   aggregated component health
    GET /metrics  Prometheus text exposition

HEALTH STATUS CODES:
--------------------
    200: healthy, or degraded (local cache fallback, or no cache at all)
    503: unhealthy (catalog unreachable)
"""

from fastapi import APIRouter, HTTPException, Response

from product_catalog.application.api.dependencies import HealthCheckerDep, MetricsDep
from product_catalog.infrastructure.monitoring.health_checker import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(health_checker: HealthCheckerDep):
    report = await health_checker.check_health()
    if report["status"] == HealthStatus.UNHEALTHY.value:
        raise HTTPException(status_code=503, detail=report)
    return report


@router.get("/metrics")
async def prometheus_metrics(metrics: MetricsDep):
    """Expose metrics in Prometheus text format for scraping."""
    return Response(
        content=metrics.get_prometheus_metrics(),
        media_type=metrics.get_content_type(),
    )
