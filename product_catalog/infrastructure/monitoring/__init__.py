"""
Monitoring Module

Prometheus metrics and aggregated health checks.
"""

from .health_checker import HealthChecker, HealthStatus
from .metrics_collector import MetricsCollector, get_metrics_collector

__all__ = ["HealthChecker", "HealthStatus", "MetricsCollector", "get_metrics_collector"]
