"""
Shared metrics configuration for the Access Firewall.
"""

from typing import Dict, Any, Optional
import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram, Info, CollectorRegistry


class MetricsCollector:
    """Centralized metrics collector for services.

    Each collector owns its own registry so several firewall instances can
    live in one process without clashing on metric names.
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Health check metrics
        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        self._setup_firewall_metrics()

    def _setup_firewall_metrics(self):
        """Set up firewall-specific metrics."""
        self._metrics["firewall_decisions_total"] = Counter(
            "firewall_decisions_total",
            "Total firewall decisions",
            ["decision"],
            registry=self.registry
        )

        self._metrics["firewall_evaluation_duration_seconds"] = Histogram(
            "firewall_evaluation_duration_seconds",
            "Firewall evaluation duration in seconds",
            registry=self.registry
        )

        self._metrics["firewall_rule_registrations_total"] = Counter(
            "firewall_rule_registrations_total",
            "Total rule registrations",
            ["disposition"],
            registry=self.registry
        )

        self._metrics["firewall_config_errors_total"] = Counter(
            "firewall_config_errors_total",
            "Total firewall configuration errors",
            ["error_type"],
            registry=self.registry
        )

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_decision(self, decision: str):
        self._metrics["firewall_decisions_total"].labels(decision=decision).inc()

    def record_registration(self, disposition: str):
        self._metrics["firewall_rule_registrations_total"].labels(disposition=disposition).inc()

    def record_config_error(self, error_type: str):
        self._metrics["firewall_config_errors_total"].labels(error_type=error_type).inc()

    @contextmanager
    def time_evaluation(self):
        """Context manager timing a firewall evaluation."""
        start_time = time.time()
        try:
            yield
        finally:
            self._metrics["firewall_evaluation_duration_seconds"].observe(time.time() - start_time)

    def sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read the current value of a sample from this collector's registry."""
        return self.registry.get_sample_value(name, labels or {})


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
