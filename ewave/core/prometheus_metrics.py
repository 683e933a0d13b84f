import logging
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, Info, generate_latest
from prometheus_client.core import CollectorRegistry

logger = logging.getLogger(__name__)

# Prometheus Registry
REGISTRY = CollectorRegistry()

# Service Metrics
service_calls_total = Counter(
    'ewave_service_calls_total',
    'Total service method calls',
    ['status', 'service', 'method'],
    registry=REGISTRY
)

service_duration_seconds = Histogram(
    'ewave_service_duration_seconds',
    'Service method duration in seconds',
    ['service', 'method'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
    registry=REGISTRY
)

system_info = Info(
    'ewave_marketplace',
    'System information',
    registry=REGISTRY
)

# Business Metrics
purchases_total = Counter(
    'ewave_purchases_total',
    'Purchase attempts by outcome',
    ['outcome'],  # completed | unavailable | failed
    registry=REGISTRY
)

reviews_submitted_total = Counter(
    'ewave_reviews_submitted_total',
    'Reviews stored',
    registry=REGISTRY
)


class PrometheusMetricsCollector:
    """Thin facade over the marketplace Prometheus metrics"""

    def __init__(self):
        system_info.info({
            'version': '1.0.0',
            'service': 'ewave-marketplace'
        })

    def record_service_call(
        self,
        service_name: str,
        method_name: str,
        duration_seconds: float,
        success: bool
    ):
        status = 'success' if success else 'error'

        service_calls_total.labels(
            status=status,
            service=service_name,
            method=method_name
        ).inc()

        service_duration_seconds.labels(
            service=service_name,
            method=method_name
        ).observe(duration_seconds)

    def record_purchase(self, outcome: str):
        purchases_total.labels(outcome=outcome).inc()

    def record_review(self):
        reviews_submitted_total.inc()

    def get_prometheus_metrics(self) -> bytes:
        """Get Prometheus metrics in text format"""
        return generate_latest(REGISTRY)

# Global instance
prometheus_collector = PrometheusMetricsCollector()
