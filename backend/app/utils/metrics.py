"""Prometheus metrics for document validation."""

from prometheus_client import Counter, Histogram

validation_requests_total = Counter(
    "validation_requests_total",
    "Total POST /api/validate-docs requests by outcome",
    ["outcome"],
)

uploaded_files_total = Counter(
    "uploaded_files_total",
    "Total files accepted for validation",
)

upstream_latency_ms = Histogram(
    "upstream_latency_ms",
    "Validation service call latency in milliseconds",
    ["outcome"],
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000],
)

upstream_fallbacks_total = Counter(
    "upstream_fallbacks_total",
    "Total mock fallbacks by reason",
    ["reason"],
)


class PrometheusValidationMetrics:
    """Prometheus-based validation metrics implementation."""

    def inc_request(self, outcome: str) -> None:
        """Increment request counter."""
        validation_requests_total.labels(outcome=outcome).inc()

    def inc_files(self, count: int) -> None:
        """Count accepted files."""
        uploaded_files_total.inc(count)

    def record_upstream_latency(self, outcome: str, latency_ms: float) -> None:
        """Record validation service latency."""
        upstream_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def inc_fallback(self, reason: str) -> None:
        """Increment fallback counter."""
        upstream_fallbacks_total.labels(reason=reason).inc()
