"""Lookup metrics collection."""

from prometheus_client import Counter, Histogram


# Counters
age_lookups = Counter(
    "age_lookups_total",
    "Total account age lookups",
    ["confidence", "source"],
)

upstream_failures = Counter(
    "age_upstream_failures_total",
    "Telegram Bot API calls that failed",
    ["stage"],
)

# Histograms
lookup_latency = Histogram(
    "age_lookup_latency_seconds",
    "Time to resolve and estimate an account, including the upstream delay",
    buckets=[0.1, 0.25, 0.5, 1.0, 1.5, 2.5, 5.0, 10.0],
)


class MetricsCollector:
    """Collects and exposes account age lookup metrics."""

    def record_lookup(self, confidence: str, source: str, latency_seconds: float):
        """Record a completed lookup."""
        age_lookups.labels(confidence=confidence, source=source).inc()
        lookup_latency.observe(latency_seconds)

    def record_upstream_failure(self, stage: str):
        """Record a failed Bot API call (chat, photos or file)."""
        upstream_failures.labels(stage=stage).inc()
