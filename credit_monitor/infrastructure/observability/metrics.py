"""Prometheus metrics for monitoring the population, filters, and live feed"""

from prometheus_client import Counter, Gauge, Histogram

from credit_monitor.domain.models import AnalyticsSummary

# Feed metrics
feed_tick_counter = Counter(
    "credit_monitor_feed_ticks_total",
    "Live feed ticks",
    ["outcome"],  # updated | empty | failed
)

# Filter metrics
filter_update_counter = Counter(
    "credit_monitor_filter_updates_total",
    "Filter update requests",
    ["outcome"],  # accepted | rejected
)

regeneration_counter = Counter(
    "credit_monitor_regenerations_total",
    "Full population regenerations",
)

# Population state
population_size_gauge = Gauge(
    "credit_monitor_population_size",
    "Records in the store",
)

filtered_size_gauge = Gauge(
    "credit_monitor_filtered_size",
    "Records matching the active filters",
)

approval_rate_gauge = Gauge(
    "credit_monitor_filtered_approval_rate_percent",
    "Approval rate over the filtered subset (0 when empty)",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_views(population: int, summary: AnalyticsSummary) -> None:
    """Publish the sizes and approval rate of the current derived views"""
    population_size_gauge.set(population)
    filtered_size_gauge.set(summary.total_applications)
    approval_rate_gauge.set(summary.approval_rate or 0)
