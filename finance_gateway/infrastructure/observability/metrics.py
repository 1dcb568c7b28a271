"""Prometheus metrics for projections and HTTP latency"""

from prometheus_client import Counter, Histogram

projection_counter = Counter(
    "finance_projection_total",
    "Projected balance reports served",
    ["bill"],  # present | absent
)

projection_failure_counter = Counter(
    "finance_projection_failures_total",
    "Projected balance requests that failed on the data store",
)

negative_projection_counter = Counter(
    "finance_projection_negative_total",
    "Projections ending below zero",
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(has_bill: bool, projected_negative: bool) -> None:
    """Count a served projection by bill presence and sign of the final phase"""
    projection_counter.labels(bill="present" if has_bill else "absent").inc()
    if projected_negative:
        negative_projection_counter.inc()
