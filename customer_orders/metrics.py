"""
Prometheus metrics for the customer order service.

Tracks HTTP traffic and customer/order write outcomes.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "customer_orders_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "customer_orders_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Write outcome metrics
customers_created_total = Counter(
    "customer_orders_customers_created_total", "Total customers created"
)

duplicate_email_total = Counter(
    "customer_orders_duplicate_email_total",
    "Customer creations rejected because the email already exists",
)

orders_created_total = Counter(
    "customer_orders_orders_created_total", "Total orders saved"
)


def track_request_metrics(
    method: str, endpoint: str, status_code: int, duration: float
) -> None:
    """Record one completed HTTP request."""
    http_requests_total.labels(
        method=method, endpoint=endpoint, status=str(status_code)
    ).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
        duration
    )


async def metrics_endpoint() -> Response:
    """Render all registered metrics in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
