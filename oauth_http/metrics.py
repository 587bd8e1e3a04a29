"""
Prometheus Metrics for oauth-http

Provides a counter and a histogram for outgoing requests.
Host application should expose the prometheus_client registry.
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("oauth_http.metrics")

# outcome: "success" or "transport_error"
REQUEST_COUNT = Counter(
    "oauth_http_requests_total",
    "Total number of outgoing oauth-http requests",
    ["method", "outcome"],
)

REQUEST_LATENCY = Histogram(
    "oauth_http_request_latency_seconds",
    "Outgoing request latency in seconds",
    ["method"],
)


def metrics_request(method: str, outcome: str, latency: float) -> None:
    """
    Record metrics for one request.

    Args:
        method: Uppercase HTTP method
        outcome: Call outcome label
        latency: Duration in seconds
    """
    try:
        REQUEST_COUNT.labels(method=method, outcome=outcome).inc()
        REQUEST_LATENCY.labels(method=method).observe(latency)
    except Exception as e:
        # Metrics failures should not fail the request
        logger.debug("Failed to record metrics: %s", e)
