"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_requests_total = Counter(
    "restdemo_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "restdemo_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

store_operations_total = Counter(
    "restdemo_store_operations_total",
    "Resource store operations by outcome",
    ["store", "operation", "outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_store_operation(store: str, operation: str, outcome: str) -> None:
    store_operations_total.labels(store=store, operation=operation, outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
