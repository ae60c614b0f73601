"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

registration_attempts = Counter(
    'registration_attempts_total',
    'Registration and cancellation attempts by outcome',
    ['operation', 'outcome']  # register/cancel, success/<error kind>
)

registration_latency = Histogram(
    'registration_latency_seconds',
    'Latency of the register-for-event transaction',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

events_created = Counter(
    'events_created_total',
    'Events created'
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_registration(operation: str, outcome: str):
    """Record a register/cancel outcome. Outcome: success or an error kind value."""
    registration_attempts.labels(operation=operation, outcome=outcome).inc()
