"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus request metrics
- Feed fetch and upsert counters used by the aggregation pipeline
"""

from jobtracker.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    SOURCE_FETCH_COUNT,
    JOBS_UPSERTED,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "SOURCE_FETCH_COUNT",
    "JOBS_UPSERTED",
]
