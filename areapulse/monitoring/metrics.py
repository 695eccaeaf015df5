"""
Prometheus metrics for AreaPulse observability.

Usage:
    from areapulse.monitoring.metrics import track_insights_query

    with track_insights_query("MARKET_DENSITY"):
        result = await get_business_insights(request)
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram


# =============================================================================
# Metric Definitions
# =============================================================================

INSIGHTS_REQUEST_TOTAL = Counter(
    "areapulse_insights_request_total",
    "computeInsights HTTP attempts by outcome",
    ["outcome"],
)

INSIGHTS_REQUEST_DURATION = Histogram(
    "areapulse_insights_request_duration_seconds",
    "Latency of a single computeInsights attempt",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

RADIUS_REDUCTIONS_TOTAL = Counter(
    "areapulse_radius_reductions_total",
    "Search radius reductions after capacity rejections",
    ["clamped"],
)

FILTER_REPAIRS_TOTAL = Counter(
    "areapulse_filter_repairs_total",
    "Type filter repairs applied after capacity rejections",
)

INSIGHTS_QUERY_TOTAL = Counter(
    "areapulse_insights_query_total",
    "Business insights invocations by analysis type and status",
    ["analysis_type", "status"],
)

INSIGHTS_QUERY_DURATION = Histogram(
    "areapulse_insights_query_duration_seconds",
    "End-to-end duration of a business insights invocation",
    ["analysis_type"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
)


# =============================================================================
# Tracking Helpers
# =============================================================================


@contextmanager
def track_insights_request() -> Generator[dict, None, None]:
    """
    Context manager timing one HTTP attempt.

    Usage:
        with track_insights_request() as ctx:
            response = await client.post(...)
            ctx["outcome"] = "success"
    """
    start_time = time.perf_counter()
    context = {"outcome": "error"}
    try:
        yield context
    finally:
        INSIGHTS_REQUEST_DURATION.observe(time.perf_counter() - start_time)
        INSIGHTS_REQUEST_TOTAL.labels(outcome=context.get("outcome", "error")).inc()


@contextmanager
def track_insights_query(analysis_type: str) -> Generator[None, None, None]:
    """Context manager to track a whole invocation's duration and status."""
    start_time = time.perf_counter()
    status = "success"
    try:
        yield
    except Exception:
        status = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        INSIGHTS_QUERY_DURATION.labels(analysis_type=analysis_type).observe(duration)
        INSIGHTS_QUERY_TOTAL.labels(analysis_type=analysis_type, status=status).inc()


def record_radius_reduction(clamped: bool) -> None:
    RADIUS_REDUCTIONS_TOTAL.labels(clamped=str(clamped).lower()).inc()


def record_filter_repair() -> None:
    FILTER_REPAIRS_TOTAL.inc()
