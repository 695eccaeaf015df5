"""
Monitoring and observability for AreaPulse.

Provides Prometheus metrics for the Area Insights client and the adaptive
query executor.
"""

from areapulse.monitoring.metrics import (
    FILTER_REPAIRS_TOTAL,
    INSIGHTS_QUERY_DURATION,
    INSIGHTS_QUERY_TOTAL,
    INSIGHTS_REQUEST_DURATION,
    INSIGHTS_REQUEST_TOTAL,
    RADIUS_REDUCTIONS_TOTAL,
    record_filter_repair,
    record_radius_reduction,
    track_insights_query,
    track_insights_request,
)

__all__ = [
    "FILTER_REPAIRS_TOTAL",
    "INSIGHTS_QUERY_DURATION",
    "INSIGHTS_QUERY_TOTAL",
    "INSIGHTS_REQUEST_DURATION",
    "INSIGHTS_REQUEST_TOTAL",
    "RADIUS_REDUCTIONS_TOTAL",
    "record_filter_repair",
    "record_radius_reduction",
    "track_insights_query",
    "track_insights_request",
]
