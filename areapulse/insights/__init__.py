"""
Business density insights pipeline.

FilterBuilder -> AdaptiveQueryExecutor -> ResultParser -> ClassificationEngine
-> ResponseAssembler. See areapulse.services.business_insights for the
function that drives the whole flow.
"""

from areapulse.insights.assembler import assemble_response
from areapulse.insights.classification import (
    classify,
    competition_level_for,
    compute_density,
    retail_marketer_insights,
    solo_professional_insights,
)
from areapulse.insights.executor import (
    MAX_ATTEMPTS,
    RADIUS_FLOOR_METERS,
    AdaptiveQueryExecutor,
    QueryExecution,
    RetryState,
    next_attempt,
    shrink_radius,
)
from areapulse.insights.filter_builder import build_filter, merge_type_filter, repair_type_filter
from areapulse.insights.parser import parse_count, parse_insights_response

__all__ = [
    "assemble_response",
    "classify",
    "competition_level_for",
    "compute_density",
    "retail_marketer_insights",
    "solo_professional_insights",
    "MAX_ATTEMPTS",
    "RADIUS_FLOOR_METERS",
    "AdaptiveQueryExecutor",
    "QueryExecution",
    "RetryState",
    "next_attempt",
    "shrink_radius",
    "build_filter",
    "merge_type_filter",
    "repair_type_filter",
    "parse_count",
    "parse_insights_response",
]
