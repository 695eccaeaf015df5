"""Business insights service.

Runs one request end to end:

    build_filter -> AdaptiveQueryExecutor.execute -> classify -> assemble_response

Classification is skipped when the count is unknown, when the analysis type is
CUSTOM, or when the area is a region or polygon (no radius to compute a
density from). Such results carry no businessIntelligence block.
"""

import asyncio
from typing import Any, Mapping, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from areapulse.collectors.area_insights import AreaInsightsClient
from areapulse.core.exceptions import QueryCancelledError, ValidationError
from areapulse.insights.assembler import assemble_response
from areapulse.insights.classification import (
    classify,
    retail_marketer_insights,
    solo_professional_insights,
)
from areapulse.insights.executor import AdaptiveQueryExecutor, QueryExecution
from areapulse.insights.filter_builder import build_filter
from areapulse.models.schemas import (
    AnalysisType,
    BusinessInsightsResult,
    Industry,
    InsightsRequest,
    QueryFilter,
)
from areapulse.monitoring.metrics import track_insights_query

logger = structlog.get_logger(__name__)

RETAIL_AUDIENCE = frozenset({Industry.RETAIL_GENERAL, Industry.FOOD_SERVICE})
PROFESSIONAL_AUDIENCE = frozenset({Industry.SOLO_PROFESSIONAL, Industry.PROFESSIONAL_SERVICES})


def parse_request(request: InsightsRequest | Mapping[str, Any]) -> InsightsRequest:
    """Validate a raw request mapping, raising the package ValidationError."""
    if isinstance(request, InsightsRequest):
        return request
    try:
        return InsightsRequest.model_validate(request)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid insights request",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def _build_result(request: InsightsRequest, execution: QueryExecution) -> BusinessInsightsResult:
    query_result = execution.result
    count = query_result.count
    radius = execution.effective_radius
    business_context = request.business_context

    classification = None
    if query_result.count_known and radius is not None and request.analysis_type != AnalysisType.CUSTOM:
        classification = classify(count, radius, request.analysis_type, business_context)

    retail = None
    solo = None
    if query_result.count_known and business_context is not None:
        if business_context.industry in RETAIL_AUDIENCE:
            retail = retail_marketer_insights(count)
        elif business_context.industry in PROFESSIONAL_AUDIENCE:
            solo = solo_professional_insights(count)

    return assemble_response(
        query_result,
        classification,
        request,
        execution,
        retail_marketer_insights=retail,
        solo_professional_insights=solo,
    )


async def _run(
    client: AreaInsightsClient,
    request: InsightsRequest,
    query_filter: QueryFilter,
    timeout: Optional[float],
) -> BusinessInsightsResult:
    executor = AdaptiveQueryExecutor(client)
    try:
        execution = await asyncio.wait_for(
            executor.execute(query_filter, request.insights),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        logger.warning("insights_query_cancelled", timeout=timeout)
        raise QueryCancelledError(timeout) from e

    return _build_result(request, execution)


async def get_business_insights(
    request: InsightsRequest | Mapping[str, Any],
    *,
    client: Optional[AreaInsightsClient] = None,
    timeout: Optional[float] = None,
) -> BusinessInsightsResult:
    """Count businesses in an area and classify the competitive landscape.

    Args:
        request: InsightsRequest or its wire-format dict.
        client: Client to reuse. A new one is created (and closed) if omitted.
        timeout: Deadline in seconds for the whole adaptive query. When it
            fires the in-flight attempt is cancelled.

    Raises:
        ValidationError: Malformed request or filter (before any request).
        ConfigurationError: No API key (before any request).
        RetryExhausted: Every attempt hit the place cap.
        QueryCancelledError: The deadline fired.
        InsightsAPIError: Any other remote failure.
        ParseError: The response body was not a JSON object.
    """
    request = parse_request(request)
    business_context = request.business_context
    query_filter = build_filter(
        request.query_filter,
        business_context.industry if business_context else None,
    )

    with track_insights_query(request.analysis_type.value):
        if client is not None:
            return await _run(client, request, query_filter, timeout)
        async with AreaInsightsClient() as owned_client:
            return await _run(owned_client, request, query_filter, timeout)
