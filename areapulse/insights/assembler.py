"""Final result composition."""

from datetime import datetime, timezone
from typing import Optional

from areapulse.insights.executor import QueryExecution
from areapulse.models.schemas import (
    BusinessInsightsResult,
    ClassificationResult,
    InsightsRequest,
    QueryResult,
    ResultMetadata,
    RetailMarketerInsights,
    SoloProfessionalInsights,
)


def assemble_response(
    query_result: QueryResult,
    classification: Optional[ClassificationResult],
    request: InsightsRequest,
    execution: QueryExecution,
    *,
    retail_marketer_insights: Optional[RetailMarketerInsights] = None,
    solo_professional_insights: Optional[SoloProfessionalInsights] = None,
) -> BusinessInsightsResult:
    """Combine parser output, classification and run metadata.

    Metadata reports the filter and radius of the attempt that succeeded, not
    the ones originally requested, so callers can tell whether the search area
    was degraded.
    """
    business_context = request.business_context

    metadata = ResultMetadata(
        analysis_type=request.analysis_type,
        industry=business_context.industry if business_context else None,
        search_radius=execution.effective_radius,
        requested_radius=execution.state.requested_radius,
        radius_degraded=execution.radius_degraded,
        attempts=execution.attempts,
        filter_criteria=execution.effective_filter.to_wire(),
        timestamp=datetime.now(timezone.utc).isoformat(),
        strategic_context=business_context.to_wire() if business_context else None,
    )

    return BusinessInsightsResult(
        count=query_result.count,
        places=list(query_result.places),
        business_intelligence=classification,
        metadata=metadata,
        retail_marketer_insights=retail_marketer_insights,
        solo_professional_insights=solo_professional_insights,
        warnings=list(query_result.warnings),
    )
