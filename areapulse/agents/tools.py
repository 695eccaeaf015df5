"""Agent tools for business density analysis.

All tools return JSON-formatted strings with provenance fields so a
downstream agent can cite where the numbers came from.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from langchain_core.tools import tool

from areapulse.core.exceptions import AreaPulseError
from areapulse.services.business_insights import get_business_insights

logger = structlog.get_logger(__name__)

SOURCE = "google_area_insights"


def _json_response(data: Dict[str, Any], source: str) -> str:
    """Format response as JSON with provenance."""
    data["source"] = source
    data["collected_at"] = datetime.now(timezone.utc).isoformat()
    return json.dumps(data, indent=2, default=str)


def _error_response(error: AreaPulseError, source: str) -> str:
    """Format error response as JSON."""
    return json.dumps({
        "error": error.message,
        "error_type": type(error).__name__,
        "details": error.details,
        "source": source,
        "collected_at": datetime.now(timezone.utc).isoformat(),
    }, default=str)


@tool
async def get_area_insights(
    insights: List[str],
    query_filter: Dict[str, Any],
    analysis_type: str = "MARKET_DENSITY",
    business_context: Optional[Dict[str, Any]] = None,
) -> str:
    """Analyze business density and competition in an area using Google Places Area Insights.

    Counts matching businesses in a circle, region or custom polygon and
    classifies the market (LOW, MODERATE, HIGH, SATURATED competition) with
    recommendations, risks, opportunities and industry insights. If the area
    holds too many places the search radius is reduced automatically; check
    metadata.searchRadius for the radius actually analyzed.

    Args:
        insights: INSIGHT_COUNT for market analysis, INSIGHT_PLACES for competitor place ids.
        query_filter: Filter with locationFilter (circle, region or customArea),
            typeFilter (includedTypes / includedPrimaryTypes, excludedTypes /
            excludedPrimaryTypes), optional operatingStatus, priceLevels, ratingFilter.
        analysis_type: MARKET_DENSITY, COMPETITOR_ANALYSIS, LOCATION_SUITABILITY,
            PRICE_ANALYSIS or CUSTOM.
        business_context: Optional industry (e.g. FOOD_SERVICE), targetCustomers,
            businessModel, strategicGoals, budgetRange.

    Returns:
        JSON string with count, places, businessIntelligence and metadata.
    """
    request = {
        "insights": insights,
        "filter": query_filter,
        "analysisType": analysis_type,
        "businessContext": business_context,
    }
    try:
        result = await get_business_insights(request)
    except AreaPulseError as e:
        logger.warning("area_insights_tool_failed", error_type=type(e).__name__, error=e.message)
        return _error_response(e, SOURCE)

    return _json_response(result.to_wire(), SOURCE)
