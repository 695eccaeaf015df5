"""
Data Source Integrations.

- area_insights: Google Places Area Insights (computeInsights) client

Example:
    from areapulse.collectors import AreaInsightsClient

    async with AreaInsightsClient() as client:
        body = await client.compute_insights(["INSIGHT_COUNT"], query_filter)
"""

from areapulse.collectors.area_insights import (
    CAPACITY_EXCEEDED_PHRASE,
    CAPACITY_EXCEEDED_STATUS,
    AreaInsightsClient,
    is_capacity_exceeded,
)

__all__ = [
    "CAPACITY_EXCEEDED_PHRASE",
    "CAPACITY_EXCEEDED_STATUS",
    "AreaInsightsClient",
    "is_capacity_exceeded",
]
