"""
Services.

- business_insights: end-to-end density analysis for one area
"""

from areapulse.services.business_insights import get_business_insights, parse_request

__all__ = [
    "get_business_insights",
    "parse_request",
]
