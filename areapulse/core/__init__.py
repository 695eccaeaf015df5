"""
Core infrastructure modules for AreaPulse.

Provides common utilities used across the application:
- exceptions: Standardized exception hierarchy
- logging: structlog configuration
"""

from areapulse.core.exceptions import (
    AreaPulseError,
    RetryableError,
    PermanentError,
    ValidationError,
    ConfigurationError,
    TransientCapacityError,
    RetryExhausted,
    InsightsAPIError,
    InsightsAuthError,
    InsightsRateLimitError,
    InsightsTimeoutError,
    ParseError,
    QueryCancelledError,
)

__all__ = [
    "AreaPulseError",
    "RetryableError",
    "PermanentError",
    "ValidationError",
    "ConfigurationError",
    "TransientCapacityError",
    "RetryExhausted",
    "InsightsAPIError",
    "InsightsAuthError",
    "InsightsRateLimitError",
    "InsightsTimeoutError",
    "ParseError",
    "QueryCancelledError",
]
