"""
Core exception hierarchy for AreaPulse.

Provides standardized exception types with categorization for retry logic.
Only TransientCapacityError is retried by the adaptive query executor; every
other error is terminal for the invocation that raised it.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class AreaPulseError(Exception):
    """Base exception for all AreaPulse errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RetryableError(AreaPulseError):
    """
    Transient errors that may succeed on a later attempt.

    Examples: the remote entity cap was hit for the current search area.
    """

    pass


class PermanentError(AreaPulseError):
    """
    Errors that won't be fixed by retrying.

    Examples: Invalid filter, missing credential, authentication failures.
    """

    pass


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(PermanentError):
    """Raised when a query filter or request is malformed."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        self.errors = errors or []
        details = {"errors": self.errors} if self.errors else None
        super().__init__(message, details)


class ConfigurationError(PermanentError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)


# =============================================================================
# Area Insights Errors
# =============================================================================


class TransientCapacityError(RetryableError):
    """Raised when the service refuses a query for enumerating too many places."""

    def __init__(self, message: str, radius: Optional[int] = None):
        self.radius = radius
        super().__init__(message, {"radius": radius} if radius is not None else None)


class RetryExhausted(PermanentError):
    """Raised when every attempt was rejected for capacity.

    Carries the filter and radius of the final attempt so callers can see how
    far the search area was degraded.
    """

    def __init__(self, last_filter: Any, last_radius: Optional[int], attempts: int):
        self.last_filter = last_filter
        self.last_radius = last_radius
        self.attempts = attempts
        super().__init__(
            f"Area insights query still over capacity after {attempts} attempts",
            {"last_radius": last_radius, "attempts": attempts},
        )


class InsightsAPIError(PermanentError):
    """Raised for any non-retryable failure talking to the Area Insights API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.status_code = status_code
        merged = dict(details or {})
        if status_code is not None:
            merged["status_code"] = status_code
        super().__init__(message, merged)


class InsightsAuthError(InsightsAPIError):
    """Raised when the API key is rejected."""

    pass


class InsightsRateLimitError(InsightsAPIError):
    """Raised on a 429 that is not the place-cap rejection."""

    pass


class InsightsTimeoutError(InsightsAPIError):
    """Raised when the transport times out."""

    pass


class ParseError(PermanentError):
    """Raised when the response body cannot be interpreted at all."""

    pass


class QueryCancelledError(PermanentError):
    """Raised when a caller deadline cancels an in-flight query."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Area insights query cancelled after {timeout:.1f}s",
            {"timeout": timeout},
        )
