"""Google Places Area Insights API client.

Sends one computeInsights request per call and maps HTTP failures onto the
AreaPulse exception hierarchy. Retrying is the caller's job; the only error
marked retryable is the place-cap rejection (TransientCapacityError).

API Reference: https://developers.google.com/maps/documentation/places-insights
"""

from typing import Any, Iterable, Optional

import httpx
import structlog

from areapulse.config.settings import get_settings
from areapulse.core.exceptions import (
    ConfigurationError,
    InsightsAPIError,
    InsightsAuthError,
    InsightsRateLimitError,
    InsightsTimeoutError,
    ParseError,
    TransientCapacityError,
)
from areapulse.models.schemas import InsightKind, QueryFilter
from areapulse.monitoring.metrics import track_insights_request

logger = structlog.get_logger(__name__)


# =============================================================================
# Constants
# =============================================================================

CAPACITY_EXCEEDED_STATUS = 429
CAPACITY_EXCEEDED_PHRASE = "maximum number of allowed places"


def is_capacity_exceeded(status_code: int, body: str) -> bool:
    """Whether a response is the place-cap rejection rather than a real failure."""
    return (
        status_code == CAPACITY_EXCEEDED_STATUS
        and CAPACITY_EXCEEDED_PHRASE in body.lower()
    )


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500] or "Unknown error"
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"].get("message") or "Unknown error"
    return response.text[:500] or "Unknown error"


# =============================================================================
# Area Insights Client
# =============================================================================


class AreaInsightsClient:
    """Async client for the computeInsights endpoint.

    Example:
        async with AreaInsightsClient() as client:
            body = await client.compute_insights([InsightKind.COUNT], query_filter)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Google API key. If not provided, loads from settings.
            url: computeInsights endpoint. Defaults to settings.area_insights_url.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ConfigurationError: No API key configured.
        """
        settings = get_settings()
        self._api_key = api_key or (
            settings.google_places_api_key.get_secret_value()
            if settings.google_places_api_key
            else None
        )
        if not self._api_key:
            raise ConfigurationError(
                "Google Places API key not configured",
                config_key="GOOGLE_PLACES_API_KEY",
            )

        self._url = url or settings.area_insights_url
        self._timeout = timeout or settings.request_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "AreaInsightsClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={
                    "X-Goog-Api-Key": self._api_key,
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def compute_insights(
        self,
        insights: Iterable[InsightKind | str],
        query_filter: QueryFilter,
    ) -> dict[str, Any]:
        """Run one computeInsights request.

        Args:
            insights: Insight kinds to compute.
            query_filter: Filter to send as-is.

        Returns:
            Decoded JSON body (empty dict for an empty body).

        Raises:
            TransientCapacityError: 429 with the place-cap message.
            InsightsAuthError: 401/403.
            InsightsRateLimitError: Any other 429.
            InsightsTimeoutError: Transport timeout.
            InsightsAPIError: Any other failure.
            ParseError: Body is not valid JSON.
        """
        body = {
            "insights": [InsightKind(kind).value for kind in insights],
            "filter": query_filter.to_wire(),
        }
        radius = query_filter.radius
        client = await self._ensure_client()

        with track_insights_request() as ctx:
            try:
                response = await client.post(self._url, json=body)
            except httpx.TimeoutException as e:
                ctx["outcome"] = "timeout"
                logger.error("area_insights_timeout", radius=radius, error=str(e))
                raise InsightsTimeoutError(f"Request timeout: {e}") from e
            except httpx.RequestError as e:
                ctx["outcome"] = "transport_error"
                logger.error("area_insights_request_error", radius=radius, error=str(e))
                raise InsightsAPIError(
                    f"Request failed: {e}",
                    details={"original_error": str(e)},
                ) from e

            status_code = response.status_code
            if is_capacity_exceeded(status_code, response.text):
                ctx["outcome"] = "capacity_exceeded"
                logger.warning("area_insights_capacity_exceeded", radius=radius)
                raise TransientCapacityError(_error_message(response), radius=radius)
            elif status_code == 429:
                ctx["outcome"] = "rate_limited"
                logger.warning("area_insights_rate_limited", radius=radius)
                raise InsightsRateLimitError(
                    "Rate limited by Area Insights API",
                    status_code=status_code,
                )
            elif status_code in (401, 403):
                ctx["outcome"] = "auth_error"
                raise InsightsAuthError(
                    f"API key rejected: {_error_message(response)}",
                    status_code=status_code,
                )
            elif status_code >= 400:
                ctx["outcome"] = "api_error"
                error_msg = _error_message(response)
                logger.error(
                    "area_insights_api_error",
                    status_code=status_code,
                    error=error_msg,
                    radius=radius,
                )
                raise InsightsAPIError(
                    f"Area Insights API request failed with status {status_code}: {error_msg}",
                    status_code=status_code,
                )

            ctx["outcome"] = "success"

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                "Area insights response is not valid JSON",
                {"body": response.text[:200]},
            ) from e
