"""
Adaptive query executor.

The Area Insights service rejects a query outright (429 with a place-cap
message) instead of truncating it. The executor answers each rejection by
cutting the circle radius to a quarter, down to a 50 m floor; once the floor
is hit, or when the area has no radius (region, custom polygon), it also
repairs the type filter. At most three attempts are made per invocation.

Each invocation threads its own immutable RetryState through the attempts,
so concurrent invocations share nothing.
"""

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional

import structlog
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from areapulse.collectors.area_insights import AreaInsightsClient
from areapulse.core.exceptions import RetryExhausted, TransientCapacityError
from areapulse.insights.filter_builder import repair_type_filter
from areapulse.insights.parser import parse_insights_response
from areapulse.models.schemas import InsightKind, QueryFilter, QueryResult
from areapulse.monitoring.metrics import record_filter_repair, record_radius_reduction

logger = structlog.get_logger(__name__)


MAX_ATTEMPTS = 3
RADIUS_FLOOR_METERS = 50
RADIUS_SHRINK_FACTOR = 0.25


# =============================================================================
# Retry State
# =============================================================================


@dataclass(frozen=True)
class RetryState:
    """Per-invocation attempt state. Transitions return a new value."""

    query_filter: QueryFilter
    attempt: int = 0
    max_attempts: int = MAX_ATTEMPTS
    radius_floor: int = RADIUS_FLOOR_METERS
    requested_radius: Optional[int] = None
    radius_reductions: int = 0
    filter_repairs: int = 0

    @classmethod
    def initial(
        cls,
        query_filter: QueryFilter,
        max_attempts: int = MAX_ATTEMPTS,
        radius_floor: int = RADIUS_FLOOR_METERS,
    ) -> "RetryState":
        return cls(
            query_filter=query_filter,
            max_attempts=max_attempts,
            radius_floor=radius_floor,
            requested_radius=query_filter.radius,
        )

    @property
    def radius(self) -> Optional[int]:
        return self.query_filter.radius


def shrink_radius(radius: int, floor: int = RADIUS_FLOOR_METERS) -> tuple[int, bool]:
    """Quarter the radius, clamping to the floor.

    Returns:
        (new_radius, clamped). A radius already below the floor is never grown.
    """
    new_radius = math.floor(radius * RADIUS_SHRINK_FACTOR)
    if new_radius < floor:
        return min(floor, radius), True
    return new_radius, False


def next_attempt(state: RetryState) -> RetryState:
    """State for the attempt after a capacity rejection."""
    query_filter = state.query_filter
    radius_reductions = state.radius_reductions
    needs_repair = True

    if state.radius is not None:
        new_radius, needs_repair = shrink_radius(state.radius, state.radius_floor)
        if new_radius != state.radius:
            query_filter = query_filter.model_copy(
                update={"location_filter": query_filter.location_filter.with_radius(new_radius)}
            )
            radius_reductions += 1

    filter_repairs = state.filter_repairs
    if needs_repair:
        query_filter = query_filter.model_copy(
            update={"type_filter": repair_type_filter(query_filter.type_filter)}
        )
        filter_repairs += 1

    return replace(
        state,
        query_filter=query_filter,
        attempt=state.attempt + 1,
        radius_reductions=radius_reductions,
        filter_repairs=filter_repairs,
    )


# =============================================================================
# Executor
# =============================================================================


@dataclass(frozen=True)
class QueryExecution:
    """Parsed result plus the state of the attempt that succeeded."""

    result: QueryResult
    state: RetryState

    @property
    def effective_filter(self) -> QueryFilter:
        return self.state.query_filter

    @property
    def effective_radius(self) -> Optional[int]:
        return self.state.radius

    @property
    def attempts(self) -> int:
        return self.state.attempt + 1

    @property
    def radius_degraded(self) -> bool:
        return self.state.radius != self.state.requested_radius


class AdaptiveQueryExecutor:
    """Runs a query, degrading radius and filter on capacity rejections.

    Args:
        client: Area Insights client used for every attempt.
        max_attempts: Attempt bound per invocation.
        radius_floor: Smallest radius the executor will shrink to.
    """

    def __init__(
        self,
        client: AreaInsightsClient,
        max_attempts: int = MAX_ATTEMPTS,
        radius_floor: int = RADIUS_FLOOR_METERS,
    ):
        self._client = client
        self._max_attempts = max_attempts
        self._radius_floor = radius_floor

    def _advance(self, state: RetryState) -> RetryState:
        new_state = next_attempt(state)
        repaired = new_state.filter_repairs != state.filter_repairs
        if new_state.radius != state.radius:
            clamped = repaired
            record_radius_reduction(clamped)
            logger.warning(
                "insights_radius_reduced",
                from_radius=state.radius,
                to_radius=new_state.radius,
                clamped=clamped,
                attempt=new_state.attempt + 1,
                max_attempts=state.max_attempts,
            )
        if repaired:
            record_filter_repair()
            logger.warning(
                "insights_type_filter_repaired",
                type_filter=new_state.query_filter.type_filter.to_wire(),
                attempt=new_state.attempt + 1,
            )
        return new_state

    async def execute(
        self,
        query_filter: QueryFilter,
        insights: Iterable[InsightKind | str],
    ) -> QueryExecution:
        """Query the service until it answers or attempts run out.

        Raises:
            RetryExhausted: Every attempt hit the place cap.
            AreaPulseError: Any other failure, raised on the attempt it occurred.
        """
        insights = list(insights)
        state = RetryState.initial(query_filter, self._max_attempts, self._radius_floor)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(state.max_attempts),
            retry=retry_if_exception_type(TransientCapacityError),
            wait=wait_none(),
            reraise=False,
        )

        try:
            async for attempt in retrying:
                if attempt.retry_state.attempt_number > 1:
                    state = self._advance(state)
                with attempt:
                    raw = await self._client.compute_insights(insights, state.query_filter)
        except RetryError as e:
            logger.error(
                "insights_retry_exhausted",
                attempts=state.attempt + 1,
                last_radius=state.radius,
            )
            raise RetryExhausted(state.query_filter, state.radius, state.attempt + 1) from e

        logger.info(
            "insights_query_succeeded",
            attempts=state.attempt + 1,
            radius=state.radius,
            requested_radius=state.requested_radius,
        )
        return QueryExecution(result=parse_insights_response(raw), state=state)
