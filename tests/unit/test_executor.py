"""Unit tests for the adaptive query executor.

The client is an AsyncMock; each side_effect entry answers one attempt.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock
from prometheus_client import REGISTRY

from areapulse.core.exceptions import (
    InsightsAPIError,
    RetryExhausted,
    TransientCapacityError,
)
from areapulse.insights.executor import (
    AdaptiveQueryExecutor,
    RetryState,
    next_attempt,
    shrink_radius,
)
from areapulse.insights.filter_builder import build_filter
from areapulse.models.schemas import InsightKind


def _capacity(radius=None):
    return TransientCapacityError("exceeds the maximum number of allowed places", radius=radius)


def _mock_client(*responses):
    client = MagicMock()
    client.compute_insights = AsyncMock(side_effect=list(responses))
    return client


def _sent_filters(client):
    return [call.args[1] for call in client.compute_insights.call_args_list]


@pytest.fixture
def circle_500():
    return build_filter({
        "locationFilter": {
            "circle": {"latLng": {"latitude": 40.7, "longitude": -74.0}, "radius": 500},
        },
        "typeFilter": {"includedTypes": ["fast_food", "cafe"], "excludedTypes": ["gas_station"]},
    })


@pytest.fixture
def region_filter():
    return build_filter({
        "locationFilter": {"region": {"place": "places/ChIJOwg_06VPwokRYv534QaPC8g"}},
        "typeFilter": {"includedTypes": ["fast_food"]},
    })


class TestShrinkRadius:

    @pytest.mark.parametrize("radius,expected", [
        (1000, (250, False)),
        (500, (125, False)),
        (203, (50, False)),
        (199, (50, True)),
        (125, (50, True)),
        (50, (50, True)),
        (30, (30, True)),
    ])
    def test_quarter_with_floor(self, radius, expected):
        assert shrink_radius(radius) == expected


class TestNextAttempt:

    def test_circle_shrinks_without_repair_above_floor(self, circle_500):
        state = RetryState.initial(circle_500)

        new_state = next_attempt(state)

        assert new_state.attempt == 1
        assert new_state.radius == 125
        assert new_state.requested_radius == 500
        assert new_state.filter_repairs == 0
        assert new_state.query_filter.type_filter == circle_500.type_filter

    def test_clamp_triggers_repair(self, circle_500):
        state = next_attempt(next_attempt(RetryState.initial(circle_500)))

        assert state.radius == 50
        assert state.radius_reductions == 2
        assert state.filter_repairs == 1
        assert state.query_filter.type_filter.included_types == ["fast_food_restaurant", "cafe"]

    def test_previous_state_untouched(self, circle_500):
        state = RetryState.initial(circle_500)

        next_attempt(state)

        assert state.attempt == 0
        assert state.radius == 500
        assert circle_500.radius == 500

    def test_region_repairs_only(self, region_filter):
        state = next_attempt(RetryState.initial(region_filter))

        assert state.radius is None
        assert state.radius_reductions == 0
        assert state.filter_repairs == 1
        assert state.query_filter.type_filter.included_types == ["fast_food_restaurant"]

    def test_radius_at_floor_not_counted_as_reduction(self, circle_500):
        """A circle already at the floor keeps its radius and only gets repaired."""
        at_floor = circle_500.model_copy(
            update={"location_filter": circle_500.location_filter.with_radius(50)}
        )

        state = next_attempt(RetryState.initial(at_floor))

        assert state.radius == 50
        assert state.radius_reductions == 0
        assert state.filter_repairs == 1
        assert state.query_filter.type_filter.included_types == ["fast_food_restaurant", "cafe"]


class TestAdaptiveQueryExecutor:

    @pytest.mark.asyncio
    async def test_first_attempt_success(self, circle_500):
        client = _mock_client({"count": "7"})

        execution = await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        assert execution.result.count == 7
        assert execution.attempts == 1
        assert execution.effective_radius == 500
        assert execution.radius_degraded is False
        assert client.compute_insights.await_count == 1

    @pytest.mark.asyncio
    async def test_radius_sequence_to_floor(self, circle_500):
        """500 -> 125 -> 50, and the filter is repaired only at the floor."""
        client = _mock_client(_capacity(500), _capacity(125), {"count": "3"})

        execution = await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        sent = _sent_filters(client)
        assert [f.radius for f in sent] == [500, 125, 50]
        assert sent[1].type_filter.included_types == ["fast_food", "cafe"]
        assert sent[2].type_filter.included_types == ["fast_food_restaurant", "cafe"]
        assert execution.effective_radius == 50
        assert execution.radius_degraded is True
        assert execution.attempts == 3
        assert execution.effective_filter == sent[2]

    @pytest.mark.asyncio
    async def test_success_on_second_attempt(self, circle_filter):
        client = _mock_client(_capacity(1000), {"count": "20"})

        execution = await AdaptiveQueryExecutor(client).execute(
            build_filter(circle_filter), [InsightKind.COUNT]
        )

        assert [f.radius for f in _sent_filters(client)] == [1000, 250]
        assert execution.effective_radius == 250
        assert execution.state.requested_radius == 1000
        assert execution.result.count == 20

    @pytest.mark.asyncio
    async def test_exhausted_after_three_attempts(self, circle_500):
        client = _mock_client(_capacity(500), _capacity(125), _capacity(50), {"count": "1"})

        with pytest.raises(RetryExhausted) as exc_info:
            await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        assert client.compute_insights.await_count == 3
        assert exc_info.value.attempts == 3
        assert exc_info.value.last_radius == 50
        assert exc_info.value.last_filter.radius == 50
        assert isinstance(exc_info.value.__cause__.last_attempt.exception(), TransientCapacityError)

    @pytest.mark.asyncio
    async def test_fatal_error_aborts_immediately(self, circle_500):
        client = _mock_client(InsightsAPIError("boom", status_code=500), {"count": "1"})

        with pytest.raises(InsightsAPIError) as exc_info:
            await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        assert exc_info.value.status_code == 500
        assert client.compute_insights.await_count == 1

    @pytest.mark.asyncio
    async def test_fatal_error_after_capacity_not_retried(self, circle_500):
        client = _mock_client(_capacity(500), InsightsAPIError("boom", status_code=503), {"count": "1"})

        with pytest.raises(InsightsAPIError):
            await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        assert client.compute_insights.await_count == 2

    @pytest.mark.asyncio
    async def test_region_retries_with_repaired_filter(self, region_filter):
        client = _mock_client(_capacity(), _capacity(), {"count": "900"})

        execution = await AdaptiveQueryExecutor(client).execute(region_filter, [InsightKind.COUNT])

        sent = _sent_filters(client)
        assert [f.radius for f in sent] == [None, None, None]
        assert sent[0].type_filter.included_types == ["fast_food"]
        assert sent[1].type_filter.included_types == ["fast_food_restaurant"]
        assert execution.state.filter_repairs == 2
        assert execution.radius_degraded is False

    @pytest.mark.asyncio
    async def test_custom_attempt_bound(self, circle_500):
        client = _mock_client(_capacity(500), {"count": "1"})

        with pytest.raises(RetryExhausted) as exc_info:
            await AdaptiveQueryExecutor(client, max_attempts=1).execute(circle_500, [InsightKind.COUNT])

        assert exc_info.value.attempts == 1
        assert exc_info.value.last_radius == 500

    @pytest.mark.asyncio
    async def test_concurrent_invocations_independent(self, circle_500, circle_filter):
        """Two invocations in flight keep their own attempt state."""
        wide = build_filter(circle_filter)
        client_a = _mock_client(_capacity(500), _capacity(125), {"count": "1"})
        client_b = _mock_client({"count": "2"})

        result_a, result_b = await asyncio.gather(
            AdaptiveQueryExecutor(client_a).execute(circle_500, [InsightKind.COUNT]),
            AdaptiveQueryExecutor(client_b).execute(wide, [InsightKind.COUNT]),
        )

        assert result_a.effective_radius == 50
        assert result_b.effective_radius == 1000
        assert result_b.attempts == 1

    @pytest.mark.asyncio
    async def test_clamped_reduction_recorded(self, circle_500):
        before = REGISTRY.get_sample_value(
            "areapulse_radius_reductions_total", {"clamped": "true"}
        ) or 0.0
        client = _mock_client(_capacity(500), _capacity(125), {"count": "1"})

        await AdaptiveQueryExecutor(client).execute(circle_500, [InsightKind.COUNT])

        after = REGISTRY.get_sample_value("areapulse_radius_reductions_total", {"clamped": "true"})
        assert after == before + 1
