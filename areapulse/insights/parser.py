"""Normalization of computeInsights response bodies.

The service encodes ``count`` as a decimal string (int64 in JSON) and returns
place references as ``placeInsights[].place``. Anything unusable inside an
otherwise valid body is dropped with a warning instead of failing the call.
"""

import re
from typing import Any, Optional

import structlog

from areapulse.core.exceptions import ParseError
from areapulse.models.schemas import QueryResult

logger = structlog.get_logger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_count(value: Any) -> int:
    """Decode a count given as a non-negative int or numeric string.

    Raises:
        ParseError: For booleans, negatives, fractions and non-numeric text.
    """
    if isinstance(value, bool):
        raise ParseError(f"count is not numeric: {value!r}")
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and value.is_integer():
        count = int(value)
    elif isinstance(value, str) and _DECIMAL.fullmatch(value.strip()):
        count = int(value.strip())
    else:
        raise ParseError(f"count is not numeric: {value!r}")

    if count < 0:
        raise ParseError(f"count is negative: {count}")
    return count


def _place_reference(entry: Any) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    place = entry.get("place")
    if isinstance(place, str) and place:
        return place
    return None


def parse_insights_response(raw: Any) -> QueryResult:
    """Convert a raw response body into a QueryResult.

    Raises:
        ParseError: If the body is not a JSON object.
    """
    if not isinstance(raw, dict):
        raise ParseError(
            "Area insights response is not a JSON object",
            {"type": type(raw).__name__},
        )

    warnings: list[str] = []

    count: Optional[int] = None
    if raw.get("count") is not None:
        try:
            count = parse_count(raw["count"])
        except ParseError as e:
            logger.warning("insights_count_unparseable", count=raw["count"], error=e.message)
            warnings.append(f"count dropped: {e.message}")

    places: list[str] = []
    place_insights = raw.get("placeInsights")
    if place_insights is not None:
        if isinstance(place_insights, list):
            for entry in place_insights:
                place = _place_reference(entry)
                if place is None:
                    continue
                places.append(place)
            dropped = len(place_insights) - len(places)
            if dropped:
                logger.warning("insights_places_dropped", dropped=dropped, total=len(place_insights))
                warnings.append(f"{dropped} place entries without a place id dropped")
        else:
            logger.warning("insights_places_malformed", type=type(place_insights).__name__)
            warnings.append("placeInsights is not a list; place list dropped")

    return QueryResult(count=count, places=places, warnings=warnings)
