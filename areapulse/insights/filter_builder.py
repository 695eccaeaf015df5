"""Effective query filter construction and repair.

build_filter() layers an industry preset underneath the caller's type lists.
repair_type_filter() rewrites type tags the service is known to reject or
misread; the adaptive executor applies it when shrinking the radius no longer
helps.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from areapulse.config.industry_presets import get_industry_preset
from areapulse.core.exceptions import ValidationError
from areapulse.models.schemas import Industry, QueryFilter, TypeFilter

logger = structlog.get_logger(__name__)


TYPE_LIST_FIELDS = (
    "included_types",
    "excluded_types",
    "included_primary_types",
    "excluded_primary_types",
)

# Deprecated aliases mapped to their current Places type.
TYPE_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "fast_food": "fast_food_restaurant",
    }
)

VALID_PRIMARY_TYPES = frozenset(
    {
        "restaurant",
        "store",
        "hotel",
        "bank",
        "school",
        "gym",
        "spa",
        "beauty_salon",
        "lawyer",
        "accounting",
        "dentist",
        "doctor",
        "car_dealer",
        "car_rental",
        "car_repair",
        "gas_station",
        "plumber",
        "electrician",
        "contractor",
        "software_company",
    }
)


def merge_type_filter(user: TypeFilter, preset: Optional[TypeFilter]) -> TypeFilter:
    """Fill each empty user type list from the preset.

    A non-empty user list always wins outright; lists are never concatenated.
    """
    if preset is None:
        return user

    merged: dict[str, Optional[list[str]]] = {}
    for name in TYPE_LIST_FIELDS:
        user_list = getattr(user, name)
        preset_list = getattr(preset, name)
        if user_list:
            merged[name] = list(user_list)
        elif preset_list:
            merged[name] = list(preset_list)
        else:
            merged[name] = None
    return TypeFilter(**merged)


def build_filter(
    user_filter: QueryFilter | Mapping[str, Any],
    industry: Optional[Industry | str] = None,
) -> QueryFilter:
    """Produce the effective filter for one invocation.

    Args:
        user_filter: Caller filter, either a QueryFilter or its wire-format dict.
        industry: Industry tag whose preset fills empty type lists.

    Returns:
        A new QueryFilter owned by the caller.

    Raises:
        ValidationError: Location variant count, radius bounds, coordinates,
            or a type filter with no inclusions after merging.
    """
    if isinstance(user_filter, QueryFilter):
        query_filter = user_filter
    else:
        try:
            query_filter = QueryFilter.model_validate(user_filter)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid query filter",
                errors=e.errors(include_url=False, include_context=False),
            ) from e

    preset = get_industry_preset(industry)
    type_filter = merge_type_filter(query_filter.type_filter, preset)

    if not type_filter.has_inclusions():
        raise ValidationError(
            "typeFilter needs at least one of includedTypes or includedPrimaryTypes"
        )

    if preset is not None:
        logger.debug(
            "industry_preset_applied",
            industry=preset.industry.value,
            type_filter=type_filter.to_wire(),
        )

    return query_filter.model_copy(update={"type_filter": type_filter})


def repair_type_filter(type_filter: TypeFilter) -> TypeFilter:
    """Normalize type synonyms and drop unsupported primary types.

    Primary types are only dropped if the filter keeps at least one inclusion.
    """
    def _normalize(types: Optional[list[str]]) -> Optional[list[str]]:
        if not types:
            return types
        return list(dict.fromkeys(TYPE_SYNONYMS.get(t, t) for t in types))

    included_types = _normalize(type_filter.included_types)
    excluded_types = _normalize(type_filter.excluded_types)

    included_primary = type_filter.included_primary_types
    if included_primary:
        kept = [t for t in included_primary if t in VALID_PRIMARY_TYPES]
        if kept or included_types:
            included_primary = kept or None
        else:
            logger.warning(
                "type_filter_repair_skipped_primary",
                included_primary_types=included_primary,
                reason="no inclusions would remain",
            )

    return type_filter.model_copy(
        update={
            "included_types": included_types,
            "excluded_types": excluded_types,
            "included_primary_types": included_primary,
        }
    )
