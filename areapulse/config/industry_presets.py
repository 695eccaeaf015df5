"""
Business intelligence presets.

Static per-industry defaults for the type filter. A preset only fills type
lists the caller left empty; see areapulse.insights.filter_builder.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from areapulse.models.schemas import Industry, TypeFilter


class IndustryPreset(TypeFilter):
    """Named, immutable partial type filter for one industry."""

    industry: Industry


def _preset(industry: Industry, **lists: list[str]) -> IndustryPreset:
    return IndustryPreset(industry=industry, **lists)


INDUSTRY_PRESETS: Mapping[Industry, IndustryPreset] = MappingProxyType(
    {
        preset.industry: preset
        for preset in (
            _preset(
                Industry.RETAIL_GENERAL,
                included_types=["store", "shopping_mall", "supermarket", "department_store", "convenience_store"],
                excluded_types=["gas_station", "car_dealer"],
            ),
            _preset(
                Industry.FOOD_SERVICE,
                included_primary_types=["restaurant"],
                included_types=["cafe", "fast_food_restaurant", "meal_takeaway", "bar"],
                excluded_types=["lodging", "gas_station"],
            ),
            _preset(
                Industry.PROFESSIONAL_SERVICES,
                included_primary_types=["lawyer", "accounting", "dentist", "doctor"],
                included_types=["consultant", "real_estate_agency", "insurance_agency"],
            ),
            _preset(
                Industry.HEALTH_WELLNESS,
                included_primary_types=["gym", "spa", "beauty_salon", "physiotherapist", "hospital", "pharmacy"],
                excluded_types=["lodging", "gas_station", "car_dealer"],
            ),
            _preset(
                Industry.HOSPITALITY,
                included_primary_types=["hotel", "lodging"],
                included_types=["bar", "night_club", "restaurant"],
                excluded_types=["gas_station", "car_dealer"],
            ),
            _preset(
                Industry.FINANCIAL_SERVICES,
                included_primary_types=["bank"],
                included_types=["atm", "insurance_agency", "accounting"],
                excluded_types=["gas_station", "restaurant", "lodging"],
            ),
            _preset(
                Industry.EDUCATION,
                included_primary_types=["school", "university"],
                included_types=["library", "book_store"],
                excluded_types=["gas_station", "restaurant", "lodging"],
            ),
            _preset(
                Industry.AUTOMOTIVE,
                included_primary_types=["car_dealer", "car_rental", "car_repair", "gas_station"],
                excluded_types=["restaurant", "lodging"],
            ),
            _preset(
                Industry.HOME_SERVICES,
                included_primary_types=["plumber", "electrician", "contractor"],
                included_types=["home_goods_store", "hardware_store"],
                excluded_types=["restaurant", "lodging", "gas_station"],
            ),
            _preset(
                Industry.SOLO_PROFESSIONAL,
                included_types=["consultant", "lawyer", "dentist", "doctor", "therapist", "coach"],
                excluded_types=["restaurant", "lodging", "gas_station", "car_dealer"],
            ),
            _preset(
                Industry.TECH_SERVICES,
                included_primary_types=["software_company"],
                included_types=["computer_store", "electronics_store", "internet_cafe"],
                excluded_types=["restaurant", "lodging", "gas_station"],
            ),
        )
    }
)


def get_industry_preset(industry: Optional[Industry | str]) -> Optional[IndustryPreset]:
    """Look up the preset for an industry tag.

    Returns None for CUSTOM, unknown tags and None.
    """
    if industry is None:
        return None
    try:
        industry = Industry(industry)
    except ValueError:
        return None
    return INDUSTRY_PRESETS.get(industry)
