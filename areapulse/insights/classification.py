"""
Density-to-tier classification.

Turns a business count inside a circle into a density (businesses per km²),
a competition tier and strategic guidance. Everything here is a pure function
over static tables; nothing is mutated after import.
"""

import math
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from areapulse.models.schemas import (
    AnalysisType,
    BusinessContext,
    ClassificationResult,
    CompetitionLevel,
    Industry,
    RetailMarketerInsights,
    SoloProfessionalInsights,
)


# =============================================================================
# Tier Tables
# =============================================================================

# Upper bounds are exclusive: a density of exactly 1.0 is MODERATE.
DENSITY_THRESHOLDS: tuple[tuple[float, CompetitionLevel], ...] = (
    (1.0, CompetitionLevel.LOW),
    (5.0, CompetitionLevel.MODERATE),
    (15.0, CompetitionLevel.HIGH),
)

COMPETITOR_SATURATION_COUNT = 10


class Guidance(NamedTuple):
    recommendations: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    strategic_insights: tuple[str, ...] = ()


TIER_GUIDANCE: Mapping[CompetitionLevel, Guidance] = MappingProxyType(
    {
        CompetitionLevel.LOW: Guidance(
            recommendations=(
                "Market opportunity exists with low competition",
                "Consider being a market pioneer in this area",
            ),
            opportunities=("First-mover advantage in underserved market",),
        ),
        CompetitionLevel.MODERATE: Guidance(
            recommendations=(
                "Balanced market with room for differentiation",
                "Focus on unique value proposition",
            ),
            strategic_insights=("Market has healthy competition - focus on service quality",),
        ),
        CompetitionLevel.HIGH: Guidance(
            recommendations=("Highly competitive market - strong differentiation required",),
            risk_factors=("High competition may impact market share",),
            strategic_insights=("Consider niche positioning or superior customer experience",),
        ),
        CompetitionLevel.SATURATED: Guidance(
            recommendations=("Market appears saturated - consider alternative locations",),
            risk_factors=(
                "Market saturation may limit growth potential",
                "High customer acquisition costs likely",
            ),
            opportunities=("Consider consolidation or acquisition opportunities",),
        ),
    }
)


class IndustryGuidance(NamedTuple):
    always: Guidance
    by_tier: Mapping[CompetitionLevel, Guidance] = MappingProxyType({})


_RETAIL_GUIDANCE = IndustryGuidance(
    always=Guidance(strategic_insights=("Consider seasonal demand patterns for inventory planning",)),
    by_tier=MappingProxyType(
        {CompetitionLevel.HIGH: Guidance(recommendations=("Focus on loyalty programs and customer retention",))}
    ),
)

_PROFESSIONAL_GUIDANCE = IndustryGuidance(
    always=Guidance(strategic_insights=("Build personal brand and professional network",)),
    by_tier=MappingProxyType(
        {CompetitionLevel.LOW: Guidance(opportunities=("Potential for premium pricing in underserved market",))}
    ),
)

INDUSTRY_GUIDANCE: Mapping[Industry, IndustryGuidance] = MappingProxyType(
    {
        Industry.RETAIL_GENERAL: _RETAIL_GUIDANCE,
        Industry.FOOD_SERVICE: _RETAIL_GUIDANCE,
        Industry.SOLO_PROFESSIONAL: _PROFESSIONAL_GUIDANCE,
        Industry.PROFESSIONAL_SERVICES: _PROFESSIONAL_GUIDANCE,
        Industry.TECH_SERVICES: IndustryGuidance(
            always=Guidance(
                recommendations=("Focus on technology adoption and innovation",),
                strategic_insights=("Consider digital marketing and online presence",),
            ),
        ),
    }
)

RETAIL_MARKETING_RECOMMENDATIONS = (
    "Develop targeted local marketing campaigns",
    "Consider partnerships with complementary businesses",
    "Build customer loyalty programs",
    "Leverage social media for local engagement",
)

SOLO_SERVICE_DIFFERENTIATION = (
    "Develop specialized service offerings",
    "Build personal brand and credibility",
    "Create referral networks",
    "Offer premium consultation services",
)


# =============================================================================
# Classification
# =============================================================================


def compute_density(count: int, radius_meters: float) -> float:
    """Businesses per km² inside a circle of the given radius."""
    if radius_meters <= 0:
        raise ValueError("radius_meters must be positive")
    radius_km = radius_meters / 1000
    return count / (math.pi * radius_km**2)


def competition_level_for(density: float) -> CompetitionLevel:
    for upper_bound, level in DENSITY_THRESHOLDS:
        if density < upper_bound:
            return level
    return CompetitionLevel.SATURATED


def _extend(result: ClassificationResult, guidance: Guidance) -> None:
    result.recommendations.extend(guidance.recommendations)
    result.risk_factors.extend(guidance.risk_factors)
    result.opportunities.extend(guidance.opportunities)
    result.strategic_insights.extend(guidance.strategic_insights)


def _intent_guidance(
    analysis_type: AnalysisType,
    level: CompetitionLevel,
    count: int,
    radius_meters: int,
    density: float,
) -> Guidance:
    if analysis_type == AnalysisType.MARKET_DENSITY:
        return Guidance(recommendations=(f"Market density: {density:.2f} businesses per km²",))

    if analysis_type == AnalysisType.COMPETITOR_ANALYSIS:
        risks = ()
        if count > COMPETITOR_SATURATION_COUNT:
            risks = ("High number of competitors may indicate market saturation",)
        return Guidance(
            recommendations=(f"{count} direct competitors identified in {radius_meters}m radius",),
            risk_factors=risks,
        )

    if analysis_type == AnalysisType.LOCATION_SUITABILITY:
        if level == CompetitionLevel.LOW:
            return Guidance(recommendations=("Location shows good potential for new business entry",))
        if level == CompetitionLevel.SATURATED:
            return Guidance(recommendations=("Consider alternative locations with less competition",))

    return Guidance()


def classify(
    count: int,
    radius_meters: int,
    analysis_type: AnalysisType = AnalysisType.MARKET_DENSITY,
    business_context: Optional[BusinessContext] = None,
) -> ClassificationResult:
    """Classify a business count within a circular search area.

    Baseline guidance comes from the tier, then industry guidance and
    analysis-intent guidance are appended in that order. All four lists are
    always present, possibly empty.

    Args:
        count: Number of matching businesses (non-negative).
        radius_meters: Radius of the area actually queried.
        analysis_type: Requested analysis intent.
        business_context: Optional industry and strategy context.
    """
    if count < 0:
        raise ValueError("count must be non-negative")

    density = compute_density(count, radius_meters)
    level = competition_level_for(density)

    result = ClassificationResult(
        density=density,
        market_density=(
            f"{density:.2f} businesses per km² ({count} total in {radius_meters}m radius)"
        ),
        competition_level=level,
    )
    _extend(result, TIER_GUIDANCE[level])

    if business_context is not None:
        industry_guidance = INDUSTRY_GUIDANCE.get(business_context.industry)
        if industry_guidance is not None:
            _extend(result, industry_guidance.always)
            tier_extra = industry_guidance.by_tier.get(level)
            if tier_extra is not None:
                _extend(result, tier_extra)

    _extend(result, _intent_guidance(analysis_type, level, count, radius_meters, density))
    return result


# =============================================================================
# Audience-specific Insights
# =============================================================================


def retail_marketer_insights(count: int) -> RetailMarketerInsights:
    if count > 0:
        audience = f"High customer density area ({count} similar businesses)"
    else:
        audience = "Low customer density area"
    if count > COMPETITOR_SATURATION_COUNT:
        positioning = "Highly competitive - focus on differentiation"
    else:
        positioning = "Low competition - opportunity for market capture"
    return RetailMarketerInsights(
        target_audience_density=audience,
        competitive_positioning=positioning,
        marketing_recommendations=list(RETAIL_MARKETING_RECOMMENDATIONS),
    )


def solo_professional_insights(count: int) -> SoloProfessionalInsights:
    return SoloProfessionalInsights(
        market_gap_analysis=(
            "Significant market gap - high opportunity"
            if count < 3
            else "Established market with moderate competition"
        ),
        client_acquisition_potential=(
            "High potential for new client acquisition"
            if count < 5
            else "Focus on client retention and referrals"
        ),
        service_differentiation=list(SOLO_SERVICE_DIFFERENTIATION),
    )
