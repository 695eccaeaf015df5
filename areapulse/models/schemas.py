"""Pydantic models for Area Insights queries and business intelligence results."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


PLACE_ID_PREFIX = "places/"
MIN_RADIUS_METERS = 1
MAX_RADIUS_METERS = 50000


# =============================================================================
# Enums
# =============================================================================


class InsightKind(str, Enum):
    """What the service should compute for a filter."""
    COUNT = "INSIGHT_COUNT"
    PLACES = "INSIGHT_PLACES"


class OperatingStatus(str, Enum):
    UNSPECIFIED = "OPERATING_STATUS_UNSPECIFIED"
    OPERATIONAL = "OPERATING_STATUS_OPERATIONAL"
    TEMPORARILY_CLOSED = "OPERATING_STATUS_TEMPORARILY_CLOSED"
    PERMANENTLY_CLOSED = "OPERATING_STATUS_PERMANENTLY_CLOSED"


class PriceLevel(str, Enum):
    UNSPECIFIED = "PRICE_LEVEL_UNSPECIFIED"
    FREE = "PRICE_LEVEL_FREE"
    INEXPENSIVE = "PRICE_LEVEL_INEXPENSIVE"
    MODERATE = "PRICE_LEVEL_MODERATE"
    EXPENSIVE = "PRICE_LEVEL_EXPENSIVE"
    VERY_EXPENSIVE = "PRICE_LEVEL_VERY_EXPENSIVE"


class AnalysisType(str, Enum):
    """Requested analysis intent."""
    MARKET_DENSITY = "MARKET_DENSITY"
    COMPETITOR_ANALYSIS = "COMPETITOR_ANALYSIS"
    LOCATION_SUITABILITY = "LOCATION_SUITABILITY"
    PRICE_ANALYSIS = "PRICE_ANALYSIS"
    CUSTOM = "CUSTOM"


class Industry(str, Enum):
    """Industry tags with a business intelligence preset (CUSTOM has none)."""
    RETAIL_GENERAL = "RETAIL_GENERAL"
    FOOD_SERVICE = "FOOD_SERVICE"
    PROFESSIONAL_SERVICES = "PROFESSIONAL_SERVICES"
    HEALTH_WELLNESS = "HEALTH_WELLNESS"
    HOSPITALITY = "HOSPITALITY"
    FINANCIAL_SERVICES = "FINANCIAL_SERVICES"
    EDUCATION = "EDUCATION"
    AUTOMOTIVE = "AUTOMOTIVE"
    HOME_SERVICES = "HOME_SERVICES"
    SOLO_PROFESSIONAL = "SOLO_PROFESSIONAL"
    TECH_SERVICES = "TECH_SERVICES"
    CUSTOM = "CUSTOM"


class BusinessModel(str, Enum):
    B2B = "B2B"
    B2C = "B2C"
    FRANCHISE = "FRANCHISE"
    SOLO_PRACTICE = "SOLO_PRACTICE"
    CORPORATE = "CORPORATE"
    STARTUP = "STARTUP"
    FREELANCE = "FREELANCE"


class StrategicGoal(str, Enum):
    MARKET_ENTRY = "MARKET_ENTRY"
    EXPANSION = "EXPANSION"
    COMPETITION_ANALYSIS = "COMPETITION_ANALYSIS"
    LOCATION_SELECTION = "LOCATION_SELECTION"
    PRICE_OPTIMIZATION = "PRICE_OPTIMIZATION"
    CUSTOMER_ACQUISITION = "CUSTOMER_ACQUISITION"
    MARKET_SHARE_GROWTH = "MARKET_SHARE_GROWTH"


class BudgetRange(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    PREMIUM = "PREMIUM"
    ULTRA_PREMIUM = "ULTRA_PREMIUM"


class CompetitionLevel(str, Enum):
    """Competition tier, ordered LOW < MODERATE < HIGH < SATURATED."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    SATURATED = "SATURATED"

    @property
    def rank(self) -> int:
        return _COMPETITION_ORDER.index(self.value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, CompetitionLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, CompetitionLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, CompetitionLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, CompetitionLevel):
            return NotImplemented
        return self.rank >= other.rank


_COMPETITION_ORDER = ("LOW", "MODERATE", "HIGH", "SATURATED")


# =============================================================================
# Base Models
# =============================================================================


class WireModel(BaseModel):
    """Base model serialised with the camelCase field names the API uses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-ready dict with API field names, dropping unset options."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _check_place_id(value: str) -> str:
    if not value.startswith(PLACE_ID_PREFIX):
        raise ValueError(f"place id must start with '{PLACE_ID_PREFIX}'")
    return value


# =============================================================================
# Location Filter
# =============================================================================


class LatLng(WireModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Circle(WireModel):
    """Circle centred on a coordinate or a place."""

    lat_lng: Optional[LatLng] = None
    place: Optional[str] = None
    radius: int = Field(..., ge=MIN_RADIUS_METERS, le=MAX_RADIUS_METERS, description="Radius in meters")

    @field_validator("place")
    @classmethod
    def validate_place(cls, value: Optional[str]) -> Optional[str]:
        return _check_place_id(value) if value is not None else None

    @model_validator(mode="after")
    def validate_center(self) -> "Circle":
        if (self.lat_lng is None) == (self.place is None):
            raise ValueError("circle needs exactly one of latLng or place as its center")
        return self


class Region(WireModel):
    place: str

    @field_validator("place")
    @classmethod
    def validate_place(cls, value: str) -> str:
        return _check_place_id(value)


class Polygon(WireModel):
    coordinates: list[LatLng] = Field(..., min_length=3)


class CustomArea(WireModel):
    polygon: Polygon


class LocationFilter(WireModel):
    """Exactly one of circle, region or customArea."""

    circle: Optional[Circle] = None
    region: Optional[Region] = None
    custom_area: Optional[CustomArea] = None

    @model_validator(mode="after")
    def validate_single_variant(self) -> "LocationFilter":
        populated = [
            name
            for name, value in (
                ("circle", self.circle),
                ("region", self.region),
                ("customArea", self.custom_area),
            )
            if value is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                "locationFilter needs exactly one of circle, region or customArea "
                f"(got {populated or 'none'})"
            )
        return self

    @property
    def radius(self) -> Optional[int]:
        """Circle radius in meters, None for regions and custom areas."""
        return self.circle.radius if self.circle else None

    def with_radius(self, radius: int) -> "LocationFilter":
        if self.circle is None:
            raise ValueError("only circle location filters have a radius")
        return self.model_copy(update={"circle": self.circle.model_copy(update={"radius": radius})})


# =============================================================================
# Type / Rating / Query Filters
# =============================================================================


class TypeFilter(WireModel):
    """Place type inclusions and exclusions.

    A usable filter has at least one non-empty inclusion list; that rule is
    enforced after preset merging in the filter builder.
    """

    included_types: Optional[list[str]] = None
    excluded_types: Optional[list[str]] = None
    included_primary_types: Optional[list[str]] = None
    excluded_primary_types: Optional[list[str]] = None

    def has_inclusions(self) -> bool:
        return bool(self.included_types) or bool(self.included_primary_types)


class RatingFilter(WireModel):
    min_rating: Optional[float] = Field(None, ge=1.0, le=5.0)
    max_rating: Optional[float] = Field(None, ge=1.0, le=5.0)

    @model_validator(mode="after")
    def validate_range(self) -> "RatingFilter":
        if (
            self.min_rating is not None
            and self.max_rating is not None
            and self.min_rating > self.max_rating
        ):
            raise ValueError("minRating cannot be greater than maxRating")
        return self


class QueryFilter(WireModel):
    location_filter: LocationFilter
    type_filter: TypeFilter = Field(default_factory=TypeFilter)
    operating_status: list[OperatingStatus] = Field(
        default_factory=lambda: [OperatingStatus.OPERATIONAL]
    )
    price_levels: Optional[list[PriceLevel]] = None
    rating_filter: Optional[RatingFilter] = None

    @property
    def radius(self) -> Optional[int]:
        return self.location_filter.radius


# =============================================================================
# Request
# =============================================================================


class BusinessContext(WireModel):
    industry: Industry = Industry.RETAIL_GENERAL
    target_customers: Optional[str] = None
    business_model: Optional[BusinessModel] = None
    strategic_goals: Optional[list[StrategicGoal]] = None
    budget_range: Optional[BudgetRange] = None


class InsightsRequest(WireModel):
    """One business intelligence request against the Area Insights API."""

    insights: list[InsightKind] = Field(..., min_length=1)
    query_filter: QueryFilter = Field(..., alias="filter")
    analysis_type: AnalysisType = AnalysisType.MARKET_DENSITY
    business_context: Optional[BusinessContext] = None

    @field_validator("insights")
    @classmethod
    def dedupe_insights(cls, value: list[InsightKind]) -> list[InsightKind]:
        return list(dict.fromkeys(value))


# =============================================================================
# Results
# =============================================================================


class ResultModel(BaseModel):
    """Result base with camelCase output names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class QueryResult(ResultModel):
    """Canonical view of a computeInsights response."""

    count: Optional[int] = Field(None, ge=0, description="None when the service omitted it")
    places: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def count_known(self) -> bool:
        return self.count is not None


class ClassificationResult(ResultModel):
    density: float = Field(..., ge=0, description="Businesses per km²")
    market_density: str
    competition_level: CompetitionLevel
    recommendations: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    strategic_insights: list[str] = Field(default_factory=list)


class RetailMarketerInsights(ResultModel):
    target_audience_density: str
    competitive_positioning: str
    marketing_recommendations: list[str] = Field(default_factory=list)


class SoloProfessionalInsights(ResultModel):
    market_gap_analysis: str
    client_acquisition_potential: str
    service_differentiation: list[str] = Field(default_factory=list)


class ResultMetadata(ResultModel):
    analysis_type: AnalysisType
    industry: Optional[Industry] = None
    search_radius: Optional[int] = Field(None, description="Radius actually queried")
    requested_radius: Optional[int] = None
    radius_degraded: bool = False
    attempts: int = Field(..., ge=1)
    filter_criteria: dict[str, Any]
    timestamp: str
    strategic_context: Optional[dict[str, Any]] = None


class BusinessInsightsResult(ResultModel):
    count: Optional[int] = None
    places: list[str] = Field(default_factory=list)
    business_intelligence: Optional[ClassificationResult] = None
    metadata: ResultMetadata
    retail_marketer_insights: Optional[RetailMarketerInsights] = None
    solo_professional_insights: Optional[SoloProfessionalInsights] = None
    warnings: list[str] = Field(default_factory=list)
