"""
Data Models.

Pydantic models for filters, requests and results. Filter models serialise to
the Area Insights wire format via ``to_wire()``.
"""

from areapulse.models.schemas import (
    AnalysisType,
    BudgetRange,
    BusinessContext,
    BusinessInsightsResult,
    BusinessModel,
    Circle,
    ClassificationResult,
    CompetitionLevel,
    CustomArea,
    Industry,
    InsightKind,
    InsightsRequest,
    LatLng,
    LocationFilter,
    OperatingStatus,
    Polygon,
    PriceLevel,
    QueryFilter,
    QueryResult,
    RatingFilter,
    Region,
    ResultMetadata,
    RetailMarketerInsights,
    SoloProfessionalInsights,
    StrategicGoal,
    TypeFilter,
)

__all__ = [
    "AnalysisType",
    "BudgetRange",
    "BusinessContext",
    "BusinessInsightsResult",
    "BusinessModel",
    "Circle",
    "ClassificationResult",
    "CompetitionLevel",
    "CustomArea",
    "Industry",
    "InsightKind",
    "InsightsRequest",
    "LatLng",
    "LocationFilter",
    "OperatingStatus",
    "Polygon",
    "PriceLevel",
    "QueryFilter",
    "QueryResult",
    "RatingFilter",
    "Region",
    "ResultMetadata",
    "RetailMarketerInsights",
    "SoloProfessionalInsights",
    "StrategicGoal",
    "TypeFilter",
]
