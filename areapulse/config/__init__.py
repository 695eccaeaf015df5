"""
Configuration Management.

- settings: Settings class with environment variable loading
- industry_presets: Static per-industry type filter defaults

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

Example:
    from areapulse.config import get_settings, get_industry_preset

    settings = get_settings()
    preset = get_industry_preset("FOOD_SERVICE")
"""

from areapulse.config.settings import AREA_INSIGHTS_URL, Settings, get_settings
from areapulse.config.industry_presets import (
    INDUSTRY_PRESETS,
    IndustryPreset,
    get_industry_preset,
)

__all__ = [
    "AREA_INSIGHTS_URL",
    "Settings",
    "get_settings",
    "INDUSTRY_PRESETS",
    "IndustryPreset",
    "get_industry_preset",
]
