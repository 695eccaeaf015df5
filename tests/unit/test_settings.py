"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from areapulse.config.industry_presets import INDUSTRY_PRESETS, get_industry_preset
from areapulse.config.settings import AREA_INSIGHTS_URL, Settings, get_settings
from areapulse.models.schemas import Industry


class TestSettings:

    def test_defaults(self, no_api_key_env):
        settings = get_settings()

        assert settings.google_places_api_key is None
        assert settings.area_insights_url == AREA_INSIGHTS_URL
        assert settings.request_timeout_seconds == 30.0
        assert settings.is_production is False

    def test_places_key_from_env(self, api_key_env):
        assert get_settings().google_places_api_key.get_secret_value() == api_key_env

    def test_google_api_key_alias(self, no_api_key_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "alias-key")

        assert get_settings().google_places_api_key.get_secret_value() == "alias-key"

    def test_key_not_exposed_in_repr(self, api_key_env):
        assert api_key_env not in repr(get_settings())

    def test_settings_cached(self):
        assert get_settings() is get_settings()

    def test_non_positive_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0")

        with pytest.raises(PydanticValidationError):
            Settings()


class TestIndustryPresets:

    def test_every_industry_but_custom_has_preset(self):
        assert set(INDUSTRY_PRESETS) == set(Industry) - {Industry.CUSTOM}

    def test_presets_have_inclusions(self):
        assert all(preset.has_inclusions() for preset in INDUSTRY_PRESETS.values())

    @pytest.mark.parametrize("industry", [None, "CUSTOM", "UNDERWATER_BASKET_WEAVING"])
    def test_no_preset(self, industry):
        assert get_industry_preset(industry) is None

    def test_lookup_by_string(self):
        assert get_industry_preset("AUTOMOTIVE").included_primary_types == [
            "car_dealer", "car_rental", "car_repair", "gas_station",
        ]

    def test_presets_immutable(self):
        with pytest.raises(TypeError):
            INDUSTRY_PRESETS[Industry.CUSTOM] = INDUSTRY_PRESETS[Industry.EDUCATION]
