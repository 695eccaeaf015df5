"""Unit tests for computeInsights response normalization."""

import pytest

from areapulse.core.exceptions import ParseError
from areapulse.insights.parser import parse_count, parse_insights_response


class TestParseCount:

    @pytest.mark.parametrize("value,expected", [("42", 42), (42, 42), (7.0, 7), ("0", 0), (" 12 ", 12)])
    def test_numeric_values_accepted(self, value, expected):
        assert parse_count(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "1.5", 2.5, True, None, [3], "²", "1²", "+-5", "1_000"])
    def test_non_numeric_values_rejected(self, value):
        with pytest.raises(ParseError):
            parse_count(value)

    def test_negative_rejected(self):
        with pytest.raises(ParseError, match="negative"):
            parse_count("-3")


class TestParseInsightsResponse:

    def test_count_decoded_from_string(self):
        """The service sends int64 counts as decimal strings."""
        result = parse_insights_response({"count": "42"})

        assert result.count == 42
        assert result.places == []
        assert result.warnings == []

    def test_missing_count_is_unknown(self):
        result = parse_insights_response({})

        assert result.count is None
        assert result.count_known is False
        assert result.places == []

    def test_place_references_extracted(self):
        result = parse_insights_response({
            "placeInsights": [{"place": "places/A"}, {"place": "places/B"}],
        })

        assert result.places == ["places/A", "places/B"]
        assert result.count is None

    def test_entries_without_place_dropped_with_warning(self):
        result = parse_insights_response({
            "count": "12",
            "placeInsights": [{"place": "places/A"}, {"place": ""}, {}, "places/raw"],
        })

        assert result.count == 12
        assert result.places == ["places/A"]
        assert result.warnings == ["3 place entries without a place id dropped"]

    def test_malformed_place_list_dropped(self):
        result = parse_insights_response({"count": "5", "placeInsights": "places/A"})

        assert result.count == 5
        assert result.places == []
        assert len(result.warnings) == 1

    def test_unparseable_count_becomes_unknown(self):
        result = parse_insights_response({"count": "-3"})

        assert result.count is None
        assert result.warnings[0].startswith("count dropped")

    @pytest.mark.parametrize("count", ["²", "+-5", "1²"])
    def test_garbled_count_keeps_places(self, count):
        """Digit-like text the int parser rejects degrades to an unknown count."""
        result = parse_insights_response({"count": count, "placeInsights": [{"place": "places/a"}]})

        assert result.count is None
        assert result.places == ["places/a"]
        assert len(result.warnings) == 1

    @pytest.mark.parametrize("raw", [[], "42", None, 42])
    def test_non_object_body_raises(self, raw):
        with pytest.raises(ParseError):
            parse_insights_response(raw)
