"""
Unit tests for the schema validator.

Tests the mapping of jsonschema errors onto the contract's error kinds:
- not_array and empty_payload short-circuit
- missing_field scoped by festival and band index
- empty strings are schema-valid
"""

import copy

import pytest

from festival_contract.schemas.festival import Festival
from festival_contract.services.schema_validator import parse_payload, validate_schema


def paths(result):
    return [error.path for error in result.errors]


class TestTopLevel:
    """Array shape and healthy-path emptiness."""

    @pytest.mark.parametrize("payload", [None, {}, "[]", 3, {"festivals": []}])
    def test_not_array(self, payload):
        result = validate_schema(payload)

        assert result.valid is False
        assert len(result.errors) == 1
        assert result.errors[0].code == "not_array"
        assert result.errors[0].category == "schema"

    def test_empty_payload_rejected_in_healthy_mode(self):
        result = validate_schema([])

        assert result.valid is False
        assert [e.code for e in result.errors] == ["empty_payload"]

    def test_empty_payload_accepted_when_allowed(self):
        assert validate_schema([], require_non_empty=False).valid is True


class TestFestivalFields:
    """Festival-level required fields."""

    def test_valid_payload(self, glasto_payload):
        result = validate_schema(glasto_payload)
        assert result.valid is True
        assert result.errors == []

    def test_empty_strings_are_valid(self):
        payload = [
            {"name": "", "bands": [{"name": "", "recordLabel": ""}]},
            {"name": "   ", "bands": []},
        ]
        assert validate_schema(payload).valid is True

    def test_missing_name(self):
        result = validate_schema([{"bands": []}])

        assert paths(result) == ["[0].name"]
        error = result.errors[0]
        assert error.code == "missing_field"
        assert error.field == "name"
        assert error.festival_index == 0
        assert error.band_index is None

    def test_null_name_is_not_text(self):
        result = validate_schema([{"name": None, "bands": []}])
        assert paths(result) == ["[0].name"]

    def test_missing_bands(self):
        result = validate_schema([{"name": "Glasto"}])
        assert paths(result) == ["[0].bands"]
        assert result.errors[0].field == "bands"

    def test_bands_not_an_array(self):
        result = validate_schema([{"name": "Glasto", "bands": {"name": "Echo"}}])
        assert paths(result) == ["[0].bands"]

    def test_festival_not_an_object(self):
        result = validate_schema(["Glasto"])
        assert paths(result) == ["[0].name", "[0].bands"]

    def test_extra_keys_are_ignored(self):
        payload = [{"name": "Glasto", "bands": [], "year": 2024}]
        assert validate_schema(payload).valid is True


class TestBandFields:
    """Band-level required fields."""

    def test_missing_record_label(self):
        result = validate_schema([{"name": "Glasto", "bands": [{"name": "Echo"}]}])

        assert paths(result) == ["[0].bands[0].recordLabel"]
        error = result.errors[0]
        assert error.festival_index == 0
        assert error.band_index == 0
        assert error.field == "recordLabel"

    def test_band_with_no_fields(self):
        result = validate_schema([{"name": "Glasto", "bands": [{}]}])
        assert paths(result) == ["[0].bands[0].name", "[0].bands[0].recordLabel"]

    def test_band_not_an_object(self):
        result = validate_schema([{"name": "Glasto", "bands": [None]}])
        assert paths(result) == ["[0].bands[0].name", "[0].bands[0].recordLabel"]

    def test_numeric_band_name(self):
        result = validate_schema([{"name": "Glasto", "bands": [{"name": 7, "recordLabel": "EMI"}]}])
        assert paths(result) == ["[0].bands[0].name"]


class TestSchemaTotality:
    """Removing any required key yields an error citing exactly that path."""

    def test_every_required_key(self, unsorted_payload):
        assert validate_schema(unsorted_payload).valid is True

        required = [((0,), "name"), ((0,), "bands"), ((2,), "name"), ((2,), "bands")]
        required += [((0, 0), "name"), ((0, 1), "recordLabel"), ((2, 0), "recordLabel"), ((2, 1), "name")]

        for location, key in required:
            payload = copy.deepcopy(unsorted_payload)
            if len(location) == 1:
                del payload[location[0]][key]
                expected = f"[{location[0]}].{key}"
            else:
                del payload[location[0]]["bands"][location[1]][key]
                expected = f"[{location[0]}].bands[{location[1]}].{key}"

            result = validate_schema(payload)

            assert result.valid is False
            assert paths(result) == [expected]

    def test_multiple_violations_are_all_reported_in_order(self):
        payload = [
            {"name": "A", "bands": [{"name": "x"}]},
            {"bands": []},
            {"name": "C"},
        ]
        result = validate_schema(payload)
        assert paths(result) == ["[0].bands[0].recordLabel", "[1].name", "[2].bands"]


class TestParsePayload:
    """Tests for parse_payload."""

    def test_parses_models(self, glasto_payload):
        festivals = parse_payload(glasto_payload)

        assert festivals == [Festival.model_validate(glasto_payload[0])]
        assert festivals[0].bands[0].record_label == "EMI"

    def test_empty_payload_parses(self):
        assert parse_payload([]) == []

    def test_invalid_payload_raises(self):
        with pytest.raises(ValueError):
            parse_payload([{"name": "Glasto"}])
