from typing import Any

import pytest

from core.models.errors import SchemaValidationError
from core.models.media_type import MediaTypeDefinition, MediaTypeInput
from core.schema.validation import (
    normalize_name,
    validate_allowed_formats,
    validate_color,
    validate_dimension_constraint,
    validate_fields,
    validate_media_type,
    validate_name,
)


def make_definition(media_type_id: str, name: str) -> MediaTypeDefinition:
    return MediaTypeDefinition(
        id=media_type_id,
        name=name,
        color="#000000",
        allowed_formats=[".jpg"],
        created_at="2024-01-01T00:00:00+00:00",
    )


def make_input(**overrides: Any) -> MediaTypeInput:
    data: dict[str, Any] = {
        "name": "Banner",
        "color": "#3b82f6",
        "allowedFormats": [".png"],
        "fields": [],
    }
    data.update(overrides)
    return MediaTypeInput.model_validate(data)


class TestValidateName:
    def test_returns_trimmed_name(self) -> None:
        assert validate_name("  Banner  ", []) == "Banner"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_required(self, name) -> None:
        with pytest.raises(SchemaValidationError, match="name is required") as exc_info:
            validate_name(name, [])

        assert exc_info.value.details["field"] == "name"

    def test_too_long(self) -> None:
        with pytest.raises(SchemaValidationError, match="at most 100"):
            validate_name("x" * 101, [])

    @pytest.mark.parametrize("candidate", ["banner", "BANNER", "  Banner ", "bAnNeR"])
    def test_duplicate_ignores_case_and_whitespace(self, candidate) -> None:
        existing = [make_definition("mt_1", "Banner")]

        with pytest.raises(SchemaValidationError, match="already exists") as exc_info:
            validate_name(candidate, existing)

        assert exc_info.value.details == {
            "field": "name",
            "conflicting_id": "mt_1",
        }

    def test_update_excludes_itself(self) -> None:
        existing = [make_definition("mt_1", "Banner")]

        assert validate_name("BANNER", existing, exclude_id="mt_1") == "BANNER"

    def test_update_still_conflicts_with_others(self) -> None:
        existing = [make_definition("mt_1", "Banner"), make_definition("mt_2", "Hero")]

        with pytest.raises(SchemaValidationError):
            validate_name("hero", existing, exclude_id="mt_1")

    def test_normalize_name(self) -> None:
        assert normalize_name("  Mixed Case ") == "mixed case"


class TestValidateColor:
    @pytest.mark.parametrize("color", ["#fff", "#FFFFFF", "#3b82f6", "#A1b"])
    def test_valid(self, color) -> None:
        validate_color(color)

    @pytest.mark.parametrize("color", [None, "", "fff", "#ffff", "#12345g", "red", "#1234567"])
    def test_invalid(self, color) -> None:
        with pytest.raises(SchemaValidationError, match="Invalid hex color format") as exc_info:
            validate_color(color)

        assert exc_info.value.details["field"] == "color"


class TestValidateAllowedFormats:
    def test_valid(self) -> None:
        validate_allowed_formats([".jpg"])

    @pytest.mark.parametrize("formats", [None, [], ["  "]])
    def test_empty(self, formats) -> None:
        with pytest.raises(SchemaValidationError, match="At least one file format") as exc_info:
            validate_allowed_formats(formats)

        assert exc_info.value.details["field"] == "allowedFormats"


class TestValidateFields:
    def field(self, **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {"id": "f", "name": "sku", "label": "SKU", "type": "text"}
        data.update(overrides)
        return data

    def test_duplicate_field_name(self) -> None:
        candidate = make_input(fields=[self.field(id="a"), self.field(id="b")])

        with pytest.raises(SchemaValidationError, match='Duplicate field name: "sku"') as exc_info:
            validate_fields(candidate.fields)

        assert exc_info.value.details["field"] == "fields[1].name"

    def test_field_names_are_case_sensitive(self) -> None:
        candidate = make_input(fields=[self.field(name="sku"), self.field(name="SKU")])

        validate_fields(candidate.fields)

    def test_select_without_options(self) -> None:
        candidate = make_input(
            fields=[self.field(name="season", label="Season", type="select", options=[])]
        )

        with pytest.raises(SchemaValidationError, match="must have at least one option") as exc_info:
            validate_fields(candidate.fields)

        assert exc_info.value.details["field"] == "fields[0].options"

    def test_select_with_options(self) -> None:
        candidate = make_input(fields=[self.field(type="select", options=["a"])])

        validate_fields(candidate.fields)

    def test_invalid_regex(self) -> None:
        candidate = make_input(fields=[self.field(validationRegex="([a-z")])

        with pytest.raises(SchemaValidationError, match="Invalid regex pattern") as exc_info:
            validate_fields(candidate.fields)

        assert exc_info.value.details["field"] == "fields[0].validationRegex"
        assert "pattern_error" in exc_info.value.details


class TestValidateDimensionConstraint:
    def test_none_is_valid(self) -> None:
        validate_dimension_constraint(None)

    def test_inconsistent_pair(self) -> None:
        candidate = make_input(
            dimensionConstraint={
                "enabled": True,
                "aspectRatio": {"label": "1:1", "value": 1.0},
                "minWidth": 800,
                "minHeight": 600,
            }
        )

        with pytest.raises(SchemaValidationError, match="does not match") as exc_info:
            validate_dimension_constraint(candidate.dimension_constraint)

        assert exc_info.value.details["field"] == "dimensionConstraint"

    def test_non_positive_ratio(self) -> None:
        candidate = make_input(
            dimensionConstraint={"enabled": True, "aspectRatio": {"label": "bad", "value": 0}}
        )

        with pytest.raises(SchemaValidationError, match="positive"):
            validate_dimension_constraint(candidate.dimension_constraint)

    def test_negative_minimum(self) -> None:
        candidate = make_input(dimensionConstraint={"enabled": False, "minWidth": -1})

        with pytest.raises(SchemaValidationError) as exc_info:
            validate_dimension_constraint(candidate.dimension_constraint)

        assert exc_info.value.details["field"] == "dimensionConstraint.minWidth"


class TestValidateMediaType:
    def test_returns_copy_with_trimmed_name(self) -> None:
        candidate = make_input(name="  Banner  ")

        result = validate_media_type(candidate, [])

        assert result.name == "Banner"

    def test_first_violation_wins(self) -> None:
        candidate = make_input(color="nope", allowedFormats=[])

        with pytest.raises(SchemaValidationError) as exc_info:
            validate_media_type(candidate, [])

        assert exc_info.value.details["field"] == "color"

    def test_full_payload_passes(self, sample_media_type_payload) -> None:
        candidate = MediaTypeInput.model_validate(sample_media_type_payload)

        result = validate_media_type(candidate, [make_definition("mt_9", "Other")])

        assert result.name == "Product Shot"
