"""MediaType schema models.

These models describe *shape* only (types, required keys). Structural rules
such as unique field names or select options are enforced by
`core.schema.validation`, which reports them as `SchemaValidationError`.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

from core.models.suggestion import MediaTypeContext

FieldType = Literal["text", "number", "date", "select", "boolean", "url"]


class CamelModel(BaseModel):
    """Base model accepting both camelCase (wire) and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldSchema(CamelModel):
    """One custom metadata field of a MediaType."""

    id: StrictStr = Field(..., description="Client-generated field identifier")
    name: StrictStr = Field(..., description="Field key, unique within the MediaType")
    label: StrictStr = Field(..., description="Display label")
    type: FieldType = Field(..., description="Value type of the field")
    required: StrictBool = Field(False, description="Whether a value must be supplied")
    options: list[StrictStr] | None = Field(None, description="Choices for select fields")
    validation_regex: StrictStr | None = Field(None, description="Optional value pattern")
    placeholder: StrictStr | None = Field(None, description="Optional input placeholder")


class AspectRatio(CamelModel):
    label: StrictStr = Field("None", description="Display label, e.g. 16:9")
    value: float | None = Field(None, description="width / height, or None when unlinked")


class DimensionConstraint(CamelModel):
    """Minimum size rule, optionally linked through an aspect ratio."""

    enabled: StrictBool = False
    aspect_ratio: AspectRatio = Field(default_factory=AspectRatio)
    min_width: int | None = Field(None, description="Minimum width in pixels")
    min_height: int | None = Field(None, description="Minimum height in pixels")


class MediaTypeInput(CamelModel):
    """Full MediaType payload used for creation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: StrictStr = Field(..., description="MediaType name, unique ignoring case")
    description: StrictStr | None = None
    color: StrictStr = Field(..., description="Hex color, #RGB or #RRGGBB")
    allowed_formats: list[StrictStr] = Field(..., description="Accepted file extensions")
    fields: list[FieldSchema] = Field(default_factory=list)
    default_tags: list[StrictStr] = Field(default_factory=list)
    dimension_constraint: DimensionConstraint | None = None


class MediaTypeUpdate(CamelModel):
    """Partial MediaType payload. Only keys that were sent are applied."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: StrictStr | None = None
    description: StrictStr | None = None
    color: StrictStr | None = None
    allowed_formats: list[StrictStr] | None = None
    fields: list[FieldSchema] | None = None
    default_tags: list[StrictStr] | None = None
    dimension_constraint: DimensionConstraint | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the attributes explicitly provided by the caller."""
        return self.model_dump(exclude_unset=True)


class MediaTypeDefinition(MediaTypeInput):
    """Stored MediaType record."""

    id: StrictStr = Field(..., description="Unique MediaType identifier")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    def to_context(self) -> MediaTypeContext:
        """Project the definition onto the hints used by the suggestion pipeline."""
        return MediaTypeContext(
            name=self.name,
            description=self.description,
            default_tags=list(self.default_tags) or None,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize for API responses (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)
