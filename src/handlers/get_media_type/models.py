from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

from core.models.media_type import CamelModel


class GetMediaTypeRequest(BaseModel):
    """Validation model for get MediaType request.

    Exactly one lookup key: the id from the path, or `name` from the query
    string (case-insensitive, surrounding whitespace ignored).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    media_type_id: StrictStr | None = Field(None, description="MediaType ID to retrieve")
    name: StrictStr | None = Field(None, description="MediaType name to retrieve")

    @model_validator(mode="after")
    def validate_single_lookup_key(self) -> "GetMediaTypeRequest":
        has_id = bool(self.media_type_id)
        has_name = bool(self.name)
        if has_id == has_name:
            raise ValueError("Provide either media_type_id or name")
        return self


class GetMediaTypeResponse(CamelModel):
    media_type: dict[str, Any]
    usage_count: int = Field(..., description="Number of media items using the MediaType")
