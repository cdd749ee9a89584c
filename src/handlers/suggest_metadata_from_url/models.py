"""Pydantic models for URL-based metadata suggestion request/response."""

from typing import Any

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.models.media_type import CamelModel
from core.models.suggestion import MediaTypeContext


class SuggestMetadataFromUrlRequest(CamelModel):
    """Validation model for a suggestion request that references media by URL.

    Host checks happen in the fetcher, not here, so a rejected host is
    reported as 403 rather than as a malformed request.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    url: str = Field(..., min_length=1, max_length=2048, description="https URL of the media")
    filename: str | None = Field(
        None,
        max_length=255,
        description="File name to use instead of the last URL path segment",
    )
    mime_type: str | None = Field(None, description="Overrides the fetched Content-Type")
    media_type_id: str | None = None
    media_type: MediaTypeContext | None = None

    @model_validator(mode="after")
    def validate_media_type_source(self) -> "SuggestMetadataFromUrlRequest":
        if self.media_type_id and self.media_type is not None:
            raise ValueError("Provide either mediaTypeId or mediaType, not both")
        return self


class SuggestMetadataFromUrlResponse(CamelModel):
    suggestion: dict[str, Any]
    ai_generated: bool
    state: str
    source_url: str
