"""
Pydantic models for list MediaTypes request and response.
"""

from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.media_type import CamelModel


class ListMediaTypesRequest(CamelModel):
    """Validation model for list MediaTypes API.

    Query string values arrive as strings; `includeUsage=false` skips the
    per-MediaType reference counts.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name_contains: str | None = Field(
        None,
        description="Case-insensitive substring match on the MediaType name",
    )
    include_usage: bool = Field(
        default=True,
        description="Include the number of media items using each MediaType",
    )


class ListMediaTypesResponse(CamelModel):
    media_types: list[dict[str, Any]] = Field(..., description="MediaTypes ordered by name")
    count: int = Field(..., description="Number of MediaTypes returned")
