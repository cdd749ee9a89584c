"""Pydantic models for MediaType update request/response."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.models.media_type import CamelModel, MediaTypeUpdate


class UpdateMediaTypePath(BaseModel):
    """Validation model for the path parameters of an update request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    media_type_id: str = Field(..., min_length=1, description="MediaType ID to update")


class UpdateMediaTypeRequest(MediaTypeUpdate):
    """Partial MediaType body. Keys that are not sent keep their stored value."""


class UpdateMediaTypeResponse(CamelModel):
    media_type: dict[str, Any] = Field(..., description="Updated MediaType (camelCase)")
    message: str = Field(..., description="Success message")
