"""Pydantic models for MediaType creation request/response."""

from typing import Any

from pydantic import Field

from core.models.media_type import CamelModel, MediaTypeInput


class CreateMediaTypeRequest(MediaTypeInput):
    """Validation model for the create MediaType request body.

    Only the shape is checked here; naming, color, format and field rules
    run in the service against the stored definitions.
    """


class CreateMediaTypeResponse(CamelModel):
    """Response model for a successfully created MediaType."""

    media_type: dict[str, Any] = Field(..., description="Stored MediaType (camelCase)")
    message: str = Field(..., description="Success message")
