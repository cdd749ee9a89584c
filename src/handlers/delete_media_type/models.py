"""Pydantic models for delete MediaType request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteMediaTypeRequest(BaseModel):
    """Validation model for delete MediaType request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    media_type_id: str = Field(
        ...,
        min_length=1,
        description="MediaType ID to delete",
    )


class DeleteMediaTypeResponse(BaseModel):
    """Response model for successful MediaType deletion."""

    media_type_id: str = Field(..., description="Deleted MediaType ID")
    name: str = Field(..., description="Name of the deleted MediaType")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
