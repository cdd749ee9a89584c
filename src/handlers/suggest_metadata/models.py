"""Pydantic models for metadata suggestion request/response."""

import base64
import binascii
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.models.media_type import CamelModel
from core.models.suggestion import MediaTypeContext
from core.utils.constants import MAX_INFERENCE_FILE_SIZE, get_max_file_size_mb

logger = Logger(UTC=True)


class SuggestMetadataRequest(CamelModel):
    """Validation model for a suggestion request with inline file bytes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    file: str = Field(..., description="Base64 encoded media file")
    filename: str = Field(..., min_length=1, max_length=255, description="Original file name")
    mime_type: str | None = Field(
        None,
        description="MIME type of the file; sniffed from the bytes when omitted",
    )
    media_type_id: str | None = Field(None, description="Stored MediaType to use as context")
    media_type: MediaTypeContext | None = Field(None, description="Inline MediaType hints")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must not exceed the inference size limit
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_INFERENCE_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value

    @model_validator(mode="after")
    def validate_media_type_source(self) -> "SuggestMetadataRequest":
        if self.media_type_id and self.media_type is not None:
            raise ValueError("Provide either mediaTypeId or mediaType, not both")
        return self

    def decoded_file(self) -> bytes:
        return base64.b64decode(self.file)


class SuggestMetadataResponse(CamelModel):
    """Suggested metadata plus whether it came from the inference service."""

    suggestion: dict[str, Any] = Field(..., description="title, description, altText, tags")
    ai_generated: bool = Field(..., description="False when the filename fallback was used")
    state: str = Field(..., description="Terminal pipeline state")
