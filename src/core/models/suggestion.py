"""Models shared by the metadata suggestion pipeline."""

import base64
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


class MediaCategory(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


class SuggestionState(str, Enum):
    """Stages of one suggestion computation."""

    BUILDING = "building"
    CALLING = "calling"
    PARSING = "parsing"
    RECONCILING = "reconciling"
    DONE = "done"
    FALLBACK = "fallback"


class MediaTypeContext(BaseModel):
    """MediaType hints embedded in the prompt and used for tags."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: StrictStr
    description: StrictStr | None = None
    default_tags: list[StrictStr] | None = None


class SuggestionContext(BaseModel):
    """Input of one suggestion request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Raw media bytes")
    mime_type: StrictStr = Field(..., description="MIME type reported for the media")
    filename: StrictStr = Field(..., description="Original file name")
    media_type: MediaTypeContext | None = None

    @classmethod
    def from_base64(
        cls,
        encoded: str,
        *,
        mime_type: str,
        filename: str,
        media_type: MediaTypeContext | None = None,
    ) -> "SuggestionContext":
        return cls(
            data=base64.b64decode(encoded),
            mime_type=mime_type,
            filename=filename,
            media_type=media_type,
        )

    @property
    def default_tags(self) -> list[str] | None:
        if self.media_type is None:
            return None
        return self.media_type.default_tags

    def encoded_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class Suggestion(BaseModel):
    """Candidate metadata for a media item. Every field may be absent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: StrictStr | None = None
    description: StrictStr | None = None
    alt_text: StrictStr | None = None
    tags: list[StrictStr] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SuggestionResult(BaseModel):
    """Suggestion plus the terminal state it was produced in."""

    suggestion: Suggestion
    state: SuggestionState

    @property
    def ai_generated(self) -> bool:
        return self.state is SuggestionState.DONE


class InferenceRequest(BaseModel):
    """Payload for one call to the multimodal inference service."""

    model_config = ConfigDict(frozen=True)

    model: StrictStr
    prompt: StrictStr
    media_base64: StrictStr
    mime_type: StrictStr
    response_format: StrictStr = "json"
    temperature: float
    max_output_tokens: int
