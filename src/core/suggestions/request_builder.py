"""Builds inference requests for metadata suggestions.

Only images and videos are sent to the inference service. Any other media
short-circuits into a filename-based suggestion, so callers receive either
an `InferenceRequest` or a finished `Suggestion` from `build()`.
"""

from dataclasses import dataclass

from core.config import SuggestionSettings
from core.models.suggestion import (
    InferenceRequest,
    MediaCategory,
    MediaTypeContext,
    Suggestion,
    SuggestionContext,
)
from core.suggestions.fallback import filename_suggestion
from core.utils.constants import (
    SUGGESTION_ALT_TEXT_MAX_WORDS,
    SUGGESTION_MAX_TAGS,
    SUGGESTION_MIN_TAGS,
    SUGGESTION_TITLE_MAX_LENGTH,
)
from core.utils.mime import classify_mime_type

PROMPT_TEMPLATE = """Analyze this {kind} file ({filename}) and provide metadata suggestions:

1. A concise, descriptive title (max {title_max} characters) based on the visual content
2. A brief description (1-2 sentences) describing what is shown
3. Alt text for accessibility - be descriptive and specific. No more than {alt_max} words.
4. Relevant tags ({min_tags}-{max_tags} tags) that describe the content, style, or subject matter{context}

Return your response as a JSON object with exactly these four fields and nothing else:
{{
  "title": "descriptive title here",
  "description": "brief description here",
  "altText": "descriptive alt text for accessibility, no more than {alt_max} words",
  "tags": ["tag1", "tag2", "tag3"]
}}

Be specific and descriptive. For images, describe what you see. For videos, describe the content and style."""


@dataclass(frozen=True)
class BuiltRequest:
    """Outcome of building: exactly one of the two attributes is set."""

    category: MediaCategory
    request: InferenceRequest | None = None
    suggestion: Suggestion | None = None

    @property
    def needs_inference(self) -> bool:
        return self.request is not None


def media_type_hints(media_type: MediaTypeContext | None) -> str:
    """Prompt lines describing the MediaType, empty when there is none."""
    if media_type is None:
        return ""

    hints = f'\n\nMedia Type Context: "{media_type.name}"'
    if media_type.description:
        hints += f" - {media_type.description}"

    if media_type.default_tags:
        hints += f"\n\nDefault tags for this media type: {', '.join(media_type.default_tags)}"

    return hints


def build_prompt(context: SuggestionContext, category: MediaCategory) -> str:
    return PROMPT_TEMPLATE.format(
        kind=category.value,
        filename=context.filename,
        title_max=SUGGESTION_TITLE_MAX_LENGTH,
        alt_max=SUGGESTION_ALT_TEXT_MAX_WORDS,
        min_tags=SUGGESTION_MIN_TAGS,
        max_tags=SUGGESTION_MAX_TAGS,
        context=media_type_hints(context.media_type),
    )


class SuggestionRequestBuilder:
    """Turns a `SuggestionContext` into an inference request."""

    def __init__(self, settings: SuggestionSettings | None = None) -> None:
        self._settings = settings or SuggestionSettings()

    def build(self, context: SuggestionContext) -> BuiltRequest:
        category = classify_mime_type(context.mime_type)

        if category is MediaCategory.OTHER:
            return BuiltRequest(
                category=category,
                suggestion=filename_suggestion(
                    context.filename,
                    context.mime_type,
                    context.default_tags,
                ),
            )

        request = InferenceRequest(
            model=self._settings.model,
            prompt=build_prompt(context, category),
            media_base64=context.encoded_data(),
            mime_type=context.mime_type,
            temperature=self._settings.temperature,
            max_output_tokens=self._settings.max_output_tokens,
        )
        return BuiltRequest(category=category, request=request)
