"""Business logic for AI metadata suggestions on uploaded bytes."""

from aws_lambda_powertools import Logger

from core.models.suggestion import MediaTypeContext, SuggestionContext, SuggestionResult
from core.suggestions.media_type_lookup import MediaTypeContextResolver
from core.suggestions.orchestrator import SuggestionOrchestrator
from core.utils.mime import DEFAULT_MIME_TYPE, detect_mime_type, normalize_mime_type

logger = Logger(UTC=True)


class SuggestMetadataService:
    """Builds the suggestion context and runs the orchestrator once."""

    def __init__(
        self,
        orchestrator: SuggestionOrchestrator | None = None,
        resolver: MediaTypeContextResolver | None = None,
    ) -> None:
        self.orchestrator = orchestrator or SuggestionOrchestrator()
        self.resolver = resolver or MediaTypeContextResolver()

    def suggest_metadata(
        self,
        *,
        data: bytes,
        filename: str,
        mime_type: str | None = None,
        media_type_id: str | None = None,
        media_type: MediaTypeContext | None = None,
    ) -> SuggestionResult:
        """Suggest metadata for one media file.

        Raises:
            NotFoundError: If `media_type_id` names no stored MediaType
            ConfigurationError: If no inference API key is configured
            InferenceError: For classified inference failures
        """
        resolved_mime = normalize_mime_type(mime_type)
        if not resolved_mime or resolved_mime == DEFAULT_MIME_TYPE:
            resolved_mime = detect_mime_type(data)

        context = SuggestionContext(
            data=data,
            mime_type=resolved_mime,
            filename=filename,
            media_type=self.resolver.resolve(media_type_id=media_type_id, inline=media_type),
        )

        result = self.orchestrator.suggest(context)

        logger.info(
            "Suggestion request completed",
            extra={
                "file_name": filename,
                "mime_type": resolved_mime,
                "state": result.state.value,
                "ai_generated": result.ai_generated,
            },
        )
        return result
