"""Business logic for metadata suggestions on media fetched by URL.

The flow is:
1. Check the URL against the allowed hosts (no network traffic on reject)
2. Download the media, size-capped
3. Run the suggestion pipeline on the fetched bytes
"""

from aws_lambda_powertools import Logger

from core.infrastructure.http.media_source import MediaSourceFetcher
from core.models.suggestion import MediaTypeContext, SuggestionContext, SuggestionResult
from core.suggestions.media_type_lookup import MediaTypeContextResolver
from core.suggestions.orchestrator import SuggestionOrchestrator
from core.utils.mime import normalize_mime_type

logger = Logger(UTC=True)


class SuggestMetadataFromUrlService:
    def __init__(
        self,
        fetcher: MediaSourceFetcher | None = None,
        orchestrator: SuggestionOrchestrator | None = None,
        resolver: MediaTypeContextResolver | None = None,
    ) -> None:
        self.fetcher = fetcher or MediaSourceFetcher()
        self.orchestrator = orchestrator or SuggestionOrchestrator()
        self.resolver = resolver or MediaTypeContextResolver()

    def suggest_metadata_from_url(
        self,
        *,
        url: str,
        filename: str | None = None,
        mime_type: str | None = None,
        media_type_id: str | None = None,
        media_type: MediaTypeContext | None = None,
    ) -> SuggestionResult:
        """Fetch the media at `url` and suggest metadata for it.

        The MediaType is resolved before the download, so an unknown id
        costs no network traffic.

        Raises:
            ForbiddenSourceError: If the URL is not https or the host is not allowed
            MediaFetchError: If the download fails or is too large
            NotFoundError: If `media_type_id` names no stored MediaType
            ConfigurationError: If no inference API key is configured
            InferenceError: For classified inference failures
        """
        self.fetcher.ensure_allowed(url)
        media_context = self.resolver.resolve(media_type_id=media_type_id, inline=media_type)

        fetched = self.fetcher.fetch(url)

        context = SuggestionContext(
            data=fetched.data,
            mime_type=normalize_mime_type(mime_type) or fetched.mime_type,
            filename=filename or fetched.filename,
            media_type=media_context,
        )

        result = self.orchestrator.suggest(context)

        logger.info(
            "URL suggestion request completed",
            extra={
                "file_name": context.filename,
                "mime_type": context.mime_type,
                "state": result.state.value,
            },
        )
        return result
