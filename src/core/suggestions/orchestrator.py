"""Composes the metadata suggestion pipeline.

Flow: BUILDING -> CALLING -> PARSING -> RECONCILING -> DONE, with FALLBACK
reachable from any failure point.

Failure policy:
- missing credential while building: `ConfigurationError`, always raised
- call failures classified as auth, quota, payload size or model
  availability: the matching `InferenceError` subclass is raised
- anything else while calling or parsing (timeouts, malformed replies,
  unexpected exceptions): a filename-based fallback suggestion is returned
"""

from aws_lambda_powertools import Logger

from core.config import SuggestionSettings
from core.infrastructure.adapters.gemini_adapter import GeminiAdapter
from core.infrastructure.google.gemini_inference import GeminiInference
from core.models.errors import ConfigurationError
from core.models.suggestion import (
    Suggestion,
    SuggestionContext,
    SuggestionResult,
    SuggestionState,
)
from core.repositories.inference_repository import InferenceRepository
from core.suggestions.error_classifier import classify_inference_failure
from core.suggestions.fallback import filename_suggestion
from core.suggestions.request_builder import SuggestionRequestBuilder
from core.suggestions.response_parser import parse_reply
from core.suggestions.tag_reconciler import reconcile_tags
from core.utils.constants import ENV_GEMINI_API_KEY

logger = Logger(UTC=True)


class SuggestionOrchestrator:
    """Produces one Suggestion per call. Holds no per-request state."""

    def __init__(
        self,
        settings: SuggestionSettings | None = None,
        *,
        inference: InferenceRepository | None = None,
        builder: SuggestionRequestBuilder | None = None,
    ) -> None:
        self._settings = settings or SuggestionSettings.from_env()
        self._inference = inference or GeminiInference(
            GeminiAdapter(endpoint=self._settings.endpoint),
            timeout_seconds=self._settings.timeout_seconds,
        )
        self._builder = builder or SuggestionRequestBuilder(self._settings)

    def suggest(self, context: SuggestionContext) -> SuggestionResult:
        """Run the pipeline for one media item.

        Raises:
            ConfigurationError: If no inference API key is configured
            AuthError: If the service rejected the credential
            QuotaError: If the quota or rate limit was exceeded
            PayloadTooLargeError: If the media is too large to analyze
            ModelUnavailableError: If the configured model is unavailable
        """
        state = SuggestionState.BUILDING
        api_key = self._settings.resolve_api_key()
        if api_key is None:
            logger.error("Inference API key is not configured")
            raise ConfigurationError(
                message=f"{ENV_GEMINI_API_KEY} environment variable is not set",
                details={"setting": ENV_GEMINI_API_KEY},
            )

        built = self._builder.build(context)
        if not built.needs_inference:
            logger.info(
                "Media type not supported for inference, using filename suggestion",
                extra={"mime_type": context.mime_type, "file_name": context.filename},
            )
            return SuggestionResult(suggestion=built.suggestion, state=SuggestionState.FALLBACK)

        try:
            state = SuggestionState.CALLING
            reply = self._inference.generate(request=built.request, api_key=api_key)

            state = SuggestionState.PARSING
            parsed = parse_reply(reply)
        except Exception as exc:
            classified = classify_inference_failure(exc) if state is SuggestionState.CALLING else None
            if classified is not None:
                logger.warning(
                    "Inference call failed with a classified error",
                    extra={"error_code": classified.error_code, "file_name": context.filename},
                )
                raise classified from exc

            logger.warning(
                "Suggestion pipeline failed, returning fallback",
                extra={
                    "state": state.value,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                    "file_name": context.filename,
                },
            )
            return self._fallback(context)

        state = SuggestionState.RECONCILING
        suggestion = parsed.suggestion.model_copy(
            update={"tags": reconcile_tags(parsed.suggestion.tags, context.default_tags)}
        )

        logger.info(
            "Suggestion generated",
            extra={
                "file_name": context.filename,
                "state": state.value,
                "category": built.category.value,
                "parse_outcome": parsed.outcome.value,
            },
        )
        return SuggestionResult(suggestion=suggestion, state=SuggestionState.DONE)

    @staticmethod
    def _fallback(context: SuggestionContext) -> SuggestionResult:
        suggestion: Suggestion = filename_suggestion(
            context.filename,
            context.mime_type,
            context.default_tags,
        )
        return SuggestionResult(suggestion=suggestion, state=SuggestionState.FALLBACK)
