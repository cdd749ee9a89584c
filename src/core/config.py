"""Environment-driven settings for the suggestion pipeline and media fetches.

Settings are plain pydantic models built explicitly (usually through
`from_env()`) and passed to the components that need them. The inference
API key is optional here: it is resolved again at call time so a Lambda
that starts without the secret reports a `ConfigurationError` per request
instead of failing at import.
"""

import os

from pydantic import BaseModel, Field

from core.utils.constants import (
    DEFAULT_ALLOWED_MEDIA_HOSTS,
    DEFAULT_INFERENCE_ENDPOINT,
    DEFAULT_INFERENCE_MAX_OUTPUT_TOKENS,
    DEFAULT_INFERENCE_MODEL,
    DEFAULT_INFERENCE_TEMPERATURE,
    DEFAULT_INFERENCE_TIMEOUT_SECONDS,
    ENV_ALLOWED_MEDIA_HOSTS,
    ENV_GEMINI_API_KEY,
    ENV_GEMINI_ENDPOINT,
    ENV_GEMINI_MODEL,
    ENV_GEMINI_TIMEOUT_SECONDS,
    ENV_MAX_MEDIA_FETCH_BYTES,
    MAX_INFERENCE_FILE_SIZE,
    MEDIA_FETCH_TIMEOUT_SECONDS,
)


class SuggestionSettings(BaseModel):
    """Settings for calls to the multimodal inference service."""

    api_key: str | None = Field(None, repr=False)
    model: str = DEFAULT_INFERENCE_MODEL
    endpoint: str = DEFAULT_INFERENCE_ENDPOINT
    temperature: float = DEFAULT_INFERENCE_TEMPERATURE
    max_output_tokens: int = DEFAULT_INFERENCE_MAX_OUTPUT_TOKENS
    timeout_seconds: int = DEFAULT_INFERENCE_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "SuggestionSettings":
        return cls(
            api_key=os.getenv(ENV_GEMINI_API_KEY) or None,
            model=os.getenv(ENV_GEMINI_MODEL) or DEFAULT_INFERENCE_MODEL,
            endpoint=os.getenv(ENV_GEMINI_ENDPOINT) or DEFAULT_INFERENCE_ENDPOINT,
            timeout_seconds=int(
                os.getenv(ENV_GEMINI_TIMEOUT_SECONDS) or DEFAULT_INFERENCE_TIMEOUT_SECONDS
            ),
        )

    def resolve_api_key(self) -> str | None:
        """Return the configured key, falling back to the current environment."""
        key = self.api_key or os.getenv(ENV_GEMINI_API_KEY)
        if key is None or not key.strip():
            return None
        return key.strip()


class MediaSourceSettings(BaseModel):
    """Settings for downloading media by URL."""

    allowed_hosts: tuple[str, ...] = DEFAULT_ALLOWED_MEDIA_HOSTS
    max_bytes: int = MAX_INFERENCE_FILE_SIZE
    timeout_seconds: int = MEDIA_FETCH_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "MediaSourceSettings":
        raw_hosts = os.getenv(ENV_ALLOWED_MEDIA_HOSTS)
        hosts = (
            tuple(h.strip().lower() for h in raw_hosts.split(",") if h.strip())
            if raw_hosts
            else DEFAULT_ALLOWED_MEDIA_HOSTS
        )
        return cls(
            allowed_hosts=hosts,
            max_bytes=int(os.getenv(ENV_MAX_MEDIA_FETCH_BYTES) or MAX_INFERENCE_FILE_SIZE),
        )
