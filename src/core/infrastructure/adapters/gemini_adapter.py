"""Thin adapter for the Gemini generateContent REST endpoint."""

from typing import Any, Protocol

import requests

from core.utils.constants import DEFAULT_INFERENCE_ENDPOINT


class GeminiAdapterProtocol(Protocol):
    """Minimal Gemini adapter protocol (repository-facing)."""

    def generate_content(
        self,
        *,
        model: str,
        body: dict[str, Any],
        api_key: str,
        timeout: int,
    ) -> requests.Response: ...


class GeminiAdapter:
    """Low-level Gemini HTTP calls (mechanical, no error handling).

    This adapter:
    - Wraps a requests session
    - Does NOT inspect status codes or handle errors (lets them bubble up)
    - Domain implementations check responses and translate errors
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_INFERENCE_ENDPOINT,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._session = session or requests.Session()

    def generate_content(
        self,
        *,
        model: str,
        body: dict[str, Any],
        api_key: str,
        timeout: int,
    ) -> requests.Response:
        """POST a generateContent request.

        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.post(
            f"{self._endpoint}/models/{model}:generateContent",
            json=body,
            headers={
                "x-goog-api-key": api_key,
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )
