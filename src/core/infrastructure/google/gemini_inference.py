"""Gemini-backed implementation of InferenceRepository."""

from typing import Any

import requests
from aws_lambda_powertools import Logger

from core.infrastructure.adapters.gemini_adapter import GeminiAdapter, GeminiAdapterProtocol
from core.models.errors import InferenceCallError
from core.models.suggestion import InferenceRequest
from core.repositories.inference_repository import InferenceRepository
from core.utils.constants import DEFAULT_INFERENCE_TIMEOUT_SECONDS

logger = Logger(UTC=True)


def build_request_body(request: InferenceRequest) -> dict[str, Any]:
    """Translate an InferenceRequest into the generateContent JSON body."""
    generation_config: dict[str, Any] = {
        "temperature": request.temperature,
        "maxOutputTokens": request.max_output_tokens,
    }
    if request.response_format == "json":
        generation_config["responseMimeType"] = "application/json"

    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": request.prompt},
                    {
                        "inline_data": {
                            "mime_type": request.mime_type,
                            "data": request.media_base64,
                        }
                    },
                ],
            }
        ],
        "generationConfig": generation_config,
    }


def extract_text(payload: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""

    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def _error_text(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text


class GeminiInference(InferenceRepository):
    """Calls Gemini once per request. No retries.

    Every failure is raised as `InferenceCallError`. Error responses carry
    `status_code` and the service's own wording; transport failures carry
    only the exception type name.
    """

    def __init__(
        self,
        adapter: GeminiAdapterProtocol | None = None,
        *,
        timeout_seconds: int = DEFAULT_INFERENCE_TIMEOUT_SECONDS,
    ) -> None:
        self._api: GeminiAdapterProtocol = adapter or GeminiAdapter()
        self._timeout = timeout_seconds

    def generate(self, *, request: InferenceRequest, api_key: str) -> str:
        logger.debug(
            "Calling inference service",
            extra={
                "model": request.model,
                "mime_type": request.mime_type,
                "payload_chars": len(request.media_base64),
            },
        )

        try:
            response = self._api.generate_content(
                model=request.model,
                body=build_request_body(request),
                api_key=api_key,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.error(
                "Inference request failed",
                extra={"model": request.model, "error_type": type(exc).__name__},
            )
            raise InferenceCallError(
                message=f"Inference request failed: {type(exc).__name__}",
                details={"model": request.model, "error_type": type(exc).__name__},
            ) from exc

        if response.status_code // 100 != 2:
            error_text = _error_text(response)
            logger.error(
                "Inference service returned an error",
                extra={"model": request.model, "status_code": response.status_code},
            )
            raise InferenceCallError(
                message=f"Inference API error: {response.status_code} - {error_text}",
                details={"model": request.model, "status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise InferenceCallError(
                message="Inference service returned a non-JSON envelope",
                details={"model": request.model},
            ) from exc

        text = extract_text(payload) if isinstance(payload, dict) else ""
        if not text.strip():
            raise InferenceCallError(
                message="Inference service returned an empty response",
                details={"model": request.model},
            )

        logger.info(
            "Inference call completed",
            extra={"model": request.model, "reply_chars": len(text)},
        )
        return text
