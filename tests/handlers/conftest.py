import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.media_type import MediaTypeDefinition


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def stored_media_type(media_types_table) -> Callable[..., MediaTypeDefinition]:
    """
    Helper to store a MediaType directly through the repository.

    Usage:
        stored_media_type(id="mt_1", name="Webinar")
    """

    def _store(**overrides: Any) -> MediaTypeDefinition:
        data: dict[str, Any] = {
            "id": "mt_existing",
            "name": "Webinar",
            "description": "Recorded talks",
            "color": "#112233",
            "allowed_formats": [".mp4", ".png"],
            "default_tags": ["video"],
            "created_at": "2024-01-01T00:00:00+00:00",
        }
        data.update(overrides)
        definition = MediaTypeDefinition.model_validate(data)
        return DynamoDBMediaTypes().insert(definition=definition)

    return _store


@pytest.fixture
def create_media_type_event(sample_media_type_payload) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/media-types",
        "body": json.dumps(sample_media_type_payload),
        "headers": {"Content-Type": "application/json"},
    }


@pytest.fixture
def suggest_metadata_event(sample_png_binary) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/suggestions",
        "body": json.dumps(
            {
                "file": base64.b64encode(sample_png_binary).decode("utf-8"),
                "filename": "summer-sale.png",
                "mimeType": "image/png",
            }
        ),
        "headers": {"Content-Type": "application/json"},
    }


class FakeGeminiResponse:
    """Stand-in for the requests.Response returned by GeminiAdapter."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self) -> Any:
        return self._payload


@pytest.fixture
def gemini_reply() -> Callable[..., FakeGeminiResponse]:
    """Build a generateContent response carrying `text`, or an error status."""

    def _reply(text: str = "", *, status_code: int = 200, error: str | None = None):
        if error is not None:
            return FakeGeminiResponse(status_code, {"error": {"message": error}})
        return FakeGeminiResponse(
            status_code,
            {"candidates": [{"content": {"parts": [{"text": text}]}}]},
        )

    return _reply
