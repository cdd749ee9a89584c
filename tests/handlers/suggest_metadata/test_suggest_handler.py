import base64
import json
from unittest.mock import patch

import pytest

from handlers.suggest_metadata.handler import handler

GENERATE_CONTENT = "core.infrastructure.adapters.gemini_adapter.GeminiAdapter.generate_content"

AI_REPLY = json.dumps(
    {
        "title": "Summer Sale Banner",
        "description": "A colorful banner announcing a summer sale.",
        "altText": "Summer sale banner with palm trees",
        "tags": ["Sale", "summer", "banner"],
    }
)


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")


def suggest_event(**fields) -> dict:
    return {"httpMethod": "POST", "body": json.dumps(fields)}


def encoded(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


class TestSuggestMetadataHandler:
    def test_ai_suggestion(self, suggest_metadata_event, gemini_reply, lambda_context) -> None:
        with patch(GENERATE_CONTENT, return_value=gemini_reply(AI_REPLY)) as generate:
            response = handler(suggest_metadata_event, lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["aiGenerated"] is True
        assert body["state"] == "done"
        assert body["suggestion"]["title"] == "Summer Sale Banner"
        assert body["suggestion"]["altText"] == "Summer sale banner with palm trees"
        assert body["suggestion"]["tags"] == ["sale", "summer", "banner"]
        assert generate.call_args.kwargs["api_key"] == "test-gemini-key"

    def test_stored_media_type_tags_are_merged(
        self,
        stored_media_type,
        sample_png_binary,
        gemini_reply,
        lambda_context,
    ) -> None:
        stored_media_type(id="mt_web", name="Webinar", default_tags=["Webinar", "Video"])
        event = suggest_event(
            file=encoded(sample_png_binary),
            filename="slide.png",
            mediaTypeId="mt_web",
        )

        with patch(GENERATE_CONTENT, return_value=gemini_reply(AI_REPLY)) as generate:
            response = handler(event, lambda_context)

        body = json.loads(response["body"])
        assert body["suggestion"]["tags"] == ["webinar", "video", "sale", "summer", "banner"]
        prompt = generate.call_args.kwargs["body"]["contents"][0]["parts"][0]["text"]
        assert 'Media Type Context: "Webinar" - Recorded talks' in prompt

    def test_webinar_quota_exceeded_returns_429(
        self,
        stored_media_type,
        sample_png_binary,
        gemini_reply,
        lambda_context,
    ) -> None:
        stored_media_type(id="mt_web", name="Webinar")
        event = suggest_event(
            file=encoded(sample_png_binary),
            filename="webinar-cover.png",
            mediaTypeId="mt_web",
        )
        quota = gemini_reply(status_code=429, error="Quota exceeded for quota metric")

        with patch(GENERATE_CONTENT, return_value=quota):
            response = handler(event, lambda_context)

        assert response["statusCode"] == 429
        body = json.loads(response["body"])
        assert body["error"] == "INFERENCE_QUOTA_EXCEEDED"
        assert body["message"] == "Inference API quota exceeded. Please try again later."
        assert "details" not in body

    @pytest.mark.parametrize(
        "status_code,error,expected_status",
        [
            (400, "API key not valid. Please pass a valid API key.", 500),
            (400, "Request payload size exceeds the limit", 413),
            (404, "models/gemini-x is not found", 503),
        ],
    )
    def test_classified_failures(
        self,
        suggest_metadata_event,
        gemini_reply,
        lambda_context,
        status_code,
        error,
        expected_status,
    ) -> None:
        with patch(GENERATE_CONTENT, return_value=gemini_reply(status_code=status_code, error=error)):
            response = handler(suggest_metadata_event, lambda_context)

        assert response["statusCode"] == expected_status

    def test_unclassified_failure_falls_back(
        self,
        suggest_metadata_event,
        gemini_reply,
        lambda_context,
    ) -> None:
        with patch(GENERATE_CONTENT, return_value=gemini_reply(status_code=500, error="Internal")):
            response = handler(suggest_metadata_event, lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["aiGenerated"] is False
        assert body["state"] == "fallback"
        assert body["suggestion"] == {
            "title": "Summer Sale",
            "description": "A png file.",
            "altText": "Summer Sale file",
        }

    def test_malformed_reply_falls_back(
        self,
        suggest_metadata_event,
        gemini_reply,
        lambda_context,
    ) -> None:
        with patch(GENERATE_CONTENT, return_value=gemini_reply('{"title": "x",, }')):
            response = handler(suggest_metadata_event, lambda_context)

        assert json.loads(response["body"])["aiGenerated"] is False

    def test_document_uses_filename_without_inference(self, lambda_context) -> None:
        event = suggest_event(
            file=encoded(b"%PDF-1.7\nbody"),
            filename="q3-report.pdf",
            mediaType={"name": "Docs", "defaultTags": ["finance"]},
        )

        with patch(GENERATE_CONTENT) as generate:
            response = handler(event, lambda_context)

        generate.assert_not_called()
        body = json.loads(response["body"])
        assert body["aiGenerated"] is False
        assert body["suggestion"] == {
            "title": "Q3 Report",
            "description": "A pdf file.",
            "altText": "Q3 Report file",
            "tags": ["finance"],
        }

    def test_missing_api_key(self, monkeypatch, suggest_metadata_event, lambda_context) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with patch(GENERATE_CONTENT) as generate:
            response = handler(suggest_metadata_event, lambda_context)

        generate.assert_not_called()
        assert response["statusCode"] == 500
        body = json.loads(response["body"])
        assert body["error"] == "CONFIGURATION_ERROR"
        assert body["message"] == "GEMINI_API_KEY environment variable is not set"

    def test_unknown_media_type_id(
        self,
        sample_png_binary,
        media_types_table,
        lambda_context,
    ) -> None:
        event = suggest_event(
            file=encoded(sample_png_binary),
            filename="a.png",
            mediaTypeId="mt_missing",
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 404

    def test_id_and_inline_media_type_rejected(self, sample_png_binary, lambda_context) -> None:
        event = suggest_event(
            file=encoded(sample_png_binary),
            filename="a.png",
            mediaTypeId="mt_1",
            mediaType={"name": "Inline"},
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 400

    def test_invalid_base64(self, lambda_context) -> None:
        response = handler(suggest_event(file="%%%not-base64", filename="a.png"), lambda_context)

        assert response["statusCode"] == 400
        errors = json.loads(response["body"])["details"]["errors"]
        assert errors[0] == {
            "field": "file",
            "message": "File must be a valid Base64-encoded string",
        }

    def test_missing_filename(self, sample_png_binary, lambda_context) -> None:
        response = handler(suggest_event(file=encoded(sample_png_binary)), lambda_context)

        assert response["statusCode"] == 400
