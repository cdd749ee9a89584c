import json
from unittest.mock import patch

import pytest

from core.infrastructure.http.media_source import FetchedMedia
from core.models.errors import MediaFetchError
from handlers.suggest_metadata_from_url.handler import handler

FETCH = "core.infrastructure.http.media_source.MediaSourceFetcher.fetch"
GENERATE_CONTENT = "core.infrastructure.adapters.gemini_adapter.GeminiAdapter.generate_content"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
AI_REPLY = '{"title": "Beach", "description": "Sunny beach.", "altText": "Beach at noon", "tags": ["beach"]}'


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.delenv("ALLOWED_MEDIA_HOSTS", raising=False)


def url_event(**fields) -> dict:
    return {"httpMethod": "POST", "body": json.dumps(fields)}


def fetched(filename: str = "beach.png") -> FetchedMedia:
    return FetchedMedia(data=PNG_BYTES, mime_type="image/png", filename=filename)


class TestSuggestMetadataFromUrlHandler:
    def test_ai_suggestion(self, gemini_reply, lambda_context) -> None:
        url = "https://res.cloudinary.com/demo/image/upload/beach.png"

        with (
            patch(FETCH, return_value=fetched()) as fetch,
            patch(GENERATE_CONTENT, return_value=gemini_reply(AI_REPLY)),
        ):
            response = handler(url_event(url=url), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["sourceUrl"] == url
        assert body["aiGenerated"] is True
        assert body["suggestion"]["title"] == "Beach"
        fetch.assert_called_once_with(url)

    def test_overrides_take_precedence(self, lambda_context) -> None:
        with patch(FETCH, return_value=fetched("download")):
            response = handler(
                url_event(
                    url="https://res.cloudinary.com/x/download",
                    filename="annual-report.pdf",
                    mimeType="application/pdf",
                ),
                lambda_context,
            )

        body = json.loads(response["body"])
        assert body["aiGenerated"] is False
        assert body["suggestion"]["title"] == "Annual Report"
        assert body["suggestion"]["description"] == "A pdf file."

    def test_disallowed_host_returns_403(self, lambda_context) -> None:
        with patch(FETCH) as fetch:
            response = handler(url_event(url="https://evil.example.com/a.png"), lambda_context)

        assert response["statusCode"] == 403
        assert json.loads(response["body"])["error"] == "FORBIDDEN_SOURCE"
        fetch.assert_not_called()

    def test_plain_http_returns_403(self, lambda_context) -> None:
        response = handler(url_event(url="http://res.cloudinary.com/a.png"), lambda_context)

        assert response["statusCode"] == 403

    def test_fetch_failure_returns_502(self, lambda_context) -> None:
        with patch(FETCH, side_effect=MediaFetchError(message="Unable to fetch media (HTTP 404)")):
            response = handler(url_event(url="https://res.cloudinary.com/a.png"), lambda_context)

        assert response["statusCode"] == 502
        assert json.loads(response["body"])["error"] == "MEDIA_FETCH_FAILED"

    def test_unknown_media_type_skips_download(self, media_types_table, lambda_context) -> None:
        with patch(FETCH) as fetch:
            response = handler(
                url_event(url="https://res.cloudinary.com/a.png", mediaTypeId="mt_missing"),
                lambda_context,
            )

        assert response["statusCode"] == 404
        fetch.assert_not_called()

    def test_quota_exceeded_returns_429(self, gemini_reply, lambda_context) -> None:
        quota = gemini_reply(status_code=429, error="Resource has been exhausted (e.g. check quota).")

        with patch(FETCH, return_value=fetched()), patch(GENERATE_CONTENT, return_value=quota):
            response = handler(url_event(url="https://res.cloudinary.com/a.png"), lambda_context)

        assert response["statusCode"] == 429

    def test_missing_url(self, lambda_context) -> None:
        response = handler(url_event(filename="a.png"), lambda_context)

        assert response["statusCode"] == 400
