import pytest

from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.errors import NotFoundError
from core.models.media_type import MediaTypeDefinition
from core.models.suggestion import MediaTypeContext
from core.suggestions.media_type_lookup import MediaTypeContextResolver


class ExplodingRepository:
    """Fails if the resolver touches storage."""

    def get(self, *, media_type_id: str):
        raise AssertionError("repository should not be used")


class TestMediaTypeContextResolver:
    def test_inline_hints_skip_storage(self) -> None:
        inline = MediaTypeContext(name="Social", default_tags=["social"])
        resolver = MediaTypeContextResolver(ExplodingRepository())

        assert resolver.resolve(inline=inline) is inline

    def test_nothing_given(self) -> None:
        assert MediaTypeContextResolver(ExplodingRepository()).resolve() is None

    def test_resolves_stored_media_type(self, media_types_table) -> None:
        DynamoDBMediaTypes().insert(
            definition=MediaTypeDefinition(
                id="mt_web",
                name="Webinar",
                description="Recorded talks",
                color="#000000",
                allowed_formats=[".mp4"],
                default_tags=["video", "talk"],
                created_at="2024-01-01T00:00:00+00:00",
            )
        )

        context = MediaTypeContextResolver().resolve(media_type_id="mt_web")

        assert context == MediaTypeContext(
            name="Webinar",
            description="Recorded talks",
            default_tags=["video", "talk"],
        )

    def test_id_wins_over_inline(self, media_types_table) -> None:
        DynamoDBMediaTypes().insert(
            definition=MediaTypeDefinition(
                id="mt_1",
                name="Stored",
                color="#000",
                allowed_formats=[],
                created_at="2024-01-01T00:00:00+00:00",
            )
        )

        context = MediaTypeContextResolver().resolve(
            media_type_id="mt_1",
            inline=MediaTypeContext(name="Inline"),
        )

        assert context.name == "Stored"

    def test_unknown_id_raises_not_found(self, media_types_table) -> None:
        with pytest.raises(NotFoundError, match="MediaType with id mt_missing not found"):
            MediaTypeContextResolver().resolve(media_type_id="mt_missing")
