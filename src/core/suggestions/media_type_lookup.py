"""Resolves the MediaType hints attached to a suggestion request."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.errors import NotFoundError
from core.models.suggestion import MediaTypeContext
from core.repositories.media_type_repository import MediaTypeRepository

logger = Logger(UTC=True)


class MediaTypeContextResolver:
    """Turns a MediaType id, or inline hints, into a `MediaTypeContext`.

    The repository is created on first use, so requests carrying inline
    hints never touch the MediaTypes table.
    """

    def __init__(self, media_types: MediaTypeRepository | None = None) -> None:
        self._media_types = media_types

    @property
    def media_types(self) -> MediaTypeRepository:
        if self._media_types is None:
            self._media_types = DynamoDBMediaTypes()
        return self._media_types

    def resolve(
        self,
        *,
        media_type_id: str | None = None,
        inline: MediaTypeContext | None = None,
    ) -> MediaTypeContext | None:
        """An id wins over inline hints.

        Raises:
            NotFoundError: If `media_type_id` names no stored MediaType
        """
        if not media_type_id:
            return inline

        definition = self.media_types.get(media_type_id=media_type_id)
        if definition is None:
            logger.warning(
                "MediaType for suggestion not found",
                extra={"media_type_id": media_type_id},
            )
            raise NotFoundError(
                message=f"MediaType with id {media_type_id} not found",
                details={"media_type_id": media_type_id},
            )

        return definition.to_context()
