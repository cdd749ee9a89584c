"""Business logic for MediaType retrieval by id or by name."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_references import DynamoDBMediaReferences
from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.errors import NotFoundError
from core.models.media_type import MediaTypeDefinition
from core.repositories.media_reference_repository import MediaReferenceRepository
from core.repositories.media_type_repository import MediaTypeRepository
from core.schema.validation import normalize_name

logger = Logger(UTC=True)


class GetMediaTypeService:
    def __init__(
        self,
        media_types: MediaTypeRepository | None = None,
        references: MediaReferenceRepository | None = None,
    ) -> None:
        self.media_types = media_types or DynamoDBMediaTypes()
        self.references = references or DynamoDBMediaReferences()

    def get_media_type(self, media_type_id: str) -> MediaTypeDefinition:
        """Fetch a MediaType by id.

        Raises:
            NotFoundError: If no MediaType has this id
        """
        definition = self.media_types.get(media_type_id=media_type_id)
        if definition is None:
            logger.warning("MediaType not found", extra={"media_type_id": media_type_id})
            raise NotFoundError(
                message=f"MediaType with id {media_type_id} not found",
                details={"media_type_id": media_type_id},
            )
        return definition

    def get_media_type_by_name(self, name: str) -> MediaTypeDefinition:
        """Fetch a MediaType by name, ignoring case and surrounding whitespace.

        Raises:
            NotFoundError: If no MediaType has this name
        """
        key = normalize_name(name)
        for definition in self.media_types.list_all():
            if normalize_name(definition.name) == key:
                return definition

        logger.warning("MediaType not found by name", extra={"media_type_name": name})
        raise NotFoundError(
            message=f'MediaType with name "{name.strip()}" not found',
            details={"name": name},
        )

    def usage_count(self, media_type_id: str) -> int:
        return self.references.count_references(media_type_id=media_type_id)
