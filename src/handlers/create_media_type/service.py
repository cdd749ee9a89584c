"""Business logic for MediaType creation.

Validates a new definition against every stored definition and persists it
only when all rules pass.
"""

import uuid

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.media_type import MediaTypeDefinition, MediaTypeInput
from core.repositories.media_type_repository import MediaTypeRepository
from core.schema.validation import validate_media_type
from core.utils.constants import MEDIA_TYPE_ID_PREFIX
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class CreateMediaTypeService:
    """Application service responsible for creating MediaTypes."""

    def __init__(self, media_types: MediaTypeRepository | None = None) -> None:
        self.media_types = media_types or DynamoDBMediaTypes()

    @staticmethod
    def generate_media_type_id() -> str:
        """Generate a unique MediaType identifier."""
        return f"{MEDIA_TYPE_ID_PREFIX}{uuid.uuid4().hex}"

    def create_media_type(self, payload: MediaTypeInput) -> MediaTypeDefinition:
        """Validate and persist a new MediaType.

        Name uniqueness is checked against a scan of the current definitions,
        so two concurrent creates with the same name can both pass.

        Args:
            payload: Complete MediaType definition without id

        Returns:
            The stored definition (name trimmed, timestamps set)

        Raises:
            SchemaValidationError: If any rule is violated; nothing is stored
            DynamoDBError: If persistence fails
        """
        logger.debug("Starting MediaType creation", extra={"media_type_name": payload.name})

        validated = validate_media_type(payload, self.media_types.list_all())

        definition = MediaTypeDefinition.model_validate(
            {
                **validated.model_dump(),
                "id": self.generate_media_type_id(),
                "created_at": utc_now_iso(),
                "updated_at": None,
            }
        )

        stored = self.media_types.insert(definition=definition)

        logger.info(
            "MediaType created successfully",
            extra={"media_type_id": stored.id, "media_type_name": stored.name},
        )
        return stored
