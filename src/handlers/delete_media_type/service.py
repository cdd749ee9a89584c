"""Business logic for MediaType deletion.

A MediaType is removed only when no media item references it. The
reference count is taken from the media table; a failed count blocks the
delete.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_references import DynamoDBMediaReferences
from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.errors import NotFoundError, ReferentialIntegrityError
from core.repositories.media_reference_repository import MediaReferenceRepository
from core.repositories.media_type_repository import MediaTypeRepository
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteMediaTypeService:
    """Application service responsible for deleting MediaTypes.

    This service orchestrates:
    - Validation that the MediaType exists
    - The referential check against the media store
    - Removal of the definition
    """

    def __init__(
        self,
        media_types: MediaTypeRepository | None = None,
        references: MediaReferenceRepository | None = None,
    ) -> None:
        self.media_types = media_types or DynamoDBMediaTypes()
        self.references = references or DynamoDBMediaReferences()

    def delete_media_type(self, media_type_id: str) -> dict[str, Any]:
        """Delete a MediaType that no media item uses.

        Args:
            media_type_id: Unique identifier of the MediaType

        Returns:
            A dictionary containing deletion confirmation details

        Raises:
            NotFoundError: If the MediaType does not exist
            ReferentialIntegrityError: If at least one media item uses it
            DynamoDBError: If the lookup, count or delete fails
        """
        logger.debug("Starting MediaType deletion", extra={"media_type_id": media_type_id})

        current = self.media_types.get(media_type_id=media_type_id)
        if current is None:
            logger.warning("MediaType not found", extra={"media_type_id": media_type_id})
            raise NotFoundError(
                message=f"MediaType with id {media_type_id} not found",
                details={"media_type_id": media_type_id},
            )

        usage_count = self.references.count_references(media_type_id=media_type_id)
        if usage_count > 0:
            logger.info(
                "MediaType delete blocked by references",
                extra={"media_type_id": media_type_id, "usage_count": usage_count},
            )
            raise ReferentialIntegrityError(
                message=(
                    f'Cannot delete MediaType "{current.name}" because it is in use '
                    f"by {usage_count} media item(s)"
                ),
                details={"media_type_id": media_type_id, "usage_count": usage_count},
            )

        self.media_types.remove(media_type_id=media_type_id)

        logger.info("MediaType deleted successfully", extra={"media_type_id": media_type_id})

        return {
            "media_type_id": media_type_id,
            "name": current.name,
            "deleted_at": utc_now_iso(),
        }
