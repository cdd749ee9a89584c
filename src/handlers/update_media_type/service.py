"""Business logic for MediaType updates.

An update is a partial merge: the keys the caller sent are laid over the
stored record and the merged result is validated again in full, excluding
the record itself from the name uniqueness check.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.models.errors import NotFoundError
from core.models.media_type import MediaTypeDefinition, MediaTypeInput, MediaTypeUpdate
from core.repositories.media_type_repository import MediaTypeRepository
from core.schema.validation import validate_media_type
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)

# Attributes that may be cleared with an explicit null. A null for any other
# attribute leaves the stored value untouched.
CLEARABLE_ATTRIBUTES = frozenset({"description", "dimension_constraint"})


def merge_changes(current: MediaTypeDefinition, changes: dict[str, Any]) -> MediaTypeInput:
    """Lay `changes` over the editable attributes of `current`."""
    applied = {
        key: value
        for key, value in changes.items()
        if value is not None or key in CLEARABLE_ATTRIBUTES
    }
    base = current.model_dump(include=set(MediaTypeInput.model_fields))
    return MediaTypeInput.model_validate({**base, **applied})


class UpdateMediaTypeService:
    """Application service responsible for updating MediaTypes."""

    def __init__(self, media_types: MediaTypeRepository | None = None) -> None:
        self.media_types = media_types or DynamoDBMediaTypes()

    def update_media_type(
        self,
        media_type_id: str,
        update: MediaTypeUpdate,
    ) -> MediaTypeDefinition:
        """Apply a partial update to a stored MediaType.

        Raises:
            NotFoundError: If no MediaType has this id
            SchemaValidationError: If the merged definition breaks a rule;
                nothing is written
            DynamoDBError: If persistence fails
        """
        logger.debug("Starting MediaType update", extra={"media_type_id": media_type_id})

        current = self.media_types.get(media_type_id=media_type_id)
        if current is None:
            logger.warning("MediaType not found", extra={"media_type_id": media_type_id})
            raise NotFoundError(
                message=f"MediaType with id {media_type_id} not found",
                details={"media_type_id": media_type_id},
            )

        changes = update.changes()
        merged = merge_changes(current, changes)

        validated = validate_media_type(
            merged,
            self.media_types.list_all(),
            exclude_id=media_type_id,
        )

        # Persist only what the caller sent, as validated (name trimmed)
        validated_data = validated.model_dump(mode="json")
        stored_changes: dict[str, Any] = {
            key: validated_data[key] for key in changes if key in validated_data
        }
        stored_changes["updated_at"] = utc_now_iso()

        updated = self.media_types.patch(media_type_id=media_type_id, changes=stored_changes)

        logger.info(
            "MediaType updated successfully",
            extra={"media_type_id": media_type_id, "attributes": sorted(changes)},
        )
        return updated
