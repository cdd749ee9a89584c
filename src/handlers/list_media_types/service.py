"""Business logic for listing MediaTypes."""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_media_references import DynamoDBMediaReferences
from core.infrastructure.aws.dynamodb_media_types import DynamoDBMediaTypes
from core.repositories.media_reference_repository import MediaReferenceRepository
from core.repositories.media_type_repository import MediaTypeRepository
from core.schema.validation import normalize_name

logger = Logger(UTC=True)


class ListMediaTypesService:
    """Lists MediaTypes ordered by name, optionally with usage counts."""

    def __init__(
        self,
        media_types: MediaTypeRepository | None = None,
        references: MediaReferenceRepository | None = None,
    ) -> None:
        self.media_types = media_types or DynamoDBMediaTypes()
        self._references = references

    @property
    def references(self) -> MediaReferenceRepository:
        # The media table is only needed when usage counts are requested
        if self._references is None:
            self._references = DynamoDBMediaReferences()
        return self._references

    def list_media_types(
        self,
        *,
        name_contains: str | None = None,
        include_usage: bool = True,
    ) -> list[dict[str, Any]]:
        """Return MediaType payloads sorted by name (case-insensitive).

        Each payload carries `usageCount` when `include_usage` is set.

        Raises:
            DynamoDBError: If listing or counting fails
        """
        definitions = self.media_types.list_all()

        if name_contains:
            needle = normalize_name(name_contains)
            definitions = [d for d in definitions if needle in normalize_name(d.name)]

        definitions = sorted(definitions, key=lambda d: (normalize_name(d.name), d.id))

        items: list[dict[str, Any]] = []
        for definition in definitions:
            payload = definition.to_payload()
            if include_usage:
                payload["usageCount"] = self.references.count_references(
                    media_type_id=definition.id
                )
            items.append(payload)

        logger.info(
            "MediaTypes listed",
            extra={"count": len(items), "include_usage": include_usage},
        )
        return items
