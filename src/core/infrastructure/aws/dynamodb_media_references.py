"""DynamoDB-backed implementation of MediaReferenceRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError
from core.repositories.media_reference_repository import MediaReferenceRepository
from core.utils.constants import (
    ENV_MEDIA_TABLE_NAME,
    ERROR_CODE_MEDIA_REFERENCE_COUNT_FAILED,
    MEDIA_TYPE_REFERENCE_INDEX,
)

logger = Logger(UTC=True)

REFERENCE_ATTRIBUTE = "custom_media_type_id"


class DynamoDBMediaReferences(MediaReferenceRepository):
    """Counts media items through the `media-type-index` GSI.

    BEHAVIOR ON ERROR:
    - A failed count raises instead of reporting zero (fail-closed), so a
      delete is never allowed on the strength of a broken lookup.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(ENV_MEDIA_TABLE_NAME)

    def count_references(self, *, media_type_id: str) -> int:
        query_kwargs: dict[str, Any] = {
            "IndexName": MEDIA_TYPE_REFERENCE_INDEX,
            "KeyConditionExpression": Key(REFERENCE_ATTRIBUTE).eq(media_type_id),
            "Select": "COUNT",
        }
        total = 0

        try:
            while True:
                response = self._db.query(**query_kwargs)
                total += int(response.get("Count", 0))

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except ClientError as exc:
            logger.error("DynamoDB reference count failed", extra={"media_type_id": media_type_id})
            raise DynamoDBError(
                message="Unable to verify MediaType usage",
                error_code=ERROR_CODE_MEDIA_REFERENCE_COUNT_FAILED,
                details={"media_type_id": media_type_id},
            ) from exc

        logger.debug(
            "MediaType reference count completed",
            extra={"media_type_id": media_type_id, "count": total},
        )
        return total
