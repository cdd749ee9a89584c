"""DynamoDB-backed implementation of MediaTypeRepository."""

import json
from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError, NotFoundError
from core.models.media_type import MediaTypeDefinition
from core.repositories.media_type_repository import MediaTypeRepository
from core.utils.constants import (
    ENV_MEDIA_TYPES_TABLE_NAME,
    ERROR_CODE_MEDIA_TYPE_CREATE_FAILED,
    ERROR_CODE_MEDIA_TYPE_DELETE_FAILED,
    ERROR_CODE_MEDIA_TYPE_FETCH_FAILED,
    ERROR_CODE_MEDIA_TYPE_LIST_FAILED,
    ERROR_CODE_MEDIA_TYPE_UPDATE_FAILED,
)

Item = dict[str, Any]

logger = Logger(UTC=True)

PARTITION_KEY = "media_type_id"


def to_dynamo(value: Any) -> Any:
    """boto3 rejects floats; round-trip through JSON to get Decimals."""
    return json.loads(json.dumps(value), parse_float=Decimal)


def from_dynamo(value: Any) -> Any:
    """Turn Decimals back into int or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


def definition_to_item(definition: MediaTypeDefinition) -> Item:
    data = definition.model_dump(mode="json", exclude_none=True)
    data[PARTITION_KEY] = data.pop("id")
    return to_dynamo(data)


def item_to_definition(item: Item) -> MediaTypeDefinition:
    data = from_dynamo(dict(item))
    data["id"] = data.pop(PARTITION_KEY)
    return MediaTypeDefinition.model_validate(data)


def build_update_expression(changes: dict[str, Any]) -> tuple[dict[str, str], Item, str]:
    """SET the given values; None removes the attribute instead of storing NULL."""
    names: dict[str, str] = {}
    values: Item = {}
    assignments: list[str] = []
    removals: list[str] = []
    for index, (attribute, value) in enumerate(changes.items()):
        names[f"#f{index}"] = attribute
        if value is None:
            removals.append(f"#f{index}")
            continue
        values[f":v{index}"] = to_dynamo(value)
        assignments.append(f"#f{index} = :v{index}")

    clauses = []
    if assignments:
        clauses.append("SET " + ", ".join(assignments))
    if removals:
        clauses.append("REMOVE " + ", ".join(removals))
    return names, values, " ".join(clauses)


class DynamoDBMediaTypes(MediaTypeRepository):
    """DynamoDB-backed MediaType storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(ENV_MEDIA_TYPES_TABLE_NAME)

    def insert(self, *, definition: MediaTypeDefinition) -> MediaTypeDefinition:
        logger.debug("Creating MediaType", extra={"media_type_id": definition.id})

        try:
            self._db.put_item(
                item=definition_to_item(definition),
                condition_expression=f"attribute_not_exists({PARTITION_KEY})",
            )
        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"media_type_id": definition.id})
            raise DynamoDBError(
                message="Unable to save MediaType at this time",
                error_code=ERROR_CODE_MEDIA_TYPE_CREATE_FAILED,
                details={"media_type_id": definition.id},
            ) from exc

        logger.info("MediaType created", extra={"media_type_id": definition.id})
        return definition

    def patch(self, *, media_type_id: str, changes: dict[str, Any]) -> MediaTypeDefinition:
        if not changes:
            current = self.get(media_type_id=media_type_id)
            if current is None:
                raise NotFoundError(
                    message=f"MediaType with id {media_type_id} not found",
                    details={"media_type_id": media_type_id},
                )
            return current

        names, values, update_expression = build_update_expression(changes)

        logger.debug(
            "Updating MediaType",
            extra={"media_type_id": media_type_id, "attributes": sorted(changes)},
        )

        try:
            response = self._db.update_item(
                key={PARTITION_KEY: media_type_id},
                UpdateExpression=update_expression,
                ConditionExpression=f"attribute_exists({PARTITION_KEY})",
                ExpressionAttributeNames=names,
                ReturnValues="ALL_NEW",
                **({"ExpressionAttributeValues": values} if values else {}),
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise NotFoundError(
                    message=f"MediaType with id {media_type_id} not found",
                    details={"media_type_id": media_type_id},
                ) from exc

            logger.error("DynamoDB update_item failed", extra={"media_type_id": media_type_id})
            raise DynamoDBError(
                message="Unable to update MediaType at this time",
                error_code=ERROR_CODE_MEDIA_TYPE_UPDATE_FAILED,
                details={"media_type_id": media_type_id},
            ) from exc

        logger.info("MediaType updated", extra={"media_type_id": media_type_id})
        return item_to_definition(response["Attributes"])

    def get(self, *, media_type_id: str) -> MediaTypeDefinition | None:
        logger.debug("Fetching MediaType", extra={"media_type_id": media_type_id})

        try:
            response = self._db.get_item(key={PARTITION_KEY: media_type_id})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"media_type_id": media_type_id})
            raise DynamoDBError(
                message="Unable to retrieve MediaType",
                error_code=ERROR_CODE_MEDIA_TYPE_FETCH_FAILED,
                details={"media_type_id": media_type_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        try:
            return item_to_definition(item)
        except PydanticValidationError as exc:
            logger.exception("Stored MediaType has an invalid format")
            raise DynamoDBError(
                message="Invalid MediaType record format",
                error_code=ERROR_CODE_MEDIA_TYPE_FETCH_FAILED,
                details={"media_type_id": media_type_id},
            ) from exc

    def list_all(self) -> list[MediaTypeDefinition]:
        items: list[Item] = []
        scan_kwargs: dict[str, Any] = {}

        try:
            while True:
                response = self._db.scan(**scan_kwargs)
                items.extend(response.get("Items", []))

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

            definitions = [item_to_definition(item) for item in items]

        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise DynamoDBError(
                message="Unable to list MediaTypes",
                error_code=ERROR_CODE_MEDIA_TYPE_LIST_FAILED,
            ) from exc

        except PydanticValidationError as exc:
            logger.exception("Stored MediaType has an invalid format")
            raise DynamoDBError(
                message="Invalid MediaType record format",
                error_code=ERROR_CODE_MEDIA_TYPE_LIST_FAILED,
            ) from exc

        logger.debug("MediaTypes listed", extra={"count": len(definitions)})
        return definitions

    def remove(self, *, media_type_id: str) -> None:
        logger.debug("Removing MediaType", extra={"media_type_id": media_type_id})

        try:
            self._db.delete_item(key={PARTITION_KEY: media_type_id})
        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"media_type_id": media_type_id})
            raise DynamoDBError(
                message="Unable to delete MediaType",
                error_code=ERROR_CODE_MEDIA_TYPE_DELETE_FAILED,
                details={"media_type_id": media_type_id},
            ) from exc

        logger.info("MediaType removed", extra={"media_type_id": media_type_id})
