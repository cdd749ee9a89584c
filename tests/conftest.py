"""
Pytest configuration and fixtures for media library tests.
Provides AWS mocking and DynamoDB fixtures for the MediaTypes and media tables.
"""

import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("MEDIA_TYPES_TABLE_NAME", "media-types-test")
os.environ.setdefault("MEDIA_TABLE_NAME", "media-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "media-library-test")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "MediaLibraryTest")

MEDIA_TYPE_KEY = "media_type_id"
MEDIA_KEY = "media_id"


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


def _create_media_types_table(dynamodb_resource):
    return dynamodb_resource.create_table(
        TableName=os.getenv("MEDIA_TYPES_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": MEDIA_TYPE_KEY, "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": MEDIA_TYPE_KEY, "AttributeType": "S"}],
    )


def _create_media_table(dynamodb_resource):
    """Media items table with the GSI used for reference counts."""
    return dynamodb_resource.create_table(
        TableName=os.getenv("MEDIA_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": MEDIA_KEY, "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": MEDIA_KEY, "AttributeType": "S"},
            {"AttributeName": "custom_media_type_id", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "media-type-index",
                "KeySchema": [
                    {"AttributeName": "custom_media_type_id", "KeyType": "HASH"},
                ],
                "Projection": {"ProjectionType": "KEYS_ONLY"},
            },
        ],
    )


def _cleanup_items(table, key: str):
    """Helper to delete all items from a DynamoDB table."""
    try:
        scan_kwargs: dict[str, Any] = {"ProjectionExpression": key}
        while True:
            response = table.scan(**scan_kwargs)
            items = response.get("Items", [])
            if items:
                with table.batch_writer() as batch:
                    for item in items:
                        batch.delete_item(Key={key: item[key]})

            if "LastEvaluatedKey" not in response:
                break
            scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise


def _load_or_create(dynamodb_resource, table_name: str, create):
    try:
        table = dynamodb_resource.Table(table_name)
        table.load()
    except ClientError:
        table = create(dynamodb_resource)
        table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def media_types_table(dynamodb_resource):
    """
    Create and manage the MediaTypes table for testing.

    Items are deleted after each test; moto drops the table on context exit.
    """
    table = _load_or_create(
        dynamodb_resource,
        os.getenv("MEDIA_TYPES_TABLE_NAME"),
        _create_media_types_table,
    )

    yield table

    _cleanup_items(table, MEDIA_TYPE_KEY)


@pytest.fixture(scope="function")
def media_table(dynamodb_resource):
    """Create and manage the media items table for testing."""
    table = _load_or_create(
        dynamodb_resource,
        os.getenv("MEDIA_TABLE_NAME"),
        _create_media_table,
    )

    yield table

    _cleanup_items(table, MEDIA_KEY)


@pytest.fixture
def put_media_items(media_table) -> Callable[[str, int], list[dict[str, Any]]]:
    """
    Helper to insert media items referencing a MediaType.

    Usage:
        put_media_items("mt_abc", 3)
    """

    def _put(media_type_id: str, count: int) -> list[dict[str, Any]]:
        items = [
            {
                MEDIA_KEY: f"media_{media_type_id}_{index}",
                "custom_media_type_id": media_type_id,
                "filename": f"file_{index}.jpg",
            }
            for index in range(count)
        ]
        with media_table.batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)
        return items

    return _put


@pytest.fixture
def sample_media_type_payload() -> dict[str, Any]:
    """MediaType create payload as sent by the client (camelCase)."""
    return {
        "name": "Product Shot",
        "description": "Studio photos of products",
        "color": "#3b82f6",
        "allowedFormats": [".jpg", ".png"],
        "fields": [
            {
                "id": "f1",
                "name": "sku",
                "label": "SKU",
                "type": "text",
                "required": True,
                "validationRegex": "^[A-Z]{3}-\\d{4}$",
            },
            {
                "id": "f2",
                "name": "season",
                "label": "Season",
                "type": "select",
                "options": ["spring", "summer"],
            },
        ],
        "defaultTags": ["product", "studio"],
        "dimensionConstraint": {
            "enabled": True,
            "aspectRatio": {"label": "16:9", "value": 16 / 9},
            "minWidth": 1920,
            "minHeight": 1080,
        },
    }


@pytest.fixture
def sample_png_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)
