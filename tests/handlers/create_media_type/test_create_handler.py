import json
from unittest.mock import patch

from core.models.errors import DynamoDBError
from handlers.create_media_type.handler import handler


class TestCreateMediaTypeHandler:
    def test_create_success(self, create_media_type_event, lambda_context, media_types_table) -> None:
        response = handler(create_media_type_event, lambda_context)

        assert response["statusCode"] == 201
        body = json.loads(response["body"])

        assert body["message"] == "MediaType created successfully"
        media_type = body["mediaType"]
        assert media_type["id"].startswith("mt_")
        assert media_type["name"] == "Product Shot"
        assert media_type["allowedFormats"] == [".jpg", ".png"]
        assert media_type["fields"][0]["validationRegex"] == "^[A-Z]{3}-\\d{4}$"
        assert media_type["createdAt"]
        assert media_type["updatedAt"] is None

        stored = media_types_table.get_item(Key={"media_type_id": media_type["id"]})
        assert stored["Item"]["name"] == "Product Shot"

    def test_duplicate_name_ignoring_case_and_whitespace(
        self,
        sample_media_type_payload,
        lambda_context,
        media_types_table,
    ) -> None:
        first = handler({"body": json.dumps(sample_media_type_payload)}, lambda_context)
        assert first["statusCode"] == 201

        duplicate = {**sample_media_type_payload, "name": "  product SHOT "}
        response = handler({"body": json.dumps(duplicate)}, lambda_context)

        assert response["statusCode"] == 422
        body = json.loads(response["body"])
        assert body["error"] == "SCHEMA_VALIDATION_FAILED"
        assert body["details"]["field"] == "name"
        assert len(media_types_table.scan()["Items"]) == 1

    def test_duplicate_field_names_rejected(
        self,
        sample_media_type_payload,
        lambda_context,
        media_types_table,
    ) -> None:
        payload = dict(sample_media_type_payload)
        payload["fields"] = [
            {"id": "1", "name": "sku", "label": "SKU", "type": "text"},
            {"id": "2", "name": "sku", "label": "SKU 2", "type": "text"},
        ]

        response = handler({"body": json.dumps(payload)}, lambda_context)

        assert response["statusCode"] == 422
        assert json.loads(response["body"])["details"]["field"] == "fields[1].name"
        assert media_types_table.scan()["Items"] == []

    def test_invalid_color_rejected(
        self,
        sample_media_type_payload,
        lambda_context,
        media_types_table,
    ) -> None:
        payload = {**sample_media_type_payload, "color": "blue"}

        response = handler({"body": json.dumps(payload)}, lambda_context)

        assert response["statusCode"] == 422
        assert json.loads(response["body"])["details"]["field"] == "color"

    def test_missing_required_attribute(self, lambda_context) -> None:
        response = handler({"body": json.dumps({"name": "No color"})}, lambda_context)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        fields = {error["field"] for error in body["details"]["errors"]}
        assert {"color", "allowedFormats"} <= fields

    def test_invalid_json_body(self, lambda_context) -> None:
        response = handler({"body": "{oops"}, lambda_context)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["message"] == "Invalid JSON body"

    def test_storage_failure(
        self,
        create_media_type_event,
        lambda_context,
        media_types_table,
    ) -> None:
        with patch(
            "handlers.create_media_type.service.CreateMediaTypeService.create_media_type",
            side_effect=DynamoDBError(message="Unable to save MediaType at this time"),
        ):
            response = handler(create_media_type_event, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["message"] == "Unable to save MediaType at this time"
