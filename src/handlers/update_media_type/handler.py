"""
Lambda handler responsible for partially updating a MediaType definition.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import DynamoDBError, NotFoundError, SchemaValidationError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, sanitize_validation_errors, validate_request

from .models import UpdateMediaTypePath, UpdateMediaTypeRequest, UpdateMediaTypeResponse
from .service import UpdateMediaTypeService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle MediaType update requests.

    The MediaType id comes from `pathParameters.media_type_id`; the body
    holds only the attributes to change.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with the updated definition
    """
    logger.info(
        "Received MediaType update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    try:
        path = validate_request(
            UpdateMediaTypePath,
            {"media_type_id": path_params.get("media_type_id")},
        )
        request = validate_request(UpdateMediaTypeRequest, body)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = UpdateMediaTypeService()

    try:
        definition = service.update_media_type(path.media_type_id, request)

    except NotFoundError:
        logger.exception(
            "MediaType not found during update",
            extra={"media_type_id": path.media_type_id},
        )
        return ResponseBuilder.not_found(f"MediaType not found: {path.media_type_id}")

    except SchemaValidationError as exc:
        logger.warning(
            "MediaType update rejected by schema validation",
            extra={"media_type_id": path.media_type_id, "field": exc.details.get("field")},
        )
        return ResponseBuilder.domain_error(exc)

    except DynamoDBError as exc:
        logger.exception(
            "Infrastructure error during MediaType update",
            extra={"media_type_id": path.media_type_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    response = UpdateMediaTypeResponse(
        media_type=definition.to_payload(),
        message="MediaType updated successfully",
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
