"""
Lambda handler responsible for creating a MediaType definition.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import DynamoDBError, SchemaValidationError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, sanitize_validation_errors, validate_request

from .models import CreateMediaTypeRequest, CreateMediaTypeResponse
from .service import CreateMediaTypeService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle MediaType creation requests.

    Expected API Gateway event structure:
    {
        "body": "{...}"    # JSON MediaType definition, camelCase keys
    }

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        201 with the stored definition, 422 when a schema rule fails
    """
    logger.info(
        "Received MediaType create request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    try:
        request = validate_request(CreateMediaTypeRequest, body)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        service = CreateMediaTypeService()
        definition = service.create_media_type(request)

    except SchemaValidationError as exc:
        logger.warning(
            "MediaType rejected by schema validation",
            extra={"field": exc.details.get("field"), "media_type_name": request.name},
        )
        return ResponseBuilder.domain_error(exc)

    except DynamoDBError as exc:
        logger.exception("Infrastructure error during MediaType creation")
        return ResponseBuilder.internal_error(exc.message)

    response = CreateMediaTypeResponse(
        media_type=definition.to_payload(),
        message="MediaType created successfully",
    )

    return ResponseBuilder.created(response.model_dump(by_alias=True))
