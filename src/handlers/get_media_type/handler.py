"""
Lambda handler responsible for retrieving a single MediaType.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import DynamoDBError, NotFoundError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetMediaTypeRequest, GetMediaTypeResponse
from .service import GetMediaTypeService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle MediaType retrieval by `pathParameters.media_type_id` or by the
    `name` query string parameter.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with the definition and its
        usage count
    """
    logger.info(
        "Received MediaType get request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(
            GetMediaTypeRequest,
            {
                "media_type_id": path_params.get("media_type_id"),
                "name": query_params.get("name"),
            },
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = GetMediaTypeService()

    try:
        if request.media_type_id:
            definition = service.get_media_type(request.media_type_id)
        else:
            definition = service.get_media_type_by_name(request.name or "")

        usage_count = service.usage_count(definition.id)

    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message)

    except DynamoDBError as exc:
        logger.exception(
            "Failed to retrieve MediaType",
            extra={"media_type_id": request.media_type_id, "media_type_name": request.name},
        )
        return ResponseBuilder.internal_error(exc.message)

    response = GetMediaTypeResponse(
        media_type=definition.to_payload(),
        usage_count=usage_count,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
