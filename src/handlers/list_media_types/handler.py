"""
Lambda handler for listing MediaType definitions.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import DynamoDBError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ListMediaTypesRequest, ListMediaTypesResponse
from .service import ListMediaTypesService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle list MediaTypes requests.

    Query parameters:
    - nameContains: optional case-insensitive name filter
    - includeUsage: "true" (default) or "false"
    """
    logger.info(
        "Received list MediaTypes request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    query_params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(ListMediaTypesRequest, query_params)
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid query parameters",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        service = ListMediaTypesService()
        items = service.list_media_types(
            name_contains=request.name_contains,
            include_usage=request.include_usage,
        )
    except DynamoDBError as exc:
        logger.exception("Failed to list MediaTypes")
        return ResponseBuilder.internal_error(exc.message)

    response = ListMediaTypesResponse(media_types=items, count=len(items))

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
