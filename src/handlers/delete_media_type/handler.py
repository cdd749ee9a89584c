"""
Lambda handler responsible for deleting a MediaType definition.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import (
    DynamoDBError,
    NotFoundError,
    ReferentialIntegrityError,
)
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteMediaTypeRequest, DeleteMediaTypeResponse
from .service import DeleteMediaTypeService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle MediaType deletion requests.

    This function:
    - Extracts the MediaType identifier from API Gateway path parameters
    - Delegates deletion to the service layer
    - Returns 409 when media items still reference the MediaType

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received MediaType delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteMediaTypeRequest,
            {"media_type_id": path_params.get("media_type_id")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = DeleteMediaTypeService()

    try:
        delete_result = service.delete_media_type(request.media_type_id)

    except NotFoundError:
        logger.exception(
            "MediaType not found during delete",
            extra={"media_type_id": request.media_type_id},
        )
        return ResponseBuilder.not_found(f"MediaType not found: {request.media_type_id}")

    except ReferentialIntegrityError as exc:
        logger.warning(
            "MediaType is still in use",
            extra={"media_type_id": request.media_type_id},
        )
        return ResponseBuilder.domain_error(exc)

    except DynamoDBError as exc:
        logger.exception(
            "Deletion failed",
            extra={"media_type_id": request.media_type_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    response = DeleteMediaTypeResponse(
        media_type_id=delete_result["media_type_id"],
        name=delete_result["name"],
        message="MediaType deleted successfully",
        deleted_at=delete_result["deleted_at"],
    )

    return ResponseBuilder.ok(response.model_dump())
