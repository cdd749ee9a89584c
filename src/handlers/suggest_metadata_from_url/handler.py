"""
Lambda handler responsible for AI metadata suggestions on media referenced by URL.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import (
    ConfigurationError,
    ForbiddenSourceError,
    InferenceError,
    MediaFetchError,
    NotFoundError,
)
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, sanitize_validation_errors, validate_request

from .models import SuggestMetadataFromUrlRequest, SuggestMetadataFromUrlResponse
from .service import SuggestMetadataFromUrlService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle metadata suggestion requests for media hosted on an allowed host.

    Args:
        event: API Gateway Lambda proxy event, JSON body with `url`
        context: AWS Lambda execution context

    Returns:
        200 with the suggestion, 403 for a disallowed URL, 502 when the
        media cannot be fetched
    """
    logger.info(
        "Received URL metadata suggestion request",
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
        request = validate_request(SuggestMetadataFromUrlRequest, body)
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
        service = SuggestMetadataFromUrlService()
        result = service.suggest_metadata_from_url(
            url=request.url,
            filename=request.filename,
            mime_type=request.mime_type,
            media_type_id=request.media_type_id,
            media_type=request.media_type,
        )

    except (ForbiddenSourceError, MediaFetchError) as exc:
        logger.warning(
            "Media source rejected or unavailable",
            extra={"error_code": exc.error_code},
        )
        return ResponseBuilder.domain_error(exc)

    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message)

    except (ConfigurationError, InferenceError) as exc:
        logger.exception(
            "Metadata suggestion failed",
            extra={"error_code": exc.error_code},
        )
        metrics.add_metric(name="SuggestionFailed", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.domain_error(exc)

    if result.ai_generated:
        metrics.add_metric(name="SuggestionGenerated", unit=MetricUnit.Count, value=1)
    else:
        metrics.add_metric(name="SuggestionFallback", unit=MetricUnit.Count, value=1)

    response = SuggestMetadataFromUrlResponse(
        suggestion=result.suggestion.to_payload(),
        ai_generated=result.ai_generated,
        state=result.state.value,
        source_url=request.url,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
