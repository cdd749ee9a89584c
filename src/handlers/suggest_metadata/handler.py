"""
Lambda handler responsible for AI metadata suggestions on an uploaded file.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ConfigurationError, InferenceError, NotFoundError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, sanitize_validation_errors, validate_request

from .models import SuggestMetadataRequest, SuggestMetadataResponse
from .service import SuggestMetadataService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle metadata suggestion requests.

    Expected body (camelCase):
    {
        "file": "<base64>",
        "filename": "summer-sale.png",
        "mimeType": "image/png",          # optional
        "mediaTypeId": "mt_...",          # optional
        "mediaType": {"name": "..."}      # optional, inline hints
    }

    Returns:
        200 with the suggestion and `aiGenerated`. Classified inference
        failures map to 500/429/413/503; a missing API key maps to 500.
    """
    logger.info(
        "Received metadata suggestion request",
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
        request = validate_request(SuggestMetadataRequest, body)
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
        service = SuggestMetadataService()
        result = service.suggest_metadata(
            data=request.decoded_file(),
            filename=request.filename,
            mime_type=request.mime_type,
            media_type_id=request.media_type_id,
            media_type=request.media_type,
        )

    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message)

    except (ConfigurationError, InferenceError) as exc:
        logger.exception(
            "Metadata suggestion failed",
            extra={"error_code": exc.error_code, "file_name": request.filename},
        )
        metrics.add_metric(name="SuggestionFailed", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.domain_error(exc)

    if result.ai_generated:
        metrics.add_metric(name="SuggestionGenerated", unit=MetricUnit.Count, value=1)
    else:
        metrics.add_metric(name="SuggestionFallback", unit=MetricUnit.Count, value=1)

    response = SuggestMetadataResponse(
        suggestion=result.suggestion.to_payload(),
        ai_generated=result.ai_generated,
        state=result.state.value,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
