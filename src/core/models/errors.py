"""Custom exception classes for the media library service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FORBIDDEN_SOURCE,
    ERROR_CODE_INFERENCE_AUTH,
    ERROR_CODE_INFERENCE_CALL_FAILED,
    ERROR_CODE_INFERENCE_MODEL_UNAVAILABLE,
    ERROR_CODE_INFERENCE_PAYLOAD_TOO_LARGE,
    ERROR_CODE_INFERENCE_QUOTA,
    ERROR_CODE_MEDIA_FETCH_FAILED,
    ERROR_CODE_MEDIA_TYPE_IN_USE,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_SCHEMA_VALIDATION_FAILED,
    ERROR_CODE_SUGGESTION_PARSE_FAILED,
)


class MediaLibraryError(Exception):
    """
    Base exception for all media library errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class _DefaultCodeError(MediaLibraryError):
    """Base for errors that carry a fixed default error code."""

    default_error_code: str = ""

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code or self.default_error_code,
            details=details,
        )


class ConfigurationError(_DefaultCodeError):
    """Raised when a required setting or credential is missing."""

    default_error_code = ERROR_CODE_CONFIGURATION


class SchemaValidationError(_DefaultCodeError):
    """Raised when a MediaType definition violates a schema rule.

    `details["field"]` names the offending field or constraint.
    """

    default_error_code = ERROR_CODE_SCHEMA_VALIDATION_FAILED


class NotFoundError(_DefaultCodeError):
    """Raised when a requested resource is not found."""

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class ReferentialIntegrityError(_DefaultCodeError):
    """Raised when a delete is blocked by live references."""

    default_error_code = ERROR_CODE_MEDIA_TYPE_IN_USE


class ForbiddenSourceError(_DefaultCodeError):
    """Raised when a media URL points outside the allowed hosts."""

    default_error_code = ERROR_CODE_FORBIDDEN_SOURCE


class MediaFetchError(_DefaultCodeError):
    """Raised when an allowed media URL cannot be downloaded."""

    default_error_code = ERROR_CODE_MEDIA_FETCH_FAILED


class SuggestionParseError(_DefaultCodeError):
    """Raised when the inference reply cannot be parsed, even after repair."""

    default_error_code = ERROR_CODE_SUGGESTION_PARSE_FAILED


class InferenceCallError(_DefaultCodeError):
    """Raised when the inference service call fails for any reason."""

    default_error_code = ERROR_CODE_INFERENCE_CALL_FAILED


class InferenceError(_DefaultCodeError):
    """Base for classified inference failures surfaced to the caller."""


class AuthError(InferenceError):
    """The inference service rejected the credential."""

    default_error_code = ERROR_CODE_INFERENCE_AUTH


class QuotaError(InferenceError):
    """The inference quota or rate limit was exceeded."""

    default_error_code = ERROR_CODE_INFERENCE_QUOTA


class PayloadTooLargeError(InferenceError):
    """The media payload is too large for the inference service."""

    default_error_code = ERROR_CODE_INFERENCE_PAYLOAD_TOO_LARGE


class ModelUnavailableError(InferenceError):
    """The configured inference model does not exist or is unavailable."""

    default_error_code = ERROR_CODE_INFERENCE_MODEL_UNAVAILABLE


class DynamoDBError(_DefaultCodeError):
    """Raised when a DynamoDB operation fails."""

    default_error_code = ERROR_CODE_DYNAMODB
