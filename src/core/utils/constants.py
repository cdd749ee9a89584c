"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Integrity Errors
ERROR_CODE_MEDIA_TYPE_IN_USE = "MEDIA_TYPE_IN_USE"

# Configuration Errors
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"

# Media Source Errors
ERROR_CODE_FORBIDDEN_SOURCE = "FORBIDDEN_SOURCE"
ERROR_CODE_MEDIA_FETCH_FAILED = "MEDIA_FETCH_FAILED"

# Suggestion / Inference Errors
ERROR_CODE_SUGGESTION_PARSE_FAILED = "SUGGESTION_PARSE_FAILED"
ERROR_CODE_INFERENCE_CALL_FAILED = "INFERENCE_CALL_FAILED"
ERROR_CODE_INFERENCE_AUTH = "INFERENCE_AUTH_FAILED"
ERROR_CODE_INFERENCE_QUOTA = "INFERENCE_QUOTA_EXCEEDED"
ERROR_CODE_INFERENCE_PAYLOAD_TOO_LARGE = "INFERENCE_PAYLOAD_TOO_LARGE"
ERROR_CODE_INFERENCE_MODEL_UNAVAILABLE = "INFERENCE_MODEL_UNAVAILABLE"

# Metadata / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_MEDIA_TYPE_CREATE_FAILED = "MEDIA_TYPE_CREATE_FAILED"
ERROR_CODE_MEDIA_TYPE_UPDATE_FAILED = "MEDIA_TYPE_UPDATE_FAILED"
ERROR_CODE_MEDIA_TYPE_FETCH_FAILED = "MEDIA_TYPE_FETCH_FAILED"
ERROR_CODE_MEDIA_TYPE_DELETE_FAILED = "MEDIA_TYPE_DELETE_FAILED"
ERROR_CODE_MEDIA_TYPE_LIST_FAILED = "MEDIA_TYPE_LIST_FAILED"
ERROR_CODE_MEDIA_REFERENCE_COUNT_FAILED = "MEDIA_REFERENCE_COUNT_FAILED"


# ============================================================================
# MediaType Schema Constraints
# ============================================================================

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"
MEDIA_TYPE_NAME_MAX_LENGTH = 100
MEDIA_TYPE_ID_PREFIX = "mt_"

# Label/value pairs offered by the aspect ratio picker. "None" unlinks
# width and height.
COMMON_ASPECT_RATIOS: Final[tuple[tuple[str, float | None], ...]] = (
    ("None", None),
    ("1:1", 1.0),
    ("4:3", 4 / 3),
    ("3:2", 3 / 2),
    ("16:9", 16 / 9),
    ("21:9", 21 / 9),
    ("4:1", 4.0),
)

DEFAULT_MIN_DIMENSION = 800


# ============================================================================
# Suggestion / Inference Settings
# ============================================================================

DEFAULT_INFERENCE_MODEL = "gemini-2.5-flash"
DEFAULT_INFERENCE_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_INFERENCE_TEMPERATURE = 0.7
DEFAULT_INFERENCE_MAX_OUTPUT_TOKENS = 2048
DEFAULT_INFERENCE_TIMEOUT_SECONDS = 60

SUGGESTION_TITLE_MAX_LENGTH = 60
SUGGESTION_ALT_TEXT_MAX_WORDS = 10
SUGGESTION_MIN_TAGS = 3
SUGGESTION_MAX_TAGS = 5

UNTITLED_MEDIA_TITLE = "Untitled Media"

# Lowercased substrings used to classify inference failures.
INFERENCE_AUTH_MARKERS: Final[tuple[str, ...]] = ("api key", "authentication")
INFERENCE_QUOTA_MARKERS: Final[tuple[str, ...]] = ("quota", "rate limit")
INFERENCE_PAYLOAD_MARKERS: Final[tuple[str, ...]] = ("size", "too large")
INFERENCE_MODEL_MARKERS: Final[tuple[str, ...]] = ("not found", "404")

MAX_INFERENCE_FILE_SIZE = 20 * 1024 * 1024  # 20MB in bytes


# ============================================================================
# Media Source Fetch
# ============================================================================

DEFAULT_ALLOWED_MEDIA_HOSTS: Final[tuple[str, ...]] = ("res.cloudinary.com",)
MEDIA_FETCH_TIMEOUT_SECONDS = 30


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

METRICS_NAMESPACE = "MediaLibrary"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_MEDIA_TYPES_TABLE_NAME = "MEDIA_TYPES_TABLE_NAME"
ENV_MEDIA_TABLE_NAME = "MEDIA_TABLE_NAME"
ENV_GEMINI_API_KEY = "GEMINI_API_KEY"
ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_ENDPOINT = "GEMINI_ENDPOINT"
ENV_GEMINI_TIMEOUT_SECONDS = "GEMINI_TIMEOUT_SECONDS"
ENV_ALLOWED_MEDIA_HOSTS = "ALLOWED_MEDIA_HOSTS"
ENV_MAX_MEDIA_FETCH_BYTES = "MAX_MEDIA_FETCH_BYTES"

# ============================================================================
# DynamoDB Index Names
# ============================================================================

MEDIA_TYPE_REFERENCE_INDEX = "media-type-index"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum inference file size in megabytes."""
    return MAX_INFERENCE_FILE_SIZE // (1024 * 1024)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
