"""Maps inference failures onto user-facing error classes.

Only error responses from the service are classified, by message content,
checked in a fixed order so each message maps to exactly one class.
Transport failures and anything else stay unclassified.
"""

from core.models.errors import (
    AuthError,
    InferenceCallError,
    InferenceError,
    ModelUnavailableError,
    PayloadTooLargeError,
    QuotaError,
)
from core.utils.constants import (
    ENV_GEMINI_API_KEY,
    INFERENCE_AUTH_MARKERS,
    INFERENCE_MODEL_MARKERS,
    INFERENCE_PAYLOAD_MARKERS,
    INFERENCE_QUOTA_MARKERS,
    get_max_file_size_mb,
)

_RULES: tuple[tuple[tuple[str, ...], type[InferenceError], str], ...] = (
    (
        INFERENCE_AUTH_MARKERS,
        AuthError,
        f"Invalid inference API key. Please check your {ENV_GEMINI_API_KEY} environment variable.",
    ),
    (
        INFERENCE_QUOTA_MARKERS,
        QuotaError,
        "Inference API quota exceeded. Please try again later.",
    ),
    (
        INFERENCE_PAYLOAD_MARKERS,
        PayloadTooLargeError,
        f"File is too large for AI analysis. Maximum size is {get_max_file_size_mb()}MB.",
    ),
    (
        INFERENCE_MODEL_MARKERS,
        ModelUnavailableError,
        "Inference model not available. Please check the configured model name.",
    ),
)


def classify_inference_failure(exc: BaseException) -> InferenceError | None:
    """Return the classified error for `exc`, or None when unclassified."""
    if not isinstance(exc, InferenceCallError) or "status_code" not in exc.details:
        return None

    text = str(exc).lower()

    for markers, error_cls, message in _RULES:
        if any(marker in text for marker in markers):
            return error_cls(message=message, details={"cause": str(exc)})

    return None
