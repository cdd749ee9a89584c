"""Time-related utilities.

MediaType records store `created_at` / `updated_at` as ISO-8601 strings in
UTC, which sort lexicographically in DynamoDB.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()
