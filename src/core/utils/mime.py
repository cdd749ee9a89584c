from collections.abc import Mapping

from core.models.suggestion import MediaCategory

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"%PDF-": "application/pdf",
    b"\x1aE\xdf\xa3": "video/webm",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def normalize_mime_type(mime_type: str | None) -> str:
    """'Image/PNG; charset=binary' -> 'image/png'."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def classify_mime_type(mime_type: str | None) -> MediaCategory:
    normalized = normalize_mime_type(mime_type)

    if normalized.startswith("image/"):
        return MediaCategory.IMAGE
    if normalized.startswith("video/"):
        return MediaCategory.VIDEO
    return MediaCategory.OTHER


def detect_mime_type(file_data: bytes) -> str:
    """Sniff a MIME type from leading bytes, for sources that send none."""
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # RIFF containers and ISO media carry their brand a few bytes in.
    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"
    if file_data[4:8] == b"ftyp":
        if file_data[8:12] == b"avif":
            return "image/avif"
        return "video/quicktime" if file_data[8:10] == b"qt" else "video/mp4"

    return DEFAULT_MIME_TYPE
