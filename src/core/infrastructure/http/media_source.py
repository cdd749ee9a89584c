"""Downloads media by URL from allow-listed hosts only."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

import requests
from aws_lambda_powertools import Logger

from core.config import MediaSourceSettings
from core.models.errors import ForbiddenSourceError, MediaFetchError
from core.utils.constants import format_file_size
from core.utils.mime import DEFAULT_MIME_TYPE, detect_mime_type, normalize_mime_type

logger = Logger(UTC=True)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class FetchedMedia:
    data: bytes
    mime_type: str
    filename: str


def is_allowed_host(host: str, allowed_hosts: tuple[str, ...]) -> bool:
    """Exact match or subdomain of an allowed host."""
    host = host.lower().rstrip(".")
    return any(host == allowed or host.endswith(f".{allowed}") for allowed in allowed_hosts)


class MediaSourceFetcher:
    """Fetches media for suggestion-from-URL requests.

    URL checks happen before any network traffic; a rejected URL raises
    `ForbiddenSourceError`. Redirects are not followed.
    """

    def __init__(
        self,
        settings: MediaSourceSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or MediaSourceSettings.from_env()
        self._session = session or requests.Session()

    def ensure_allowed(self, url: str) -> str:
        """Validate `url` and return its host.

        Raises:
            ForbiddenSourceError: If the scheme is not https or the host is
                not allow-listed
        """
        parsed = urlparse(url)
        host = parsed.hostname or ""

        if parsed.scheme != "https":
            raise ForbiddenSourceError(
                message="Media URL must use https",
                details={"url": url},
            )

        if not host or not is_allowed_host(host, self._settings.allowed_hosts):
            logger.warning("Rejected media URL host", extra={"host": host})
            raise ForbiddenSourceError(
                message=f"Media host '{host}' is not allowed",
                details={"host": host},
            )

        return host

    def fetch(self, url: str) -> FetchedMedia:
        """Download the media at `url`.

        Raises:
            ForbiddenSourceError: If the URL is not allowed
            MediaFetchError: If the download fails or exceeds the size limit
        """
        host = self.ensure_allowed(url)
        max_bytes = self._settings.max_bytes

        logger.debug("Fetching media", extra={"host": host})

        try:
            with self._session.get(
                url,
                stream=True,
                timeout=self._settings.timeout_seconds,
                allow_redirects=False,
            ) as response:
                if response.status_code != 200:
                    raise MediaFetchError(
                        message=f"Unable to fetch media (HTTP {response.status_code})",
                        details={"host": host, "status_code": response.status_code},
                    )

                declared = response.headers.get("Content-Length")
                if declared and declared.isdigit() and int(declared) > max_bytes:
                    raise self._too_large(host, max_bytes)

                chunks: list[bytes] = []
                received = 0
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    received += len(chunk)
                    if received > max_bytes:
                        raise self._too_large(host, max_bytes)
                    chunks.append(chunk)

                content_type = normalize_mime_type(response.headers.get("Content-Type"))

        except requests.RequestException as exc:
            logger.error("Media fetch failed", extra={"host": host, "error_type": type(exc).__name__})
            raise MediaFetchError(
                message="Unable to fetch media",
                details={"host": host},
            ) from exc

        data = b"".join(chunks)
        if not data:
            raise MediaFetchError(message="Fetched media is empty", details={"host": host})

        filename = PurePosixPath(unquote(urlparse(url).path)).name or "media"
        if not content_type or content_type == DEFAULT_MIME_TYPE:
            content_type = detect_mime_type(data)
        mime_type = content_type

        logger.info(
            "Media fetched",
            extra={"host": host, "size": len(data), "mime_type": mime_type},
        )
        return FetchedMedia(data=data, mime_type=mime_type, filename=filename)

    @staticmethod
    def _too_large(host: str, max_bytes: int) -> MediaFetchError:
        return MediaFetchError(
            message=f"Media file exceeds {format_file_size(max_bytes)} limit",
            details={"host": host, "max_bytes": max_bytes},
        )
