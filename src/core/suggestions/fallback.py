"""Deterministic, filename-derived suggestions.

Used for media the inference service cannot analyze and whenever an
inference attempt fails with an unclassified error.
"""

import re
from pathlib import PurePath

from core.models.suggestion import Suggestion
from core.utils.constants import UNTITLED_MEDIA_TITLE

_WORD_START_RE = re.compile(r"\b\w")


def title_from_filename(filename: str) -> str:
    """'summer-sale_banner.png' -> 'Summer Sale Banner'."""
    stem = PurePath(filename).name
    if "." in stem:
        stem = stem[: stem.rindex(".")]

    spaced = stem.replace("-", " ").replace("_", " ")
    return _WORD_START_RE.sub(lambda match: match.group(0).upper(), spaced)


def filename_suggestion(
    filename: str,
    mime_type: str,
    default_tags: list[str] | None = None,
) -> Suggestion:
    title = title_from_filename(filename) or UNTITLED_MEDIA_TITLE
    subtype = mime_type.split("/", 1)[1] if "/" in mime_type else ""

    return Suggestion(
        title=title,
        description=f"A {subtype or 'file'} file.",
        alt_text=f"{title} file",
        tags=list(default_tags) if default_tags else None,
    )
