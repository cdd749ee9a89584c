"""Parsing of inference replies into `Suggestion` records.

The reply is expected to hold one JSON object but may be wrapped in prose or
cut off when the model hits its output limit. A reply falls into one of three
cases:

- well formed: the extracted object parses as-is;
- truncated: it does not end with ``}``; a dangling string is closed and
  missing braces appended, then parsing is retried once;
- malformed: it ends with ``}`` but still does not parse. No repair is
  attempted and `SuggestionParseError` is raised.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import SuggestionParseError
from core.models.suggestion import Suggestion

logger = Logger(UTC=True)

_TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("description", "description"),
    ("altText", "alt_text"),
)


class ParseOutcome(str, Enum):
    WELL_FORMED = "well_formed"
    REPAIRED = "repaired"


@dataclass(frozen=True)
class ParsedReply:
    suggestion: Suggestion
    outcome: ParseOutcome


def extract_candidate(text: str) -> str:
    """Slice from the first '{' to the last '}' inclusive, if both exist."""
    stripped = text.strip()
    start = stripped.find("{")
    end = stripped.rfind("}")

    if start != -1 and end > start:
        return stripped[start : end + 1]
    return stripped


def repair_truncated(candidate: str) -> str:
    """Close a dangling string and balance braces."""
    repaired = candidate
    if repaired.count('"') % 2 != 0:
        repaired += '"'

    missing = repaired.count("{") - repaired.count("}")
    return repaired + "}" * max(missing, 0)


def _load(candidate: str) -> tuple[Any, ParseOutcome]:
    try:
        return json.loads(candidate), ParseOutcome.WELL_FORMED
    except json.JSONDecodeError as exc:
        if candidate.endswith("}"):
            logger.warning("Inference reply is malformed JSON", extra={"error": str(exc)})
            raise SuggestionParseError(
                message=f"Failed to parse inference response as JSON: {exc}",
                details={"reason": "malformed"},
            ) from exc

        repaired = repair_truncated(candidate)
        try:
            parsed = json.loads(repaired)
        except json.JSONDecodeError as retry_exc:
            logger.warning(
                "Truncated inference reply could not be repaired",
                extra={"error": str(retry_exc)},
            )
            raise SuggestionParseError(
                message=f"Failed to parse inference response as JSON: {exc}",
                details={"reason": "truncated"},
            ) from exc

        logger.warning("Repaired truncated inference reply", extra={"repaired": repaired})
        return parsed, ParseOutcome.REPAIRED


def suggestion_from_mapping(parsed: dict[str, Any]) -> Suggestion:
    """Copy only correctly typed fields; anything else is dropped."""
    values: dict[str, Any] = {}

    for source_key, attr in _TEXT_FIELDS:
        value = parsed.get(source_key)
        if isinstance(value, str) and value.strip():
            values[attr] = value.strip()

    tags = parsed.get("tags")
    if isinstance(tags, list):
        values["tags"] = [tag for tag in tags if isinstance(tag, str)]

    return Suggestion(**values)


def parse_reply(text: str) -> ParsedReply:
    """Parse a raw inference reply.

    Raises:
        SuggestionParseError: If neither strict parsing nor repair succeeds,
            or the JSON value is not an object
    """
    candidate = extract_candidate(text or "")
    parsed, outcome = _load(candidate)

    if not isinstance(parsed, dict):
        raise SuggestionParseError(
            message="Inference response JSON is not an object",
            details={"type": type(parsed).__name__},
        )

    return ParsedReply(suggestion=suggestion_from_mapping(parsed), outcome=outcome)
