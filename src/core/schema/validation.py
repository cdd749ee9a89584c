"""Structural validation of MediaType definitions.

Checks run in a fixed order and stop at the first violation, raising
`SchemaValidationError` with `details["field"]` naming what failed. Nothing
here touches persistence; callers pass the existing definitions in.
"""

import math
import re
from collections.abc import Iterable, Sequence

from aws_lambda_powertools import Logger

from core.models.errors import SchemaValidationError
from core.models.media_type import DimensionConstraint, FieldSchema, MediaTypeDefinition, MediaTypeInput
from core.schema.dimensions import is_consistent
from core.utils.constants import HEX_COLOR_PATTERN, MEDIA_TYPE_NAME_MAX_LENGTH

logger = Logger(UTC=True)

_HEX_COLOR_RE = re.compile(HEX_COLOR_PATTERN)


def normalize_name(name: str) -> str:
    """Key used for case-insensitive name comparisons."""
    return name.strip().lower()


def _fail(message: str, field: str, **details: object) -> SchemaValidationError:
    logger.info("MediaType validation failed", extra={"field": field, "reason": message})
    return SchemaValidationError(message=message, details={"field": field, **details})


def validate_name(
    name: str | None,
    existing: Iterable[MediaTypeDefinition],
    *,
    exclude_id: str | None = None,
) -> str:
    """Validate a MediaType name and return it trimmed.

    Uniqueness ignores case and surrounding whitespace. `exclude_id` skips
    the definition being updated.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise _fail("MediaType name is required", "name")

    if len(trimmed) > MEDIA_TYPE_NAME_MAX_LENGTH:
        raise _fail(
            f"MediaType name must be at most {MEDIA_TYPE_NAME_MAX_LENGTH} characters",
            "name",
        )

    key = normalize_name(trimmed)
    for other in existing:
        if other.id != exclude_id and normalize_name(other.name) == key:
            raise _fail(
                f'MediaType with name "{trimmed}" already exists',
                "name",
                conflicting_id=other.id,
            )

    return trimmed


def validate_color(color: str | None) -> None:
    if not color or not _HEX_COLOR_RE.match(color):
        raise _fail("Invalid hex color format (e.g., #3b82f6)", "color")


def validate_allowed_formats(allowed_formats: Sequence[str] | None) -> None:
    if not allowed_formats or not any(fmt.strip() for fmt in allowed_formats):
        raise _fail("At least one file format must be selected", "allowedFormats")


def validate_fields(fields: Sequence[FieldSchema]) -> None:
    """Check field names, select options and regex patterns, in that order per field."""
    seen: set[str] = set()

    for index, field in enumerate(fields):
        location = f"fields[{index}]"

        if field.name in seen:
            raise _fail(f'Duplicate field name: "{field.name}"', f"{location}.name")
        seen.add(field.name)

        if field.type == "select" and not field.options:
            raise _fail(
                f'Select field "{field.label}" must have at least one option',
                f"{location}.options",
            )

        if field.validation_regex:
            try:
                re.compile(field.validation_regex)
            except re.error as exc:
                raise _fail(
                    f'Invalid regex pattern for field "{field.label}"',
                    f"{location}.validationRegex",
                    pattern_error=str(exc),
                ) from exc


def validate_dimension_constraint(constraint: DimensionConstraint | None) -> None:
    if constraint is None:
        return

    value = constraint.aspect_ratio.value
    if value is not None and (not math.isfinite(value) or value <= 0):
        raise _fail("Aspect ratio must be a positive number", "dimensionConstraint.aspectRatio")

    for attr, label in (("min_width", "minWidth"), ("min_height", "minHeight")):
        size = getattr(constraint, attr)
        if size is not None and size < 0:
            raise _fail(f"{label} must not be negative", f"dimensionConstraint.{label}")

    if not is_consistent(constraint):
        raise _fail(
            f"Minimum size {constraint.min_width}x{constraint.min_height} does not match "
            f"aspect ratio {constraint.aspect_ratio.label}",
            "dimensionConstraint",
        )


def validate_media_type(
    candidate: MediaTypeInput,
    existing: Iterable[MediaTypeDefinition],
    *,
    exclude_id: str | None = None,
) -> MediaTypeInput:
    """Run every rule against a complete definition.

    Returns a copy of `candidate` with its name trimmed.

    Raises:
        SchemaValidationError: On the first violated rule
    """
    name = validate_name(candidate.name, existing, exclude_id=exclude_id)
    validate_color(candidate.color)
    validate_allowed_formats(candidate.allowed_formats)
    validate_fields(candidate.fields)
    validate_dimension_constraint(candidate.dimension_constraint)

    return candidate.model_copy(update={"name": name})
