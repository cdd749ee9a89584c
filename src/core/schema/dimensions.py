"""Width/height linkage for MediaType dimension constraints.

All functions are pure. Dimension inputs come straight from form fields, so
they may be strings, numbers or nothing at all. Anything that is not a finite,
non-negative integer becomes ``EMPTY`` (``None``) rather than zero or NaN.
"""

import math
from typing import NamedTuple

from core.models.media_type import AspectRatio, DimensionConstraint
from core.utils.constants import COMMON_ASPECT_RATIOS, DEFAULT_MIN_DIMENSION

EMPTY = None

RawDimension = int | float | str | None
RatioInput = AspectRatio | float | None


class DimensionState(NamedTuple):
    width: int | None
    height: int | None


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_dimension(raw: RawDimension) -> int | None:
    """Parse a user-entered dimension, truncating fractions.

    Returns ``EMPTY`` for blank, non-numeric, negative or non-finite input.
    """
    if raw is None or isinstance(raw, bool):
        return EMPTY

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return EMPTY
        try:
            number = float(text)
        except ValueError:
            return EMPTY
    else:
        number = float(raw)

    if not math.isfinite(number) or number < 0:
        return EMPTY

    return int(number)


def active_ratio(aspect_ratio: RatioInput) -> float | None:
    """Return the ratio value when it links width and height, else None."""
    value = aspect_ratio.value if isinstance(aspect_ratio, AspectRatio) else aspect_ratio
    if value is None or isinstance(value, bool):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return float(value)


def height_for_width(width: int, ratio: float) -> int:
    return round_half_away(width / ratio)


def width_for_height(height: int, ratio: float) -> int:
    return round_half_away(height * ratio)


def on_width_change(
    new_width: RawDimension,
    aspect_ratio: RatioInput,
    current_height: int | None = None,
) -> DimensionState:
    """Apply a width edit, recomputing height when a ratio is active."""
    width = parse_dimension(new_width)
    if width is EMPTY:
        return DimensionState(EMPTY, current_height)

    ratio = active_ratio(aspect_ratio)
    if ratio is None:
        return DimensionState(width, current_height)

    return DimensionState(width, height_for_width(width, ratio))


def on_height_change(
    new_height: RawDimension,
    aspect_ratio: RatioInput,
    current_width: int | None = None,
) -> DimensionState:
    """Apply a height edit, recomputing width when a ratio is active."""
    height = parse_dimension(new_height)
    if height is EMPTY:
        return DimensionState(current_width, EMPTY)

    ratio = active_ratio(aspect_ratio)
    if ratio is None:
        return DimensionState(current_width, height)

    return DimensionState(width_for_height(height, ratio), height)


def on_ratio_change(
    new_ratio: RatioInput,
    current_width: RawDimension,
    current_height: int | None = None,
) -> DimensionState:
    """Apply a ratio switch.

    Width is kept and height recomputed from it. Switching to "None" keeps
    both values as last set.
    """
    width = parse_dimension(current_width)
    ratio = active_ratio(new_ratio)

    if ratio is None or width is EMPTY:
        return DimensionState(width, current_height)

    return DimensionState(width, height_for_width(width, ratio))


def reset_dimensions(aspect_ratio: RatioInput) -> DimensionState:
    """Default minimum size: 800px wide, height following the ratio."""
    ratio = active_ratio(aspect_ratio)
    if ratio is None:
        return DimensionState(DEFAULT_MIN_DIMENSION, DEFAULT_MIN_DIMENSION)
    return DimensionState(DEFAULT_MIN_DIMENSION, height_for_width(DEFAULT_MIN_DIMENSION, ratio))


def is_consistent(constraint: DimensionConstraint) -> bool:
    """Check that an enabled, ratio-linked constraint has a matching pair.

    Either derivation direction is accepted, since the last edited side
    determines how the other was rounded.
    """
    ratio = active_ratio(constraint.aspect_ratio)
    width, height = constraint.min_width, constraint.min_height

    if not constraint.enabled or ratio is None or width is None or height is None:
        return True

    return height == height_for_width(width, ratio) or width == width_for_height(height, ratio)


def common_aspect_ratios() -> list[AspectRatio]:
    return [AspectRatio(label=label, value=value) for label, value in COMMON_ASPECT_RATIOS]
