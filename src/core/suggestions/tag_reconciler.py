"""Merges AI-produced tags with a MediaType's default tags."""

from collections.abc import Iterable


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lowercase, trim and deduplicate, keeping first-seen order."""
    normalized = (tag.strip().lower() for tag in tags)
    return list(dict.fromkeys(tag for tag in normalized if tag))


def reconcile_tags(
    parsed_tags: list[str] | None,
    default_tags: list[str] | None,
) -> list[str] | None:
    """Combine tags for a suggestion.

    - parsed tags present: normalized union of defaults and parsed tags
    - only defaults: defaults as given
    - neither: None, so the field is omitted
    """
    if parsed_tags is not None:
        return normalize_tags([*(default_tags or []), *parsed_tags])

    if default_tags:
        return list(default_tags)

    return None
