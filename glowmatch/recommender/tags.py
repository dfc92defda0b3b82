"""Parsing of serialized skin type and concern tag sets.

Catalog rows store their tags as JSON array text (``'["oily", "dry"]'``),
though some drivers hand them back already decoded. ``parse_tag_set`` turns
either form into a lowercase ``frozenset`` and raises ``TagParseError`` for
anything else. ``tags_or_empty`` is the lenient wrapper used when reading the
catalog: one bad row must not break a whole recommendation response.
"""

import json
import logging
from typing import Any, FrozenSet, Optional

# Configure module logger
logger = logging.getLogger(__name__)

EMPTY_TAGS: FrozenSet[str] = frozenset()


class TagParseError(ValueError):
    """Raised when a serialized tag set cannot be parsed."""

    def __init__(self, raw: Any, reason: str):
        super().__init__(f"Cannot parse tag set {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


def parse_tag_set(raw: Any) -> FrozenSet[str]:
    """Parse a serialized tag set into lowercase tags.

    Args:
        raw: JSON array text, an already decoded list/tuple/set of strings,
            or None.

    Returns:
        Frozen set of stripped, lowercased, non-empty tags.

    Raises:
        TagParseError: If the value is not valid JSON, is not an array, or
            contains non-string elements.

    Example:
        >>> sorted(parse_tag_set('["Oily", "combination"]'))
        ['combination', 'oily']
    """
    if raw is None:
        return EMPTY_TAGS

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        if not raw.strip():
            return EMPTY_TAGS
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TagParseError(raw, f"invalid JSON ({e.msg})") from e
    else:
        decoded = raw

    if not isinstance(decoded, (list, tuple, set, frozenset)):
        raise TagParseError(raw, f"expected an array, got {type(decoded).__name__}")

    tags = set()
    for item in decoded:
        if not isinstance(item, str):
            raise TagParseError(raw, f"non-string tag {item!r}")
        tag = item.strip().lower()
        if tag:
            tags.add(tag)

    return frozenset(tags)


def tags_or_empty(
    raw: Any,
    field: str = "tags",
    product_id: Optional[str] = None,
) -> FrozenSet[str]:
    """Parse a tag set, mapping any parse error to the empty set."""
    try:
        return parse_tag_set(raw)
    except TagParseError as e:
        logger.debug(
            "Ignoring malformed tag set",
            extra={
                "product_id": product_id,
                "field": field,
                "reason": e.reason,
            },
        )
        return EMPTY_TAGS
