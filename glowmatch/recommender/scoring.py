"""Match scoring for skin type and concern tags.

A product earns points for matching the requested skin type and for every
requested concern it addresses. Products that reach the multi-match threshold
get a flat bonus, so a skin type hit plus a concern hit (or three concern hits
alone) always outranks any single-signal match.
"""

from typing import Iterable, Optional

from glowmatch.recommender.models import Product

# Scoring weights
SKIN_TYPE_WEIGHT = 10
CONCERN_WEIGHT = 5
MULTI_MATCH_THRESHOLD = 15
MULTI_MATCH_BONUS = 5


def score_product(
    product: Product,
    skin_type: Optional[str] = None,
    concerns: Optional[Iterable[str]] = None,
) -> int:
    """Compute the match score of a product for one query.

    Args:
        product: Catalog product with lowercased tag sets.
        skin_type: Lowercased skin type tag, or None.
        concerns: Lowercased concern tags, or None.

    Returns:
        Non-negative integer score.

    Example:
        >>> p = Product(id="a", name="Gel", skin_types=frozenset({"oily"}),
        ...             concerns=frozenset({"acne", "pores"}))
        >>> score_product(p, "oily", ["acne"])
        20
    """
    score = 0

    if skin_type and skin_type in product.skin_types:
        score += SKIN_TYPE_WEIGHT

    if concerns:
        match_count = sum(1 for concern in concerns if concern in product.concerns)
        score += CONCERN_WEIGHT * match_count

    if score >= MULTI_MATCH_THRESHOLD:
        score += MULTI_MATCH_BONUS

    return score


def matches_category(product: Product, category: Optional[str]) -> bool:
    """Case-insensitive exact category match.

    No requested category means no filter; uncategorized products are kept.
    """
    if not category or not product.category:
        return True
    return product.category.strip().lower() == category.strip().lower()
