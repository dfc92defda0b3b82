"""Module for ranking the catalog against a user's skin profile.

Scores every product in a catalog snapshot, drops products outside the
requested category, sorts by score then popularity and truncates.
"""

import logging
import re
import time
from typing import Any, List, Optional, Sequence

from glowmatch import config
from glowmatch.recommender.models import Product, RankedProduct, RecommendationResult
from glowmatch.recommender.scoring import matches_category, score_product

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = config.DEFAULT_LIMIT

# Leading integer of a limit string, e.g. "5" in " 5abc"
LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_concerns(raw: Optional[Any]) -> List[str]:
    """Parse requested concerns into lowercase tags.

    Accepts the comma-delimited wire format or an already split sequence.
    Entries are trimmed and lowercased; empty entries and repeats are dropped
    and the first-seen order is kept.

    Example:
        >>> parse_concerns(" Acne, pores,,acne")
        ['acne', 'pores']
    """
    if not raw:
        return []

    if isinstance(raw, str):
        parts = raw.split(",")
    else:
        parts = [part for item in raw for part in str(item).split(",")]

    concerns: List[str] = []
    for part in parts:
        concern = part.strip().lower()
        if concern and concern not in concerns:
            concerns.append(concern)
    return concerns


def normalize_skin_type(raw: Optional[str]) -> Optional[str]:
    """Trim and lowercase a requested skin type; blank means unset."""
    if raw is None:
        return None
    skin_type = raw.strip().lower()
    return skin_type or None


def coerce_limit(raw: Optional[Any], default: int = DEFAULT_LIMIT) -> int:
    """Coerce a limit parameter to an integer >= 0.

    Strings are read up to the first non-digit after an optional sign, so
    "5abc" is 5 and "1e3" or "2.9" read as 1 and 2. Missing values and
    strings without a leading integer fall back to ``default``; negative
    values clamp to zero.
    """
    if raw is None or raw == "":
        return max(default, 0)

    if isinstance(raw, str):
        match = LEADING_INT_RE.match(raw)
        if match is None:
            logger.debug(f"Invalid limit {raw!r}, using default {default}")
            return max(default, 0)
        limit = int(match.group(1))
    else:
        try:
            limit = int(raw)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Invalid limit {raw!r}, using default {default}")
            return max(default, 0)

    return max(limit, 0)


def rank_products(
    catalog: Sequence[Product],
    skin_type: Optional[str] = None,
    concerns: Optional[Sequence[str]] = None,
    category: Optional[str] = None,
) -> List[RankedProduct]:
    """Score, filter and sort the whole catalog without truncating.

    The sort is stable: products with equal score and view count keep
    their catalog order.
    """
    ranked = [
        RankedProduct(
            product=product,
            match_score=score_product(product, skin_type, concerns),
        )
        for product in catalog
        if product.published and matches_category(product, category)
    ]

    ranked.sort(key=lambda item: (-item.match_score, -item.view_count))
    return ranked


def recommend(
    catalog: Sequence[Product],
    skin_type: Optional[str] = None,
    concerns: Optional[Any] = None,
    category: Optional[str] = None,
    limit: Any = DEFAULT_LIMIT,
) -> RecommendationResult:
    """Get the best matching products for a skin profile.

    Args:
        catalog: Snapshot of published products.
        skin_type: Requested skin type, case-insensitive.
        concerns: Requested concerns as a list or comma-delimited string.
        category: Optional category filter, case-insensitive exact match.
        limit: Maximum number of results, coerced to an integer >= 0.

    Returns:
        RecommendationResult with the top ``limit`` ranked products and the
        number of eligible products before truncation.

    Example:
        >>> result = recommend(catalog, skin_type="oily", concerns="acne,pores")
        >>> [(r.product.name, r.match_score) for r in result.items[:2]]
    """
    start_time = time.time()

    skin_type_tag = normalize_skin_type(skin_type)
    concern_tags = parse_concerns(concerns)
    category_filter = category.strip() if category and category.strip() else None
    max_results = coerce_limit(limit)

    ranked = rank_products(
        catalog,
        skin_type=skin_type_tag,
        concerns=concern_tags,
        category=category_filter,
    )
    top_products = ranked[:max_results]

    logger.info(
        "Recommendations generated",
        extra={
            "skin_type": skin_type_tag,
            "concerns": concern_tags,
            "category": category_filter,
            "catalog_size": len(catalog),
            "eligible": len(ranked),
            "returned": len(top_products),
            "total_time_ms": round((time.time() - start_time) * 1000, 2),
        },
    )

    return RecommendationResult(
        items=top_products,
        total=len(ranked),
        skin_type=skin_type or None,
        concerns=concern_tags,
        category=category or None,
    )
