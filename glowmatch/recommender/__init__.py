"""Recommendation module for GlowMatch.

This module contains the skin type and concern matching heuristic, the
defensive tag parser and the ranking entry point used by the API.
"""

from glowmatch.recommender.models import Product, RankedProduct, RecommendationResult
from glowmatch.recommender.recommend import recommend

__all__ = ["Product", "RankedProduct", "RecommendationResult", "recommend"]
