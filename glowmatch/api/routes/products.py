"""Product endpoints for the GlowMatch API.

This module provides the public recommendation endpoint, which ranks the
published catalog against a user's skin type and concerns, plus single
product lookup and view tracking.
"""

import logging
import time
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from glowmatch.api.exceptions import (
    CatalogUnavailableError,
    ProductLookupError,
    ProductNotFoundError,
    ViewTrackingError,
)
from glowmatch.api.metrics import metrics_service
from glowmatch.catalog.database import get_session
from glowmatch.catalog.repository import (
    ViewOutcome,
    fetch_published_catalog,
    get_published_product,
    record_product_view,
)
from glowmatch.recommender.recommend import recommend

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/api/products",
    tags=["products"],
)


class ProductOut(BaseModel):
    """Stored product fields as returned to clients."""

    id: str
    seller_id: Optional[str] = None
    name: str
    brand: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    skin_types: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    purchase_url: Optional[str] = None
    view_count: int = 0
    created_at: Optional[datetime] = None


class RankedProductOut(ProductOut):
    """A recommended product with its score and client-facing field names."""

    matchScore: int = Field(..., description="Match score for this request")
    image: Optional[str] = None
    purchaseUrl: Optional[str] = None
    originalPrice: Optional[float] = None
    type: Optional[str] = None
    viewCount: int = 0


class RecommendationFilters(BaseModel):
    skinType: Optional[str] = None
    concerns: List[str] = Field(default_factory=list)
    category: Optional[str] = None


class RecommendationMeta(BaseModel):
    total: int = Field(..., description="Eligible products before the limit")
    returned: int = Field(..., description="Products in this response")
    filters: RecommendationFilters


class RecommendationResponse(BaseModel):
    """Response model for recommendation requests."""

    data: List[RankedProductOut]
    meta: RecommendationMeta


class ProductResponse(BaseModel):
    data: ProductOut


class ProductViewRequest(BaseModel):
    """Optional viewer identity for per-quiz-attempt view counting."""

    userId: Optional[str] = None
    quizAttemptId: Optional[str] = None


@router.get("/recommended", response_model=RecommendationResponse)
def get_recommended_products(
    skin_type: Optional[str] = Query(None, alias="skinType"),
    concerns: Optional[str] = Query(None, description="Comma-separated concern tags"),
    category: Optional[str] = Query(None),
    limit: Optional[str] = Query(None, description="Maximum number of products"),
    session: Session = Depends(get_session),
) -> RecommendationResponse:
    """Get published products ranked by skin type and concern match.

    Args:
        skin_type: Skin type tag, e.g. "oily".
        concerns: Comma-separated concern tags, e.g. "acne,pores".
        category: Optional category filter, e.g. "serum".
        limit: Maximum number of products (default: 20).
        session: Database session.

    Returns:
        RecommendationResponse with ranked products and result metadata.

    Raises:
        CatalogUnavailableError: If the catalog cannot be read.

    Example:
        GET /api/products/recommended?skinType=oily&concerns=acne,pores&limit=5
    """
    start_time = time.time()

    try:
        catalog = fetch_published_catalog(session)
        result = recommend(
            catalog,
            skin_type=skin_type,
            concerns=concerns,
            category=category,
            limit=limit,
        )
    except Exception as e:
        metrics_service.record_failure()
        logger.error(f"Error fetching recommended products: {e}", exc_info=True)
        raise CatalogUnavailableError(e) from e

    metrics_service.record_recommendation(
        latency_ms=(time.time() - start_time) * 1000,
        returned=result.returned,
    )

    return RecommendationResponse(
        data=[RankedProductOut(**item.to_dict()) for item in result.items],
        meta=RecommendationMeta(
            total=result.total,
            returned=result.returned,
            filters=RecommendationFilters(
                skinType=result.skin_type,
                concerns=result.concerns,
                category=result.category,
            ),
        ),
    )


@router.post("/{product_id}/view")
def track_product_view(
    product_id: str,
    view: Optional[ProductViewRequest] = None,
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    """Increment a product's view counter.

    With ``userId`` and ``quizAttemptId`` in the body, repeat views of the
    product within the same quiz attempt are acknowledged with
    ``alreadyViewed`` and not counted again.
    """
    user_id = view.userId if view else None
    quiz_attempt_id = view.quizAttemptId if view else None

    try:
        outcome = record_product_view(
            session,
            product_id,
            user_id=user_id,
            quiz_attempt_id=quiz_attempt_id,
        )
    except Exception as e:
        logger.error(f"Error tracking view for product {product_id}: {e}", exc_info=True)
        raise ViewTrackingError(product_id, e) from e

    if outcome is ViewOutcome.NOT_FOUND:
        logger.warning(f"View tracked for unknown product {product_id}")
        raise ProductNotFoundError(product_id)

    if outcome is ViewOutcome.ALREADY_VIEWED:
        return {"success": True, "alreadyViewed": True}

    return {"success": True}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
) -> ProductResponse:
    """Get a single published product."""
    try:
        product = get_published_product(session, product_id)
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}", exc_info=True)
        raise ProductLookupError(product_id, e) from e

    if product is None:
        raise ProductNotFoundError(product_id)

    return ProductResponse(data=ProductOut(**product.to_dict()))
