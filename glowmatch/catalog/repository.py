"""Read and write access to the seller catalog.

The recommender only ever sees ``Product`` snapshots built here; tag columns
are parsed leniently so a malformed row degrades to an untagged product.
"""

import enum
import json
import logging
from typing import Any, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from glowmatch.catalog.orm import ProductView, SellerProduct
from glowmatch.recommender.models import Product
from glowmatch.recommender.tags import tags_or_empty

# Configure module logger
logger = logging.getLogger(__name__)


def _to_float(value: Optional[Any]) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def product_from_record(record: SellerProduct) -> Product:
    """Build a domain product from a catalog row."""
    return Product(
        id=record.id,
        seller_id=record.seller_id,
        name=record.name,
        brand=record.brand,
        description=record.description,
        price=_to_float(record.price),
        original_price=_to_float(record.original_price),
        image_url=record.image_url,
        category=record.category,
        skin_types=tags_or_empty(record.skin_types, field="skin_types", product_id=record.id),
        concerns=tags_or_empty(record.concerns, field="concerns", product_id=record.id),
        purchase_url=record.purchase_url,
        view_count=record.view_count or 0,
        published=bool(record.published),
        created_at=record.created_at,
    )


def fetch_published_catalog(session: Session) -> List[Product]:
    """Load every published product, most viewed and newest first."""
    stmt = (
        select(SellerProduct)
        .where(SellerProduct.published.is_(True))
        .order_by(
            func.coalesce(SellerProduct.view_count, 0).desc(),
            SellerProduct.created_at.desc(),
        )
    )
    records = session.scalars(stmt).all()
    logger.debug(f"Fetched {len(records)} published products")
    return [product_from_record(record) for record in records]


def get_published_product(session: Session, product_id: str) -> Optional[Product]:
    """Look up a single published product by id."""
    stmt = select(SellerProduct).where(
        SellerProduct.id == product_id,
        SellerProduct.published.is_(True),
    )
    record = session.scalars(stmt).first()
    if record is None:
        return None
    return product_from_record(record)


class ViewOutcome(enum.Enum):
    """Result of tracking a product view."""

    RECORDED = "recorded"
    ALREADY_VIEWED = "already_viewed"
    NOT_FOUND = "not_found"


def record_product_view(
    session: Session,
    product_id: str,
    user_id: Optional[str] = None,
    quiz_attempt_id: Optional[str] = None,
) -> ViewOutcome:
    """Increment a product's view counter and log the view.

    When both ``user_id`` and ``quiz_attempt_id`` are given, a product is
    counted once per user per quiz attempt; repeats leave the counter alone.

    Returns:
        NOT_FOUND if the product does not exist, ALREADY_VIEWED for a repeat
        view within the same quiz attempt, RECORDED otherwise.
    """
    exists = session.scalar(select(SellerProduct.id).where(SellerProduct.id == product_id))
    if exists is None:
        return ViewOutcome.NOT_FOUND

    identified = bool(user_id and quiz_attempt_id)
    if identified:
        previous = session.scalar(
            select(ProductView.id).where(
                ProductView.product_id == product_id,
                ProductView.user_id == user_id,
                ProductView.quiz_attempt_id == quiz_attempt_id,
            )
        )
        if previous is not None:
            logger.debug(
                "Product already viewed in this quiz attempt",
                extra={"product_id": product_id, "user_id": user_id, "quiz_attempt_id": quiz_attempt_id},
            )
            return ViewOutcome.ALREADY_VIEWED

    try:
        session.add(
            ProductView(
                product_id=product_id,
                user_id=user_id if identified else None,
                quiz_attempt_id=quiz_attempt_id if identified else None,
            )
        )
        session.execute(
            update(SellerProduct)
            .where(SellerProduct.id == product_id)
            .values(view_count=func.coalesce(SellerProduct.view_count, 0) + 1)
        )
        session.commit()
    except IntegrityError:
        # A concurrent request recorded the same quiz attempt view first
        session.rollback()
        return ViewOutcome.ALREADY_VIEWED

    return ViewOutcome.RECORDED


def serialize_tags(tags: Optional[Any]) -> Optional[str]:
    """Serialize a tag sequence as JSON array text; strings pass through."""
    if tags is None or isinstance(tags, str):
        return tags
    return json.dumps([str(tag) for tag in tags])


def add_product(
    session: Session,
    name: str,
    skin_types: Optional[Any] = None,
    concerns: Optional[Any] = None,
    published: bool = True,
    commit: bool = True,
    **fields: Any,
) -> str:
    """Insert a catalog row and return its id.

    Args:
        session: Open database session.
        name: Product name.
        skin_types: Skin type tags as a sequence, or raw serialized text.
        concerns: Concern tags as a sequence, or raw serialized text.
        published: Whether the product is eligible for recommendation.
        commit: Commit immediately; pass False to batch inserts.
        **fields: Any other ``SellerProduct`` column.
    """
    record = SellerProduct(
        name=name,
        skin_types=serialize_tags(skin_types),
        concerns=serialize_tags(concerns),
        published=published,
        **fields,
    )
    session.add(record)
    session.flush()
    if commit:
        session.commit()
    return record.id
