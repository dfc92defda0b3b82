"""SQLAlchemy tables for the seller catalog."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class SellerProduct(Base):
    """A product listed by a seller.

    ``skin_types`` and ``concerns`` hold JSON array text and are parsed
    leniently when the catalog is read.
    """

    __tablename__ = "seller_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    seller_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    original_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    skin_types: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    concerns: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    purchase_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    view_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class ProductView(Base):
    """One tracked product view.

    Views carrying both a user and a quiz attempt are unique per product, so a
    product counts once per user per quiz attempt.
    """

    __tablename__ = "product_views"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("seller_products.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    quiz_attempt_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )


Index("idx_seller_products_category", SellerProduct.category)
Index("idx_seller_products_published", SellerProduct.published)
Index("idx_product_views_product_id", ProductView.product_id)

_identified_view = ProductView.user_id.isnot(None) & ProductView.quiz_attempt_id.isnot(None)
Index(
    "idx_product_views_unique",
    ProductView.product_id,
    ProductView.user_id,
    ProductView.quiz_attempt_id,
    unique=True,
    sqlite_where=_identified_view,
    postgresql_where=_identified_view,
)
