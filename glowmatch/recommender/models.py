"""Domain types for the recommender."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class Product:
    """A published catalog product with parsed tag sets.

    Attributes:
        id: Product identifier.
        name: Display name.
        skin_types: Lowercased skin type tags the product is suitable for.
        concerns: Lowercased concern tags the product addresses.
        category: Free-text category tag, compared case-insensitively.
        view_count: Popularity counter used to break score ties.
    """

    id: str
    name: str
    seller_id: Optional[str] = None
    brand: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    skin_types: FrozenSet[str] = frozenset()
    concerns: FrozenSet[str] = frozenset()
    purchase_url: Optional[str] = None
    view_count: Optional[int] = 0
    published: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Stored fields in wire form, with tags as sorted lists."""
        return {
            "id": self.id,
            "seller_id": self.seller_id,
            "name": self.name,
            "brand": self.brand,
            "description": self.description,
            "price": self.price,
            "original_price": self.original_price,
            "image_url": self.image_url,
            "category": self.category,
            "skin_types": sorted(self.skin_types),
            "concerns": sorted(self.concerns),
            "purchase_url": self.purchase_url,
            "view_count": self.view_count or 0,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class RankedProduct:
    """A product annotated with its match score for one request."""

    product: Product
    match_score: int

    @property
    def view_count(self) -> int:
        return self.product.view_count or 0

    def to_dict(self) -> Dict[str, Any]:
        """Stored fields plus the normalized names clients consume."""
        data = self.product.to_dict()
        data.update(
            {
                "matchScore": self.match_score,
                "image": self.product.image_url,
                "purchaseUrl": self.product.purchase_url,
                "originalPrice": self.product.original_price,
                "type": self.product.category,
                "viewCount": self.view_count,
            }
        )
        return data


@dataclass
class RecommendationResult:
    """Ranked, truncated recommendations plus the pre-truncation count."""

    items: List[RankedProduct]
    total: int
    skin_type: Optional[str] = None
    concerns: List[str] = field(default_factory=list)
    category: Optional[str] = None

    @property
    def returned(self) -> int:
        return len(self.items)
