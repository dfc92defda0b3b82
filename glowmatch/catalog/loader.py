"""Catalog import and synthetic catalog generation.

This module loads seller catalogs from CSV into the database and creates
fake skincare catalogs for development and testing. Tag columns hold JSON
array text, the same serialization the ``seller_products`` table uses.
"""

import json
import logging
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from glowmatch.catalog.repository import add_product

# Configure module logger
logger = logging.getLogger(__name__)

SKIN_TYPES = ["oily", "dry", "combination", "sensitive", "normal"]
CONCERNS = [
    "acne",
    "pores",
    "dryness",
    "redness",
    "dullness",
    "wrinkles",
    "dark spots",
    "oiliness",
]
CATEGORIES = ["cleanser", "toner", "serum", "moisturizer", "sunscreen", "mask"]
BRANDS = ["Lumiere", "Dewdrop", "Verdant", "Petal & Co", "Skinworks"]

REQUIRED_COLUMNS = {"name"}
CATALOG_COLUMNS = [
    "name",
    "brand",
    "description",
    "price",
    "original_price",
    "image_url",
    "category",
    "skin_types",
    "concerns",
    "purchase_url",
    "view_count",
    "published",
    "seller_id",
]

DEFAULT_NUM_PRODUCTS = 100
DEFAULT_RANDOM_SEED = 42


def load_catalog_csv(csv_path: str) -> pd.DataFrame:
    """Load a catalog CSV file.

    Args:
        csv_path: Path to a CSV file with at least a ``name`` column. Other
            recognised columns are listed in ``CATALOG_COLUMNS``; unknown
            columns are dropped.

    Returns:
        DataFrame restricted to catalog columns, missing values as None.

    Raises:
        FileNotFoundError: If the CSV file does not exist.
        ValueError: If the CSV is missing required columns or is empty.
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    logger.info(f"Loading catalog CSV from {csv_path}")
    df = pd.read_csv(csv_path)

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = REQUIRED_COLUMNS - set(df.columns)
        raise ValueError(f"CSV missing required columns: {missing}")

    if df.empty:
        raise ValueError("Cannot load an empty catalog")

    unknown = set(df.columns) - set(CATALOG_COLUMNS)
    if unknown:
        logger.warning(f"Ignoring unknown catalog columns: {sorted(unknown)}")

    columns = [col for col in CATALOG_COLUMNS if col in df.columns]
    df = df[columns].astype(object)
    df = df.where(df.notna(), None)

    logger.info(f"Loaded {len(df)} catalog rows")
    return df


def generate_fake_catalog(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    random_seed: Optional[int] = DEFAULT_RANDOM_SEED,
    published_ratio: float = 0.9,
) -> pd.DataFrame:
    """Generate a synthetic skincare catalog.

    Args:
        num_products: Number of products to generate. Must be positive.
        random_seed: Seed for reproducible catalogs, or None.
        published_ratio: Fraction of products marked as published.

    Returns:
        DataFrame with ``CATALOG_COLUMNS``; tag columns are JSON array text.

    Raises:
        ValueError: If num_products is not positive or published_ratio is
            outside [0, 1].
    """
    if num_products <= 0:
        raise ValueError("num_products must be positive")
    if not 0.0 <= published_ratio <= 1.0:
        raise ValueError("published_ratio must be between 0 and 1")

    rng = random.Random(random_seed)
    rows: List[Dict[str, Any]] = []

    for i in range(1, num_products + 1):
        category = rng.choice(CATEGORIES)
        brand = rng.choice(BRANDS)
        skin_types = rng.sample(SKIN_TYPES, rng.randint(0, 3))
        concerns = rng.sample(CONCERNS, rng.randint(0, 3))
        price = round(rng.uniform(8, 90), 2)

        rows.append(
            {
                "name": f"{brand} {category.title()} No. {i}",
                "brand": brand,
                "description": f"A {category} for {', '.join(skin_types) or 'all'} skin.",
                "price": price,
                "original_price": round(price * rng.choice([1.0, 1.1, 1.25]), 2),
                "image_url": f"https://images.example.com/products/{i}.jpg",
                "category": category,
                "skin_types": json.dumps(skin_types),
                "concerns": json.dumps(concerns),
                "purchase_url": f"https://shop.example.com/products/{i}",
                "view_count": rng.randint(0, 5000),
                "published": rng.random() < published_ratio,
                "seller_id": None,
            }
        )

    df = pd.DataFrame(rows, columns=CATALOG_COLUMNS)
    logger.info(f"Generated {len(df)} fake catalog products")
    return df


def seed_catalog(
    session: Session,
    catalog: pd.DataFrame,
    start_date: Optional[datetime] = None,
) -> List[str]:
    """Insert catalog rows into the database.

    Rows get increasing ``created_at`` timestamps (one minute apart, from
    ``start_date``) so that recency ordering is deterministic.

    Returns:
        Ids of the inserted products, in row order.
    """
    if start_date is None:
        start_date = datetime.now() - timedelta(minutes=len(catalog))

    frame = catalog.astype(object).where(catalog.notna(), None)
    product_ids = []

    for offset, row in enumerate(frame.to_dict(orient="records")):
        fields = {key: value for key, value in row.items() if value is not None}
        name = fields.pop("name")
        published = _to_bool(fields.pop("published", True))
        if "view_count" in fields:
            fields["view_count"] = int(fields["view_count"])

        product_id = add_product(
            session,
            name=str(name),
            published=published,
            commit=False,
            created_at=start_date + timedelta(minutes=offset),
            **fields,
        )
        product_ids.append(product_id)

    session.commit()
    logger.info(f"Seeded {len(product_ids)} catalog products")
    return product_ids


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)
