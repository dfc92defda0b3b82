"""Tests for catalog CSV loading, generation and seeding."""

import json

import pandas as pd
import pytest

from glowmatch.catalog.loader import (
    CATALOG_COLUMNS,
    CATEGORIES,
    generate_fake_catalog,
    load_catalog_csv,
    seed_catalog,
)
from glowmatch.catalog.repository import fetch_published_catalog


def test_generate_fake_catalog_shape():
    df = generate_fake_catalog(num_products=25, random_seed=1)

    assert len(df) == 25
    assert list(df.columns) == CATALOG_COLUMNS
    assert set(df["category"]).issubset(CATEGORIES)
    for raw in df["skin_types"]:
        assert isinstance(json.loads(raw), list)


def test_generate_fake_catalog_is_reproducible():
    first = generate_fake_catalog(num_products=10, random_seed=7)
    second = generate_fake_catalog(num_products=10, random_seed=7)
    pd.testing.assert_frame_equal(first, second)


@pytest.mark.parametrize("kwargs", [{"num_products": 0}, {"published_ratio": 1.5}])
def test_generate_fake_catalog_rejects_bad_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_fake_catalog(**kwargs)


def test_load_catalog_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_csv(str(tmp_path / "missing.csv"))


def test_load_catalog_csv_requires_name(tmp_path):
    csv_path = tmp_path / "catalog.csv"
    pd.DataFrame({"brand": ["x"]}).to_csv(csv_path, index=False)

    with pytest.raises(ValueError):
        load_catalog_csv(str(csv_path))


def test_csv_round_trip_into_database(tmp_path, session):
    csv_path = tmp_path / "catalog.csv"
    generate_fake_catalog(num_products=20, random_seed=3, published_ratio=1.0).to_csv(
        csv_path, index=False
    )

    catalog = load_catalog_csv(str(csv_path))
    product_ids = seed_catalog(session, catalog)

    assert len(product_ids) == 20
    assert len(fetch_published_catalog(session)) == 20


def test_seed_catalog_respects_published_flag(session):
    frame = pd.DataFrame(
        [
            {"name": "Live", "published": True, "skin_types": '["oily"]'},
            {"name": "Draft", "published": "false", "skin_types": None},
        ]
    )

    seed_catalog(session, frame)

    catalog = fetch_published_catalog(session)
    assert [p.name for p in catalog] == ["Live"]
    assert catalog[0].skin_types == frozenset({"oily"})
