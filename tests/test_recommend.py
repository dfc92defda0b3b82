"""Tests for ranking the catalog with recommend()."""

import pytest

from glowmatch.recommender.models import Product
from glowmatch.recommender.recommend import (
    coerce_limit,
    normalize_skin_type,
    parse_concerns,
    recommend,
)


def _product(pid, skin_types=(), concerns=(), category=None, view_count=0, **kwargs):
    return Product(
        id=pid,
        name=f"Product {pid}",
        skin_types=frozenset(skin_types),
        concerns=frozenset(concerns),
        category=category,
        view_count=view_count,
        **kwargs,
    )


@pytest.fixture
def catalog():
    """Fixture providing a small mixed catalog."""
    return [
        _product("a", skin_types={"oily"}, concerns={"acne", "pores"}, category="serum", view_count=10),
        _product("b", category="cleanser", view_count=500),
        _product("c", skin_types={"dry"}, concerns={"dryness"}, category="moisturizer", view_count=40),
        _product("d", skin_types={"oily", "combination"}, category="cleanser", view_count=5),
        _product("e", concerns={"acne"}, category="Serum", view_count=70),
    ]


def _ids(result):
    return [item.product.id for item in result.items]


def _assert_sorted(result):
    for first, second in zip(result.items, result.items[1:]):
        assert first.match_score > second.match_score or (
            first.match_score == second.match_score
            and first.view_count >= second.view_count
        )


def test_skin_type_and_concern_example(catalog):
    result = recommend(catalog, skin_type="oily", concerns="acne")

    scores = {item.product.id: item.match_score for item in result.items}
    assert scores["a"] == 20
    assert scores["d"] == 10
    assert scores["e"] == 5
    assert scores["b"] == 0
    assert _ids(result)[0] == "a"
    _assert_sorted(result)


def test_untagged_product_still_listed_last(catalog):
    result = recommend(catalog, skin_type="oily")

    assert "b" in _ids(result)
    zero_scored = [item for item in result.items if item.match_score == 0]
    assert result.items[-len(zero_scored):] == zero_scored
    _assert_sorted(result)


def test_no_filters_returns_every_product_with_zero_score(catalog):
    result = recommend(catalog)

    assert result.total == len(catalog)
    assert all(item.match_score == 0 for item in result.items)
    # Equal scores fall back to popularity
    assert _ids(result) == ["b", "e", "c", "a", "d"]


def test_ties_broken_by_view_count(catalog):
    result = recommend(catalog, concerns="acne")

    # a and e both score 5; e has more views
    assert _ids(result)[:2] == ["e", "a"]


def test_equal_score_and_views_keep_catalog_order():
    catalog = [_product("x", view_count=3), _product("y", view_count=3), _product("z", view_count=3)]
    assert _ids(recommend(catalog)) == ["x", "y", "z"]


def test_missing_view_count_treated_as_zero():
    catalog = [_product("x", view_count=None), _product("y", view_count=1)]
    assert _ids(recommend(catalog)) == ["y", "x"]


def test_category_filter_excludes_regardless_of_score(catalog):
    result = recommend(catalog, skin_type="oily", concerns="acne,pores", category="cleanser")

    assert set(_ids(result)) == {"b", "d"}
    assert result.total == 2


def test_category_filter_is_case_insensitive(catalog):
    result = recommend(catalog, category="SERUM")
    assert set(_ids(result)) == {"a", "e"}


def test_category_filter_keeps_uncategorized():
    catalog = [
        _product("x", skin_types={"oily"}, category=None),
        _product("y", category="toner"),
    ]
    result = recommend(catalog, skin_type="oily", category="toner")

    assert _ids(result) == ["x", "y"]
    assert result.items[0].match_score == 10
    assert result.total == 2


def test_limit_truncates_but_total_counts_all(catalog):
    result = recommend(catalog, limit=2)

    assert result.returned == 2
    assert result.total == 5
    assert len(result.items) == 2


def test_limit_zero_returns_nothing(catalog):
    result = recommend(catalog, limit=0)
    assert result.items == []
    assert result.total == 5


def test_negative_limit_returns_nothing(catalog):
    assert recommend(catalog, limit=-3).items == []


def test_string_limit_is_coerced(catalog):
    assert recommend(catalog, limit="3").returned == 3


def test_default_limit_is_twenty():
    catalog = [_product(str(i), view_count=i) for i in range(30)]
    result = recommend(catalog)
    assert result.returned == 20
    assert result.total == 30


def test_query_tags_are_case_insensitive(catalog):
    result = recommend(catalog, skin_type="OILY", concerns=" ACNE , Pores")
    assert result.items[0].product.id == "a"
    assert result.items[0].match_score == 25


def test_unpublished_products_are_ignored():
    catalog = [_product("x", published=False), _product("y")]
    result = recommend(catalog)
    assert _ids(result) == ["y"]
    assert result.total == 1


def test_concerns_accept_a_list(catalog):
    result = recommend(catalog, concerns=["Acne", "pores"])
    assert result.concerns == ["acne", "pores"]
    assert result.items[0].product.id == "a"


def test_result_echoes_filters(catalog):
    result = recommend(catalog, skin_type="Oily", concerns="Acne,pores", category="serum")
    assert result.skin_type == "Oily"
    assert result.concerns == ["acne", "pores"]
    assert result.category == "serum"


def test_empty_filters_are_treated_as_unset(catalog):
    result = recommend(catalog, skin_type="", concerns="", category="")
    assert result.total == len(catalog)
    assert result.skin_type is None
    assert result.category is None


def test_empty_catalog():
    result = recommend([], skin_type="oily")
    assert result.items == []
    assert result.total == 0


def test_ranked_product_wire_fields(catalog):
    item = recommend(catalog, skin_type="oily", concerns="acne").items[0]
    data = item.to_dict()

    assert data["matchScore"] == 20
    assert data["type"] == "serum"
    assert data["viewCount"] == 10
    assert data["skin_types"] == ["oily"]
    assert data["concerns"] == ["acne", "pores"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("acne", ["acne"]),
        ("Acne, PORES", ["acne", "pores"]),
        ("acne,,pores,", ["acne", "pores"]),
        ("acne,acne", ["acne"]),
    ],
)
def test_parse_concerns(raw, expected):
    assert parse_concerns(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 20),
        ("", 20),
        ("5", 5),
        (5, 5),
        ("0", 0),
        ("-4", 0),
        ("2.9", 2),
        ("5abc", 5),
        ("1e3", 1),
        (" 7 ", 7),
        ("+4", 4),
        ("-4abc", 0),
        ("abc", 20),
        (3.7, 3),
    ],
)
def test_coerce_limit(raw, expected):
    assert coerce_limit(raw, default=20) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("", None), ("   ", None), ("Oily", "oily"), (" Dry ", "dry")],
)
def test_normalize_skin_type(raw, expected):
    assert normalize_skin_type(raw) == expected
