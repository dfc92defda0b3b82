"""Tests for tag set parsing."""

import pytest

from glowmatch.recommender.tags import TagParseError, parse_tag_set, tags_or_empty


def test_parse_json_array_lowercases_tags():
    assert parse_tag_set('["Oily", "COMBINATION"]') == frozenset({"oily", "combination"})


def test_parse_already_decoded_list():
    assert parse_tag_set(["Acne", " pores "]) == frozenset({"acne", "pores"})


@pytest.mark.parametrize("raw", [None, "", "   ", "[]", []])
def test_parse_empty_values(raw):
    assert parse_tag_set(raw) == frozenset()


def test_parse_drops_blank_tags_and_duplicates():
    assert parse_tag_set('["acne", "", "ACNE", "  "]') == frozenset({"acne"})


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '["acne"',
        '"oily"',
        '{"oily": true}',
        "42",
        '["acne", 3]',
        '[null]',
        12,
    ],
)
def test_parse_malformed_raises(raw):
    with pytest.raises(TagParseError):
        parse_tag_set(raw)


def test_tags_or_empty_maps_errors_to_empty_set():
    assert tags_or_empty("{broken", field="concerns", product_id="p1") == frozenset()


def test_tags_or_empty_passes_valid_tags_through():
    assert tags_or_empty('["dry"]') == frozenset({"dry"})
