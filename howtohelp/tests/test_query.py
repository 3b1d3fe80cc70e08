import pytest

from howtohelp.cms.query import (
    MAX_FILTER_VALUE_LENGTH,
    StrapiQuery,
    quote_path_segment,
    sanitize_filter_value,
)


def test_builds_strapi_bracket_params_in_order():
    query = (
        StrapiQuery()
        .filter_eq("category", "slug", value="education")
        .populate("category", "tags")
        .sort("publishedAt", "desc")
        .limit(3)
    )
    assert query.to_params() == [
        ("filters[category][slug][$eq]", "education"),
        ("populate[0]", "category"),
        ("populate[1]", "tags"),
        ("sort", "publishedAt:desc"),
        ("pagination[limit]", "3"),
    ]


def test_fields_and_page_size():
    query = StrapiQuery().fields("slug", "publishedAt").page_size(1000)
    assert query.to_query_string() == (
        "fields[0]=slug&fields[1]=publishedAt&pagination[pageSize]=1000"
    )


def test_populate_all():
    assert StrapiQuery().populate_all().to_params() == [("populate", "*")]


def test_empty_query_is_falsy():
    assert not StrapiQuery()
    assert StrapiQuery().limit(1)


def test_rejects_bad_field_names_and_directions():
    with pytest.raises(ValueError):
        StrapiQuery().filter_eq("slug]&x[", value="a")
    with pytest.raises(ValueError):
        StrapiQuery().sort("publishedAt", "sideways")
    with pytest.raises(ValueError):
        StrapiQuery().filter_eq(value="a")


def test_sanitize_strips_reserved_and_control_characters():
    assert sanitize_filter_value("  give-back  ") == "give-back"
    assert sanitize_filter_value("a&filters[id][$ne]=1") == "afiltersid$ne1"
    assert sanitize_filter_value("x\n\ty\x00") == "xy"
    assert sanitize_filter_value(42) == "42"


def test_sanitize_caps_length():
    assert len(sanitize_filter_value("a" * 500)) == MAX_FILTER_VALUE_LENGTH


def test_quote_path_segment_cannot_escape_the_path():
    assert quote_path_segment("../admin") == "..%2Fadmin"
    assert quote_path_segment("7") == "7"
