import pytest

from howtohelp.models.category import Category
from howtohelp.resolvers.category import (
    list_categories,
    resolve_articles_by_category,
    resolve_category,
)


@pytest.mark.asyncio
async def test_resolve_category_by_slug(fake_cms, client):
    fake_cms.add(
        "/api/categories",
        json={"data": [{"id": 3, "name": "Education", "slug": "education", "icon": "📚"}]},
        params={"filters[slug][$eq]": "education"},
    )

    category = await resolve_category(client, "education")

    assert category.id == 3
    assert category.name == "Education"
    assert category.icon == "📚"


@pytest.mark.asyncio
async def test_resolve_category_missing(fake_cms, client):
    fake_cms.add("/api/categories", json={"data": []})
    assert await resolve_category(client, "nope") is None


@pytest.mark.asyncio
async def test_resolve_category_failure(fake_cms, client):
    fake_cms.add("/api/categories", json={}, status=502)
    assert await resolve_category(client, "education") is None


@pytest.mark.asyncio
async def test_articles_by_category_query(fake_cms, client):
    fake_cms.add(
        "/api/articles",
        json={"data": [
            {"id": 2, "title": "Newer", "tags": [{"id": 1, "name": "kindness"}]},
            {"id": 1, "title": "Older"},
        ]},
    )

    articles = await resolve_articles_by_category(client, "education")

    assert [a.id for a in articles] == [2, 1]
    assert articles[0].tag_names == ["kindness"]
    params = fake_cms.requests[0].url.params
    assert params["filters[category][slug][$eq]"] == "education"
    assert params["populate[0]"] == "category"
    assert params["populate[1]"] == "tags"
    assert params["sort"] == "publishedAt:desc"
    assert "pagination[limit]" not in params


@pytest.mark.asyncio
async def test_articles_by_category_failure_is_empty(fake_cms, client):
    fake_cms.add("/api/articles", json={}, status=500)
    assert await resolve_articles_by_category(client, "education") == []


@pytest.mark.asyncio
async def test_list_categories_sorted_by_name(fake_cms, client):
    fake_cms.add(
        "/api/categories",
        json={"data": [{"id": 1, "name": "Civics"}, {"id": 2, "name": "Education"}]},
        params={"sort": "name:asc"},
    )

    categories = await list_categories(client)

    assert [c.name for c in categories] == ["Civics", "Education"]


@pytest.mark.asyncio
async def test_slugless_category_resolves_by_id(fake_cms, client):
    fake_cms.add("/api/categories", json={"data": []}, params={"filters[slug][$eq]": "11"})
    fake_cms.add(
        "/api/categories",
        json={"data": [{"id": 11, "name": "Civics", "slug": None}]},
        params={"filters[id][$eq]": "11"},
    )

    category = await resolve_category(client, "11")

    assert category.id == 11
    assert category.path == "/categories/11"
    assert len(fake_cms.calls_to("/api/categories")) == 2


@pytest.mark.asyncio
async def test_non_numeric_key_skips_id_lookup(fake_cms, client):
    fake_cms.add("/api/categories", json={"data": []})

    assert await resolve_category(client, "civics") is None
    assert len(fake_cms.requests) == 1
    assert "filters[id][$eq]" not in fake_cms.requests[0].url.params


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["", "   ", "?", "[]&"])
async def test_key_empty_after_sanitizing_skips_fetching(fake_cms, client, key):
    assert await resolve_category(client, key) is None
    assert await resolve_articles_by_category(client, key) == []
    assert fake_cms.requests == []


@pytest.mark.asyncio
async def test_articles_by_slugless_category_filter_by_id(fake_cms, client):
    fake_cms.add("/api/articles", json={"data": [{"id": 4, "title": "Vote"}]})

    articles = await resolve_articles_by_category(client, Category(id=11, name="Civics"))

    assert [a.id for a in articles] == [4]
    params = fake_cms.requests[0].url.params
    assert params["filters[category][id][$eq]"] == "11"
    assert "filters[category][slug][$eq]" not in params


@pytest.mark.asyncio
async def test_articles_by_category_model_uses_slug(fake_cms, client):
    fake_cms.add("/api/articles", json={"data": []})

    await resolve_articles_by_category(client, Category(id=3, name="Education", slug="education"))

    assert fake_cms.requests[0].url.params["filters[category][slug][$eq]"] == "education"
