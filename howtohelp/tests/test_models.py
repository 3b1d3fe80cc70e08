from pydantic import BaseModel, ValidationError
import pytest

from howtohelp.models import (
    Article,
    Category,
    FetchErrorKind,
    FetchResult,
    LeadSubmission,
    SitemapEntry,
    Tag,
)


def test_models_exports_are_pydantic_models():
    for model in (Article, Category, Tag, SitemapEntry, FetchResult, LeadSubmission):
        assert issubclass(model, BaseModel)


def test_article_from_strapi_v5_record():
    article = Article.model_validate({
        "id": 1,
        "documentId": "abc123",
        "title": "How to Give Back",
        "description": "desc",
        "excerpt": "short",
        "content": "# Hello",
        "publishedAt": "2025-01-10T08:00:00.000Z",
        "slug": "give-back",
        "readTime": 7,
        "author": "Asha",
        "category": {"id": 3, "name": "Education", "slug": "education", "color": "#f00", "icon": "📚"},
        "tags": [{"id": 1, "documentId": "t1", "name": "kindness", "slug": "kindness"}],
        "featuredImage": {"url": "/uploads/a.png", "alternativeText": "A"},
    })

    assert article.document_id == "abc123"
    assert article.published_at.tzinfo is not None
    assert article.display_read_time == 7
    assert article.display_author == "Asha"
    assert article.category.slug == "education"
    assert article.category_slug == "education"
    assert article.tag_names == ["kindness"]
    assert article.featured_image.alternative_text == "A"
    assert article.route_key == "give-back"
    assert article.path == "/articles/give-back"


def test_article_from_strapi_v4_record():
    article = Article.model_validate({
        "id": 5,
        "attributes": {
            "title": "Nested",
            "slug": "nested",
            "category": {"data": {"id": 3, "attributes": {"name": "Civics", "slug": "civics"}}},
            "tags": {"data": [{"id": 1, "attributes": {"name": "vote"}}]},
            "featuredImage": {"data": {"id": 9, "attributes": {"url": "/uploads/b.png"}}},
        },
    })

    assert article.id == 5
    assert article.title == "Nested"
    assert article.category.name == "Civics"
    assert article.tag_names == ["vote"]
    assert article.featured_image.url == "/uploads/b.png"


def test_article_empty_relations():
    article = Article.model_validate({
        "id": 2,
        "category": {"data": None},
        "tags": None,
        "featuredImage": None,
    })
    assert article.category is None
    assert article.tags == []
    assert article.featured_image is None
    assert article.category_slug is None


def test_null_text_fields_become_empty():
    article = Article.model_validate({
        "id": 3,
        "title": None,
        "category": {"id": 1, "name": None, "slug": "civics"},
        "tags": [{"id": 1, "name": None}, {"id": 2, "name": "vote"}],
        "featuredImage": {"url": None},
    })
    assert article.title == ""
    assert article.category.name == ""
    assert article.tag_names == ["vote"]
    assert article.featured_image is None
    assert Category.model_validate({"id": 1, "name": None}).name == ""
    assert Tag.model_validate({"id": 1, "name": None}).name == ""


def test_article_display_defaults():
    article = Article(id=42)
    assert article.route_key == "42"
    assert article.display_author == "HowToHelp"
    assert article.display_read_time == 5
    assert Article(id=1, read_time=0).display_read_time == 5
    assert article.summary == ""
    assert Article(id=1, excerpt="ex").summary == "ex"
    assert Article(id=1, description="d", excerpt="ex").summary == "d"


def test_article_requires_id():
    with pytest.raises(ValidationError):
        Article.model_validate({"title": "no id"})


def test_category_summary_and_route():
    category = Category(id=3, name="Education")
    assert category.summary == "Articles about Education"
    assert category.path == "/categories/3"
    assert Category(id=3, name="E", slug="edu", description="All about it").summary == "All about it"


def test_sitemap_entry_priority_bounds():
    with pytest.raises(ValidationError):
        SitemapEntry(url="https://x", last_modified="2025-01-01T00:00:00", change_frequency="weekly", priority=1.5)


def test_fetch_result_helpers():
    ok = FetchResult.success([1])
    assert ok.ok and ok.data == [1]
    missing = FetchResult.failure(FetchErrorKind.HTTP_STATUS, "HTTP 404", status_code=404)
    assert not missing.ok
    assert missing.is_not_found
    assert not FetchResult.failure(FetchErrorKind.TRANSPORT, "down").is_not_found


def test_lead_submission_validation():
    lead = LeadSubmission(name="  Sam ", email="Sam@Example.org ")
    assert lead.name == "Sam"
    assert lead.email == "sam@example.org"
    with pytest.raises(ValidationError):
        LeadSubmission(name="", email="sam@example.org")
    with pytest.raises(ValidationError):
        LeadSubmission(name="Sam", email="not-an-email")
