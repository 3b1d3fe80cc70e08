"""
Category resolvers: the category index and per-category listings.

Categories are routed like articles: by slug, or by numeric id when the
category has no slug.
"""
from typing import List, Optional, Sequence, Union

import structlog

from howtohelp.cms import (
    ARTICLES_PATH,
    CATEGORIES_PATH,
    ContentAPIClient,
    StrapiQuery,
    sanitize_filter_value,
)
from howtohelp.models.article import Article
from howtohelp.models.category import Category
from howtohelp.resolvers.base import LookupStrategy, parse_many, parse_one

logger = structlog.get_logger()


async def _first_category(client: ContentAPIClient, query: StrapiQuery) -> Optional[Category]:
    result = await client.fetch_collection(CATEGORIES_PATH, query)
    if not result.ok or not result.data:
        return None
    return parse_one(Category, result.data[0])


class CategorySlugLookup(LookupStrategy):
    """Filter categories by exact slug."""

    name = "slug"

    async def lookup(self, client: ContentAPIClient, key: str) -> Optional[Category]:
        return await _first_category(client, StrapiQuery().filter_eq("slug", value=key))


class CategoryIdLookup(LookupStrategy):
    """Filter categories by numeric id; other keys are skipped."""

    name = "id"

    async def lookup(self, client: ContentAPIClient, key: str) -> Optional[Category]:
        if not key.isdigit():
            return None
        return await _first_category(client, StrapiQuery().filter_eq("id", value=key))


DEFAULT_CATEGORY_LOOKUP_STRATEGIES: Sequence[LookupStrategy] = (
    CategorySlugLookup(),
    CategoryIdLookup(),
)


async def resolve_category(
    client: ContentAPIClient,
    slug: str,
    strategies: Sequence[LookupStrategy] = DEFAULT_CATEGORY_LOOKUP_STRATEGIES,
) -> Optional[Category]:
    """Category with the given slug (or id, for slugless categories), or None."""
    key = sanitize_filter_value(slug)
    if not key:
        return None

    for strategy in strategies:
        category = await strategy.lookup(client, key)
        if category is not None:
            logger.debug("Category resolved", key=key, strategy=strategy.name, category_id=category.id)
            return category

    logger.info("Category not found", key=key)
    return None


async def resolve_articles_by_category(
    client: ContentAPIClient,
    category: Union[str, Category],
) -> List[Article]:
    """
    Every article in a category, newest first, with category and tags.

    A slug filters on ``category.slug``. A resolved Category without a slug
    filters on ``category.id`` instead.
    """
    if isinstance(category, Category) and not category.slug:
        field, value = "id", str(category.id)
    else:
        slug = category.slug if isinstance(category, Category) else category
        field, value = "slug", sanitize_filter_value(slug or "")
    if not value:
        return []

    query = (
        StrapiQuery()
        .filter_eq("category", field, value=value)
        .populate("category", "tags")
        .sort("publishedAt", "desc")
    )
    result = await client.fetch_collection(ARTICLES_PATH, query)
    if not result.ok:
        return []
    return parse_many(Article, result.data)


async def list_categories(client: ContentAPIClient) -> List[Category]:
    """All categories ordered by name."""
    query = StrapiQuery().sort("name", "asc")
    result = await client.fetch_collection(CATEGORIES_PATH, query)
    if not result.ok:
        return []
    return parse_many(Category, result.data)
