"""
Article resolvers.

Articles are addressed by slug when they have one and by numeric id
otherwise, so a detail lookup tries an ordered chain of strategies until one
produces an article. Related articles are the most recent ones sharing the
article's category.
"""
from typing import List, Optional, Sequence

import structlog

from howtohelp.cms import (
    ARTICLES_PATH,
    ContentAPIClient,
    StrapiQuery,
    quote_path_segment,
    sanitize_filter_value,
)
from howtohelp.models.article import Article
from howtohelp.resolvers.base import LookupStrategy, parse_many, parse_one

logger = structlog.get_logger()

ARTICLE_RELATIONS = ("category", "tags", "featuredImage")
RELATED_ARTICLES_LIMIT = 3


class SlugLookup(LookupStrategy):
    """Filter the collection by exact slug and take the first match."""

    name = "slug"

    async def lookup(self, client: ContentAPIClient, key: str) -> Optional[Article]:
        query = StrapiQuery().filter_eq("slug", value=key).populate(*ARTICLE_RELATIONS)
        result = await client.fetch_collection(ARTICLES_PATH, query)
        if not result.ok or not result.data:
            return None
        # API order decides between duplicates; no sort is applied here.
        return parse_one(Article, result.data[0])


class IdLookup(LookupStrategy):
    """Treat the key as an opaque identifier for the single-resource endpoint."""

    name = "id"

    async def lookup(self, client: ContentAPIClient, key: str) -> Optional[Article]:
        query = StrapiQuery().populate(*ARTICLE_RELATIONS)
        result = await client.fetch_single(f"{ARTICLES_PATH}/{quote_path_segment(key)}", query)
        if not result.ok:
            if result.is_not_found:
                logger.debug("No article with id", key=key)
            return None
        return parse_one(Article, result.data)


DEFAULT_LOOKUP_STRATEGIES: Sequence[LookupStrategy] = (SlugLookup(), IdLookup())


async def resolve_article(
    client: ContentAPIClient,
    slug_or_id: str,
    strategies: Sequence[LookupStrategy] = DEFAULT_LOOKUP_STRATEGIES,
) -> Optional[Article]:
    """
    Resolve an article from a slug or an id.

    Strategies are tried in order and the first article found wins. None
    means the article does not exist (or could not be fetched), and the
    caller should answer with a not-found page.
    """
    key = sanitize_filter_value(slug_or_id)
    if not key:
        return None

    for strategy in strategies:
        article = await strategy.lookup(client, key)
        if article is not None:
            logger.debug("Article resolved", key=key, strategy=strategy.name, article_id=article.id)
            return article

    logger.info("Article not found", key=key)
    return None


async def resolve_related(
    client: ContentAPIClient,
    category_slug: Optional[str],
    exclude_article_id: Optional[int],
) -> List[Article]:
    """
    Most recent articles in the same category, minus the current one.

    The limit is applied by the query before exclusion, so fewer than three
    articles come back when the current article is among the latest three.
    """
    category_slug = sanitize_filter_value(category_slug or "")
    if not category_slug:
        return []

    query = (
        StrapiQuery()
        .filter_eq("category", "slug", value=category_slug)
        .populate("category")
        .sort("publishedAt", "desc")
        .limit(RELATED_ARTICLES_LIMIT)
    )
    result = await client.fetch_collection(ARTICLES_PATH, query)
    if not result.ok:
        return []

    articles = parse_many(Article, result.data)
    return [article for article in articles if article.id != exclude_article_id]


async def list_latest_articles(client: ContentAPIClient) -> List[Article]:
    """All articles, newest first, for the home page."""
    query = StrapiQuery().populate_all().sort("publishedAt", "desc")
    result = await client.fetch_collection(ARTICLES_PATH, query)
    if not result.ok:
        return []
    return parse_many(Article, result.data)
