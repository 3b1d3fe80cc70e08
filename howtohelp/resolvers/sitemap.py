"""
Sitemap aggregation.

The sitemap lists the site root, the category index, every category and
every article. Articles and categories are fetched concurrently; a failed
collection simply contributes no entries.
"""
import asyncio
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import List, Optional

import structlog

from howtohelp.cms import ARTICLES_PATH, CATEGORIES_PATH, ContentAPIClient, StrapiQuery
from howtohelp.models.article import Article
from howtohelp.models.category import Category
from howtohelp.models.sitemap import ChangeFrequency, SitemapEntry
from howtohelp.resolvers.base import parse_many

logger = structlog.get_logger()

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
MAX_SITEMAP_ARTICLES = 1000
MAX_SITEMAP_CATEGORIES = 1000


async def fetch_sitemap_articles(client: ContentAPIClient) -> List[Article]:
    query = StrapiQuery().fields("slug", "publishedAt").page_size(MAX_SITEMAP_ARTICLES)
    result = await client.fetch_collection(ARTICLES_PATH, query)
    if not result.ok:
        logger.warning("Sitemap: article collection unavailable", reason=result.reason)
        return []
    return parse_many(Article, result.data)


async def fetch_sitemap_categories(client: ContentAPIClient) -> List[Category]:
    query = StrapiQuery().fields("slug").page_size(MAX_SITEMAP_CATEGORIES)
    result = await client.fetch_collection(CATEGORIES_PATH, query)
    if not result.ok:
        logger.warning("Sitemap: category collection unavailable", reason=result.reason)
        return []
    return parse_many(Category, result.data)


async def build_sitemap(
    client: ContentAPIClient,
    site_url: str,
    now: Optional[datetime] = None,
) -> List[SitemapEntry]:
    """
    Build the ordered list of sitemap entries.

    Order: site root, category index, categories in fetch order, then
    articles in fetch order.

    Args:
        client: Content client
        site_url: Public base URL of the site, without trailing slash
        now: Generation time; defaults to the current UTC time

    Returns:
        List[SitemapEntry]: ``2 + len(categories) + len(articles)`` entries
    """
    now = now or datetime.now(timezone.utc)
    site_url = site_url.rstrip("/")

    articles, categories = await asyncio.gather(
        fetch_sitemap_articles(client),
        fetch_sitemap_categories(client),
    )

    entries = [
        SitemapEntry(
            url=site_url,
            last_modified=now,
            change_frequency=ChangeFrequency.DAILY,
            priority=1.0,
        ),
        SitemapEntry(
            url=f"{site_url}/categories",
            last_modified=now,
            change_frequency=ChangeFrequency.WEEKLY,
            priority=0.8,
        ),
    ]
    entries.extend(
        SitemapEntry(
            url=f"{site_url}{category.path}",
            last_modified=now,
            change_frequency=ChangeFrequency.WEEKLY,
            priority=0.7,
        )
        for category in categories
    )
    entries.extend(
        SitemapEntry(
            url=f"{site_url}{article.path}",
            last_modified=article.published_at or now,
            change_frequency=ChangeFrequency.WEEKLY,
            priority=0.8,
        )
        for article in articles
    )

    logger.info(
        "Sitemap built",
        entries=len(entries),
        categories=len(categories),
        articles=len(articles),
    )
    return entries


def render_sitemap_xml(entries: List[SitemapEntry]) -> str:
    """Serialise entries as a sitemaps.org urlset document."""
    ET.register_namespace("", SITEMAP_NS)
    urlset = ET.Element(f"{{{SITEMAP_NS}}}urlset")
    for entry in entries:
        url_el = ET.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        ET.SubElement(url_el, f"{{{SITEMAP_NS}}}loc").text = entry.url
        ET.SubElement(url_el, f"{{{SITEMAP_NS}}}lastmod").text = entry.last_modified.isoformat()
        ET.SubElement(url_el, f"{{{SITEMAP_NS}}}changefreq").text = entry.change_frequency.value
        ET.SubElement(url_el, f"{{{SITEMAP_NS}}}priority").text = f"{entry.priority:.1f}"
    ET.indent(urlset, space="  ")
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
