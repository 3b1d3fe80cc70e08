"""
Resolvers for the HowToHelp site.

Each resolver calls the content client and applies the page-specific
fallback or derivation logic, returning models (or empty defaults) to the
web layer.
"""
from howtohelp.resolvers.article import (
    DEFAULT_LOOKUP_STRATEGIES,
    IdLookup,
    LookupStrategy,
    SlugLookup,
    list_latest_articles,
    resolve_article,
    resolve_related,
)
from howtohelp.resolvers.category import (
    DEFAULT_CATEGORY_LOOKUP_STRATEGIES,
    CategoryIdLookup,
    CategorySlugLookup,
    list_categories,
    resolve_articles_by_category,
    resolve_category,
)
from howtohelp.resolvers.sitemap import build_sitemap, render_sitemap_xml

__all__ = [
    "DEFAULT_CATEGORY_LOOKUP_STRATEGIES",
    "DEFAULT_LOOKUP_STRATEGIES",
    "CategoryIdLookup",
    "CategorySlugLookup",
    "IdLookup",
    "LookupStrategy",
    "SlugLookup",
    "build_sitemap",
    "list_categories",
    "list_latest_articles",
    "render_sitemap_xml",
    "resolve_article",
    "resolve_articles_by_category",
    "resolve_category",
    "resolve_related",
]
