"""
CMS package for the HowToHelp site.

Provides the Strapi query builder and the content client that wraps every
request outcome in a FetchResult.
"""
from howtohelp.cms.client import ContentAPIClient
from howtohelp.cms.query import StrapiQuery, quote_path_segment, sanitize_filter_value

ARTICLES_PATH = "/api/articles"
CATEGORIES_PATH = "/api/categories"

__all__ = [
    "ARTICLES_PATH",
    "CATEGORIES_PATH",
    "ContentAPIClient",
    "StrapiQuery",
    "quote_path_segment",
    "sanitize_filter_value",
]
