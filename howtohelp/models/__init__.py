"""
Central re-exports for the HowToHelp data models.

This module exposes the canonical models from their dedicated modules to
provide stable import paths as "howtohelp.models" without redefining types.
"""
from .article import Article, FeaturedImage
from .category import Category
from .fetch_result import FetchErrorKind, FetchResult
from .lead import LeadSubmission
from .sitemap import ChangeFrequency, SitemapEntry
from .tag import Tag

__all__ = [
    "Article",
    "Category",
    "ChangeFrequency",
    "FeaturedImage",
    "FetchErrorKind",
    "FetchResult",
    "LeadSubmission",
    "SitemapEntry",
    "Tag",
]
