"""
Search-engine metadata for pages.

Page metadata (title, description, OpenGraph) and JSON-LD blocks are pure
projections of the Article and Category models plus the site configuration.
"""
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from howtohelp.config import Settings
from howtohelp.models.article import Article
from howtohelp.models.category import Category

SCHEMA_CONTEXT = "https://schema.org"


class OpenGraph(BaseModel):
    """OpenGraph properties rendered as ``og:*`` meta tags."""
    title: str
    description: Optional[str] = None
    type: str = "website"
    url: Optional[str] = None
    published_time: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class PageMetadata(BaseModel):
    """Head metadata for a rendered page."""
    title: str
    description: Optional[str] = None
    canonical_url: Optional[str] = None
    open_graph: Optional[OpenGraph] = None
    use_title_template: bool = True

    def full_title(self, site_name: str) -> str:
        """Apply the site-wide ``%s | <site>`` title template."""
        return f"{self.title} | {site_name}"


def article_image_url(article: Article, settings: Settings) -> str:
    """Absolute URL of the featured image, falling back to the site logo."""
    if article.featured_image and article.featured_image.url:
        image_url = article.featured_image.url
        if image_url.startswith(("http://", "https://")):
            return image_url
        return f"{settings.cms.base_url}{image_url}"
    return settings.site.logo_url


def site_metadata(settings: Settings) -> PageMetadata:
    site = settings.site
    title = f"{site.name} - {site.tagline}"
    return PageMetadata(
        title=title,
        description=site.description,
        canonical_url=site.url,
        use_title_template=False,
        open_graph=OpenGraph(
            title=title,
            description=site.description,
            type="website",
            url=site.url,
            images=[site.logo_url],
        ),
    )


def article_metadata(article: Optional[Article], settings: Settings) -> PageMetadata:
    if article is None:
        return PageMetadata(title="Article Not Found")

    description = article.summary or None
    return PageMetadata(
        title=article.title,
        description=description,
        canonical_url=f"{settings.site.url}{article.path}",
        open_graph=OpenGraph(
            title=article.title,
            description=description,
            type="article",
            url=f"{settings.site.url}{article.path}",
            published_time=article.published_at.isoformat() if article.published_at else None,
            authors=[article.author or settings.site.default_author],
            tags=article.tag_names,
            images=[article_image_url(article, settings)],
        ),
    )


def category_metadata(category: Optional[Category], settings: Settings) -> PageMetadata:
    if category is None:
        return PageMetadata(title="Category Not Found")

    return PageMetadata(
        title=category.name,
        description=category.summary,
        canonical_url=f"{settings.site.url}{category.path}",
        open_graph=OpenGraph(
            title=category.name,
            description=category.summary,
            type="website",
            url=f"{settings.site.url}{category.path}",
        ),
    )


def article_json_ld(article: Article, settings: Settings) -> Dict[str, Any]:
    """``BlogPosting`` description of an article."""
    published = article.published_at.isoformat() if article.published_at else None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BlogPosting",
        "headline": article.title,
        "description": article.summary,
        "author": {
            "@type": "Person",
            "name": article.author or settings.site.default_author,
        },
        "datePublished": published,
        "dateModified": published,
        "image": [article_image_url(article, settings)],
    }


def organization_json_ld(settings: Settings) -> Dict[str, Any]:
    """``Organization`` description emitted on every page."""
    site = settings.site
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": site.name,
        "url": site.url,
        "logo": site.logo_url,
        "sameAs": list(site.same_as),
        "description": site.description,
    }


def dump_json_ld(data: Dict[str, Any]) -> str:
    """Serialise JSON-LD for embedding inside a ``<script>`` element."""
    # "</" would close the script element early.
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
