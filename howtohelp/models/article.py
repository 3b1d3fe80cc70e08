"""
Article model for representing posts published through the CMS.

This module defines the Article model along with its featured image, with
validators that normalise the shapes the CMS may return and helpers the page
layer uses for display defaults.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import Field, field_validator

from howtohelp import DEFAULT_AUTHOR
from howtohelp.models.base import CMSModel, as_list, empty_if_none, route_key_for, unwrap_relation
from howtohelp.models.category import Category
from howtohelp.models.tag import Tag

DEFAULT_READ_TIME_MINUTES = 5


class FeaturedImage(CMSModel):
    """Reference to an uploaded image: a CMS-relative URL plus alt text."""
    url: str
    alternative_text: Optional[str] = None


class Article(CMSModel):
    """
    Represents a single article.

    Everything except the numeric id is optional, since collection queries
    may restrict the returned fields (the sitemap only asks for slug and
    publication date).
    """
    id: int
    document_id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    published_at: Optional[datetime] = None
    slug: Optional[str] = None
    read_time: Optional[int] = None
    author: Optional[str] = None
    category: Optional[Category] = None
    tags: List[Tag] = Field(default_factory=list)
    featured_image: Optional[FeaturedImage] = None

    @field_validator("title", mode="before")
    @classmethod
    def null_title(cls, v: Any) -> Any:
        return empty_if_none(v)

    @field_validator("category", "featured_image", mode="before")
    @classmethod
    def unwrap_single_relation(cls, v: Any) -> Any:
        v = unwrap_relation(v)
        # A multi-media field still yields a single featured image.
        if isinstance(v, list):
            v = v[0] if v else None
        # An image record without a url cannot be rendered.
        if isinstance(v, dict) and "url" in v and not v["url"]:
            return None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def unwrap_tags(cls, v: Any) -> List[Any]:
        return as_list(unwrap_relation(v))

    @field_validator("published_at")
    @classmethod
    def ensure_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure all datetime fields have timezone information."""
        if v and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def route_key(self) -> str:
        return route_key_for(self.slug, self.id)

    @property
    def path(self) -> str:
        return f"/articles/{self.route_key}"

    @property
    def display_author(self) -> str:
        return self.author or DEFAULT_AUTHOR

    @property
    def display_read_time(self) -> int:
        """Estimated read time in minutes; zero or missing falls back to 5."""
        return self.read_time or DEFAULT_READ_TIME_MINUTES

    @property
    def summary(self) -> str:
        """Description, then excerpt, as used for listings and metadata."""
        return self.description or self.excerpt or ""

    @property
    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags if tag.name]

    @property
    def category_slug(self) -> Optional[str]:
        if self.category is None:
            return None
        return self.category.slug
