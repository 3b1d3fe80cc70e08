"""
Category model.

Color and icon are carried through untouched for the templates; they have no
meaning to the resolvers.
"""
from typing import Any, Optional

from pydantic import field_validator

from howtohelp.models.base import CMSModel, empty_if_none, route_key_for


class Category(CMSModel):
    """A topical grouping of articles."""
    id: int
    document_id: Optional[str] = None
    name: str = ""
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def null_name(cls, v: Any) -> Any:
        return empty_if_none(v)

    @property
    def route_key(self) -> str:
        return route_key_for(self.slug, self.id)

    @property
    def path(self) -> str:
        return f"/categories/{self.route_key}"

    @property
    def summary(self) -> str:
        """Description shown in listings and page metadata."""
        return self.description or f"Articles about {self.name}"
