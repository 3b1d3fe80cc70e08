"""Tag model."""
from typing import Any, Optional

from pydantic import field_validator

from howtohelp.models.base import CMSModel, empty_if_none


class Tag(CMSModel):
    """A free-form label attached to articles."""
    id: int
    document_id: Optional[str] = None
    name: str = ""
    slug: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def null_name(cls, v: Any) -> Any:
        return empty_if_none(v)
