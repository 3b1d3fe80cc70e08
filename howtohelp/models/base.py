"""
Shared base for read-only projections of CMS records.

Strapi v5 returns flat records, while v4 nests every field under
``attributes`` and wraps relations in ``{"data": ...}``. The base model
flattens both shapes before field validation so the rest of the code only
ever sees the flat form.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def flatten_record(value: Any) -> Any:
    """Merge a v4 ``attributes`` block into the top level of a record."""
    if isinstance(value, dict) and isinstance(value.get("attributes"), dict):
        flat = {k: v for k, v in value.items() if k != "attributes"}
        flat.update(value["attributes"])
        return flat
    return value


def unwrap_relation(value: Any) -> Any:
    """Unwrap a ``{"data": ...}`` relation envelope, if present."""
    if isinstance(value, dict) and set(value.keys()) <= {"data", "meta"} and "data" in value:
        value = value["data"]
    if isinstance(value, list):
        return [flatten_record(item) for item in value]
    return flatten_record(value)


class CMSModel(BaseModel):
    """Base class for records fetched from the CMS."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_attributes(cls, data: Any) -> Any:
        return flatten_record(data)


def route_key_for(slug: Optional[str], record_id: Any) -> str:
    """Slug is the preferred routing key; the id stands in when it is absent."""
    if slug:
        return slug
    return str(record_id)


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def empty_if_none(value: Any) -> Any:
    """Strapi sends ``null`` for unset text fields; models use an empty string."""
    return "" if value is None else value
