"""Sitemap entry model."""
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ChangeFrequency(str, Enum):
    """Change-frequency hints understood by search crawlers."""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


class SitemapEntry(BaseModel):
    """A URL advertised to crawlers. Derived on demand, never stored."""
    url: str
    last_modified: datetime
    change_frequency: ChangeFrequency
    priority: float = Field(ge=0.0, le=1.0)

    @field_validator("last_modified")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
