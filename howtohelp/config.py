"""
Configuration management for the HowToHelp site.

This module uses pydantic-settings to manage all configuration aspects including:
- The CMS connection (base URL, revalidation window, timeouts)
- Public site identity used for sitemaps and structured metadata
- Caching
- Logging
- The web server

Configuration is loaded from environment variables, .env files, or mounted secrets.
Nested values use a double underscore, e.g. ``CMS__BASE_URL``.
"""
from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from howtohelp import DEFAULT_AUTHOR, DEFAULT_SITE_URL


class LogLevel(str, Enum):
    """Log levels supported by the application."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class CMSConfig(BaseModel):
    """Configuration for the headless CMS connection."""
    # Left empty when unset; every fetch then fails as a transport error.
    base_url: str = ""
    api_token: Optional[str] = None
    revalidate_seconds: int = 60
    timeout_seconds: float = 10.0
    retry_attempts: int = 1

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended directly."""
        return v.strip().rstrip("/")

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v

    def is_configured(self) -> bool:
        """Return True when the base URL looks like an absolute HTTP URL."""
        parsed = urlparse(self.base_url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class SiteConfig(BaseModel):
    """Public identity of the site."""
    url: str = DEFAULT_SITE_URL
    name: str = "HowToHelp"
    tagline: str = "Empowering Youth & Communities"
    description: str = (
        "Empowering youth and transforming communities through education, "
        "civic responsibility, and actionable kindness."
    )
    default_author: str = DEFAULT_AUTHOR
    logo_path: str = "/logo.png"
    same_as: List[str] = Field(
        default_factory=lambda: [
            "https://twitter.com/howtohelp",
            "https://linkedin.com/company/howtohelp",
        ]
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the site URL format."""
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid site url: {v}")
        return v.rstrip("/")

    @property
    def logo_url(self) -> str:
        return f"{self.url}{self.logo_path}"


class CacheConfig(BaseModel):
    """Configuration for the revalidation cache."""
    enabled: bool = True
    cleanup_interval_seconds: int = 60


class MetricsConfig(BaseModel):
    """Configuration for logging."""
    log_level: LogLevel = LogLevel.INFO
    structured_logging: bool = True


class WebConfig(BaseModel):
    """Configuration for the web server."""
    host: str = "0.0.0.0"
    port: int = 8080


class Settings(BaseSettings):
    """Main settings class for the HowToHelp site."""
    # Application metadata
    app_name: str = "howtohelp-site"
    version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False)

    # Component configurations
    cms: CMSConfig = Field(default_factory=CMSConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )


def load_settings() -> Settings:
    """Load settings from environment variables and .env file."""
    return Settings()
