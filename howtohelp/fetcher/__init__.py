"""
Fetcher package for the HowToHelp site.

This package provides the low-level async HTTP client used by the CMS
content client.
"""
from howtohelp.fetcher.http_client import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    AsyncHTTPClient,
)

__all__ = [
    "AsyncHTTPClient",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]
