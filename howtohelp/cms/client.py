"""
Content API client for the Strapi CMS.

The client issues GET requests against ``<base_url><path>`` and turns every
outcome into a FetchResult. Transport failures, non-success statuses and
malformed bodies are logged here and handed back as failures; nothing is
raised to the resolvers.

Successful payloads are reused for ``revalidate_seconds`` per unique
(path, query-string), which is the site's staleness window.
"""
import json
from typing import Any, Optional

import httpx
import structlog

from howtohelp.cache import CacheClient
from howtohelp.cms.query import StrapiQuery
from howtohelp.config import CMSConfig
from howtohelp.fetcher.http_client import AsyncHTTPClient
from howtohelp.models.fetch_result import FetchErrorKind, FetchResult

# Set up structured logger
logger = structlog.get_logger()


class ContentAPIClient:
    """
    Read-only client for the CMS REST API.

    The configuration is passed in explicitly so tests can point the client
    at a stub base URL and transport.
    """

    def __init__(
        self,
        config: CMSConfig,
        http_client: Optional[AsyncHTTPClient] = None,
        cache: Optional[CacheClient] = None,
    ):
        """
        Initialize the content client.

        Args:
            config: CMS configuration
            http_client: Optional HTTP client; one is created (and owned)
                when not supplied
            cache: Optional revalidation cache
        """
        self.config = config
        self.cache = cache
        self._owns_http_client = http_client is None
        if http_client is None:
            headers = {}
            if config.api_token:
                headers["Authorization"] = f"Bearer {config.api_token}"
            http_client = AsyncHTTPClient(
                timeout=config.timeout_seconds,
                retry_attempts=config.retry_attempts,
                default_headers=headers,
            )
        self.http_client = http_client

    async def __aenter__(self) -> "ContentAPIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.close()

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.config.base_url}{path}"

    @staticmethod
    def cache_key(path: str, query: Optional[StrapiQuery]) -> str:
        query_string = query.to_query_string() if query else ""
        return f"cms:{path}?{query_string}"

    async def fetch(self, path: str, query: Optional[StrapiQuery] = None) -> FetchResult:
        """
        GET a resource and return the ``data`` member of its envelope.

        Args:
            path: Resource path, e.g. ``/api/articles``
            query: Optional query parameters

        Returns:
            FetchResult: success carrying the envelope's ``data``, or a
                failure describing what went wrong
        """
        key = self.cache_key(path, query)
        ttl = self.config.revalidate_seconds

        if self.cache is not None and ttl > 0:
            cached = await self.cache.get(key)
            if cached is not None:
                logger.debug("CMS response served from cache", path=path)
                return FetchResult.success(cached)

        result = await self._fetch_uncached(path, query)

        if result.ok and self.cache is not None and ttl > 0:
            await self.cache.set(key, result.data, ttl)

        return result

    async def _fetch_uncached(self, path: str, query: Optional[StrapiQuery]) -> FetchResult:
        url = self.build_url(path)
        params = query.to_params() if query else None

        if not self.config.is_configured():
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.TRANSPORT,
                    "CMS base URL is not configured",
                ),
                path,
            )

        try:
            response = await self.http_client.get(url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._log_failure(
                FetchResult.failure(FetchErrorKind.TRANSPORT, str(e) or type(e).__name__),
                path,
            )

        if not response.is_success:
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.HTTP_STATUS,
                    f"HTTP {response.status_code}",
                    status_code=response.status_code,
                ),
                path,
            )

        try:
            payload: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.MALFORMED,
                    f"Invalid JSON body: {e}",
                    status_code=response.status_code,
                ),
                path,
            )

        if not isinstance(payload, dict) or "data" not in payload:
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.MALFORMED,
                    "Response envelope has no 'data' member",
                    status_code=response.status_code,
                ),
                path,
            )

        return FetchResult.success(payload["data"], status_code=response.status_code)

    async def fetch_collection(
        self,
        path: str,
        query: Optional[StrapiQuery] = None,
    ) -> FetchResult:
        """Fetch a collection endpoint; ``data`` must be a list."""
        result = await self.fetch(path, query)
        if result.ok and not isinstance(result.data, list):
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.MALFORMED,
                    "Collection 'data' is not a list",
                    status_code=result.status_code,
                ),
                path,
            )
        return result

    async def fetch_single(
        self,
        path: str,
        query: Optional[StrapiQuery] = None,
    ) -> FetchResult:
        """Fetch a single-resource endpoint; ``data`` must be an object."""
        result = await self.fetch(path, query)
        if result.ok and not isinstance(result.data, dict):
            return self._log_failure(
                FetchResult.failure(
                    FetchErrorKind.MALFORMED,
                    "Single-resource 'data' is not an object",
                    status_code=result.status_code,
                ),
                path,
            )
        return result

    @staticmethod
    def _log_failure(result: FetchResult, path: str) -> FetchResult:
        logger.warning(
            "CMS request failed",
            path=path,
            error_kind=result.error_kind.value if result.error_kind else None,
            status_code=result.status_code,
            reason=result.reason,
        )
        return result
