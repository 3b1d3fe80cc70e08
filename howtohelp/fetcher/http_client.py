"""
HTTP client module for the HowToHelp site.

This module provides an async HTTP client for talking to the CMS, with
bounded attempts, timeout handling and structured diagnostics. It uses httpx
for making HTTP requests and tenacity for the attempt loop.
"""
import time
from typing import Any, Dict, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Set up structured logger
logger = structlog.get_logger()

# Constants
DEFAULT_USER_AGENT = "HowToHelp-Site/0.1.0 (+https://howtohelp.in)"
DEFAULT_TIMEOUT = 10.0  # seconds
DEFAULT_RETRY_ATTEMPTS = 1
DEFAULT_RETRY_MIN_WAIT = 0.5  # seconds
DEFAULT_RETRY_MAX_WAIT = 5.0  # seconds
DEFAULT_RETRY_MULTIPLIER = 1.0

# Only transport-level failures are worth another attempt; an HTTP status is
# a definite answer from the server.
RETRYABLE_EXCEPTIONS = (httpx.TransportError,)


class AsyncHTTPClient:
    """
    Async HTTP client for fetching content from the CMS.

    This class provides a wrapper around httpx with an attempt loop,
    timeout handling, and logging. It does not raise on HTTP error
    statuses; callers inspect the response.
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        retry_min_wait: float = DEFAULT_RETRY_MIN_WAIT,
        retry_max_wait: float = DEFAULT_RETRY_MAX_WAIT,
        retry_multiplier: float = DEFAULT_RETRY_MULTIPLIER,
        default_headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            user_agent: User agent string to use for requests
            timeout: Request timeout in seconds
            retry_attempts: Maximum number of attempts per request
            retry_min_wait: Minimum wait time between attempts in seconds
            retry_max_wait: Maximum wait time between attempts in seconds
            retry_multiplier: Multiplier for exponential backoff
            default_headers: Default headers to include in all requests
            transport: Optional httpx transport, used to stub the network
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait
        self.retry_multiplier = retry_multiplier

        self.default_headers = dict(default_headers or {})
        if "User-Agent" not in self.default_headers:
            self.default_headers["User-Agent"] = self.user_agent
        self.default_headers.setdefault("Accept", "application/json")

        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers=self.default_headers,
            transport=transport,
        )

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        Make a GET request to a URL.

        Args:
            url: URL to fetch
            headers: Optional headers to include in the request
            params: Optional query parameters (mapping or list of pairs)
            timeout: Request timeout in seconds (overrides client default)

        Returns:
            httpx.Response: HTTP response, whatever its status

        Raises:
            httpx.HTTPError: If the request fails at the transport level
                on every attempt, or the URL is unusable
        """
        request_headers = {**self.default_headers}
        if headers:
            request_headers.update(headers)

        request_timeout = httpx.Timeout(timeout or self.timeout)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(
                multiplier=self.retry_multiplier,
                min=self.retry_min_wait,
                max=self.retry_max_wait,
            ),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            reraise=True,
        ):
            with attempt:
                try:
                    start_time = time.time()
                    response = await self.client.get(
                        url,
                        headers=request_headers,
                        params=params,
                        timeout=request_timeout,
                    )
                except RETRYABLE_EXCEPTIONS as e:
                    logger.warning(
                        "HTTP request failed",
                        url=url,
                        error=str(e),
                        attempt=attempt.retry_state.attempt_number,
                        max_attempts=self.retry_attempts,
                    )
                    raise

                logger.debug(
                    "HTTP request completed",
                    url=str(response.request.url),
                    status_code=response.status_code,
                    elapsed_seconds=time.time() - start_time,
                    attempt=attempt.retry_state.attempt_number,
                )
                return response
