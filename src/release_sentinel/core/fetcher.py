"""Fetch-text capability used by discovery and manifest retrieval.

The resolver only ever needs two network operations: GET a page as text
(directory listings, SHA512SUMS manifests) and HEAD a "latest" URL without
following the redirect, to read the version out of its Location header.

Every transport failure, timeout or unexpected status is surfaced as a
single FetchFailedError so callers have exactly one failure mode to handle.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Protocol, TypeVar, runtime_checkable

import aiohttp

from release_sentinel.config.settings import GlobalConfig
from release_sentinel.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_REDIRECT_STATUSES,
    RETRY_BACKOFF_SECONDS,
    USER_AGENT,
)
from release_sentinel.exceptions import FetchFailedError
from release_sentinel.logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

CONTENT_PREVIEW_MAX = 200
_SERVER_ERROR_MIN = 500


@runtime_checkable
class TextFetcher(Protocol):
    """Network capability consumed by the release resolution engine."""

    async def fetch_text(self, url: str) -> str:
        """Return the full response body of a GET request as text.

        Raises:
            FetchFailedError: On timeout, connection error or non-2xx status

        """
        ...

    async def fetch_redirect_location(self, url: str) -> str:
        """Send HEAD without following redirects and return Location.

        Raises:
            FetchFailedError: On timeout, connection error, a non-redirect
                status or a missing Location header

        """
        ...


class HttpTextFetcher:
    """TextFetcher implementation on top of an aiohttp session."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        backoff_seconds: float = RETRY_BACKOFF_SECONDS,
    ) -> None:
        """Initialize fetcher.

        Args:
            session: aiohttp session owned by the caller
            timeout_seconds: Total timeout for each request
            retry_attempts: Extra attempts after a transient failure
            backoff_seconds: Delay before the first retry; doubles each time

        """
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.retry_attempts = max(0, retry_attempts)
        self.backoff_seconds = backoff_seconds

    @classmethod
    def from_config(
        cls, session: aiohttp.ClientSession, config: GlobalConfig
    ) -> "HttpTextFetcher":
        network = config["network"]
        return cls(
            session,
            timeout_seconds=network["timeout_seconds"],
            retry_attempts=network["retry_attempts"],
        )

    async def fetch_text(self, url: str) -> str:
        async def process(response: aiohttp.ClientResponse) -> str:
            response.raise_for_status()
            try:
                content = await response.text()
            except UnicodeDecodeError as e:
                msg = f"response body is not valid text: {e.reason}"
                raise FetchFailedError(
                    msg, url, status=response.status
                ) from e
            logger.debug(
                "Fetched %s (%d characters): %s%s",
                url,
                len(content),
                content[:CONTENT_PREVIEW_MAX],
                "..." if len(content) > CONTENT_PREVIEW_MAX else "",
            )
            return content

        return await self._request_with_retry("GET", url, process)

    async def fetch_redirect_location(self, url: str) -> str:
        async def process(response: aiohttp.ClientResponse) -> str:
            if response.status not in HTTP_REDIRECT_STATUSES:
                response.raise_for_status()
                msg = f"expected a redirect, got HTTP {response.status}"
                raise FetchFailedError(msg, url, status=response.status)

            location = response.headers.get("Location")
            if not location:
                msg = "redirect response has no Location header"
                raise FetchFailedError(msg, url, status=response.status)

            logger.debug("%s redirects to %s", url, location)
            return location

        return await self._request_with_retry(
            "HEAD", url, process, allow_redirects=False
        )

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        process: Callable[[aiohttp.ClientResponse], Awaitable[T]],
        *,
        allow_redirects: bool = True,
    ) -> T:
        """Make an HTTP request, retrying transient failures.

        Connection errors, timeouts and 5xx responses are retried with
        exponential backoff; other statuses fail immediately.
        """
        total_attempts = self.retry_attempts + 1
        headers = {"User-Agent": USER_AGENT}

        for attempt in range(1, total_attempts + 1):
            try:
                async with self.session.request(
                    method,
                    url,
                    headers=headers,
                    timeout=self.timeout,
                    allow_redirects=allow_redirects,
                ) as response:
                    return await process(response)

            except aiohttp.ClientResponseError as e:
                if e.status < _SERVER_ERROR_MIN or attempt == total_attempts:
                    msg = f"HTTP {e.status} {e.message}".strip()
                    raise FetchFailedError(msg, url, status=e.status) from e
                logger.warning(
                    "Attempt %s/%s failed for %s: HTTP %s",
                    attempt,
                    total_attempts,
                    url,
                    e.status,
                )
            except (aiohttp.ClientError, TimeoutError) as e:
                if attempt == total_attempts:
                    reason = str(e) or type(e).__name__
                    msg = f"failed after {total_attempts} attempts: {reason}"
                    raise FetchFailedError(msg, url) from e
                logger.warning(
                    "Attempt %s/%s failed for %s: %s",
                    attempt,
                    total_attempts,
                    url,
                    str(e) or type(e).__name__,
                )

            backoff = self.backoff_seconds * 2 ** (attempt - 1)
            logger.debug("Retrying %s in %s seconds", url, backoff)
            await asyncio.sleep(backoff)

        msg = f"failed after {total_attempts} attempts"
        raise FetchFailedError(msg, url)


@asynccontextmanager
async def create_http_session(
    config: GlobalConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create a configured HTTP session.

    Yields:
        aiohttp.ClientSession limited to max_concurrent_checks connections
        per host

    """
    timeout_seconds = config["network"]["timeout_seconds"]
    connector = aiohttp.TCPConnector(
        limit=max(10, config["max_concurrent_checks"]),
        limit_per_host=config["max_concurrent_checks"],
    )
    async with aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout_seconds),
        connector=connector,
    ) as session:
        yield session
