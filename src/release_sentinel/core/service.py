"""Concurrent release checks and audits."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from release_sentinel.config.settings import GlobalConfig
from release_sentinel.core.audit import AuditReport, KnownGoodAuditor
from release_sentinel.core.fetcher import (
    HttpTextFetcher,
    TextFetcher,
    create_http_session,
)
from release_sentinel.core.manifest import PinnedManifestCache
from release_sentinel.core.resolver import ReleaseResolver, Resolution
from release_sentinel.domain.product import ProductProfile
from release_sentinel.logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class ReleaseCheckService:
    """Run resolutions and audits for many products and locales.

    At most max_concurrent_checks operations run at once. Unless a fetcher
    is injected, each batch opens one aiohttp session and closes it when
    the batch finishes.

    Usage:
        service = ReleaseCheckService(config)
        results = await service.check([(profile, "de"), (profile, "fr")])
    """

    def __init__(
        self,
        config: GlobalConfig,
        fetcher: TextFetcher | None = None,
        manifest_cache: PinnedManifestCache | None = None,
    ) -> None:
        """Initialize service.

        Args:
            config: Loaded global configuration
            fetcher: Optional fetcher; when None an HttpTextFetcher on a
                service-owned session is used
            manifest_cache: Optional shared pinned manifest cache

        """
        self.config = config
        self._fetcher = fetcher
        self.manifest_cache = manifest_cache or PinnedManifestCache()

    @asynccontextmanager
    async def _fetcher_scope(self) -> AsyncIterator[TextFetcher]:
        if self._fetcher is not None:
            yield self._fetcher
            return
        async with create_http_session(self.config) as session:
            yield HttpTextFetcher.from_config(session, self.config)

    async def _run_limited(
        self, jobs: list[Callable[[], Awaitable[T]]]
    ) -> list[T]:
        semaphore = asyncio.Semaphore(self.config["max_concurrent_checks"])

        async def run_one(job: Callable[[], Awaitable[T]]) -> T:
            async with semaphore:
                return await job()

        return await asyncio.gather(*(run_one(job) for job in jobs))

    async def check(
        self, requests: list[tuple[ProductProfile, str]]
    ) -> list[Resolution]:
        """Resolve every (profile, locale) pair.

        Returns:
            Resolutions in request order

        Raises:
            UnknownLocaleError: If a locale is not known for its product;
                raised before any request is sent

        """
        if not requests:
            return []

        async with self._fetcher_scope() as fetcher:
            resolvers = [
                ReleaseResolver(profile, locale, fetcher)
                for profile, locale in requests
            ]
            logger.info("Checking %d release record(s)", len(resolvers))
            results = await self._run_limited(
                [resolver.resolve for resolver in resolvers]
            )

        updated = sum(1 for result in results if result.has_update)
        failed = sum(1 for result in results if not result.is_success)
        logger.info(
            "Checked %d record(s): %d updated, %d failed",
            len(results),
            updated,
            failed,
        )
        return results

    async def audit(
        self,
        profiles: list[ProductProfile],
        locales: list[str] | None = None,
    ) -> list[AuditReport]:
        """Audit the known-good data of each product."""
        if not profiles:
            return []

        async with self._fetcher_scope() as fetcher:
            auditor = KnownGoodAuditor(fetcher, self.manifest_cache)

            def make_job(
                profile: ProductProfile,
            ) -> Callable[[], Awaitable[AuditReport]]:
                return lambda: auditor.audit(profile, locales)

            return await self._run_limited(
                [make_job(profile) for profile in profiles]
            )
