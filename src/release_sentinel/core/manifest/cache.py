"""Shared manifest index for a product's pinned version.

The manifest of the pinned (known-good) version lists every locale, so all
locale-scoped work for one product can share a single fetch. Each product
gets one task per version: the first caller starts it, later callers await
the same task, and no caller ever sees a partially built index.
"""

import asyncio
import functools

from release_sentinel.core.fetcher import TextFetcher
from release_sentinel.core.manifest.index import ChecksumIndex
from release_sentinel.core.manifest.text import ManifestText
from release_sentinel.domain.product import ProductProfile
from release_sentinel.domain.version import VersionIdentifier
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class PinnedManifestCache:
    """Build-once-per-version cache of pinned manifest indexes.

    Failed builds are evicted, so the next caller starts a fresh fetch.
    Requesting a different version for a product replaces the old entry.
    """

    def __init__(self) -> None:
        self._entries: dict[
            str, tuple[VersionIdentifier, asyncio.Task[ChecksumIndex]]
        ] = {}
        self._lock = asyncio.Lock()

    async def get_index(
        self, profile: ProductProfile, fetcher: TextFetcher
    ) -> ChecksumIndex:
        """Return the checksum index of the profile's pinned version.

        Raises:
            FetchFailedError: If the manifest cannot be fetched

        """
        async with self._lock:
            entry = self._entries.get(profile.name)
            if entry is not None and entry[0] == profile.version:
                task = entry[1]
            else:
                if entry is not None:
                    logger.debug(
                        "Pinned version of %s changed from %s to %s",
                        profile.name,
                        entry[0],
                        profile.version,
                    )
                task = asyncio.create_task(self._build(profile, fetcher))
                task.add_done_callback(
                    functools.partial(self._on_build_done, profile.name)
                )
                self._entries[profile.name] = (profile.version, task)

        try:
            # A cancelled waiter leaves the shared build running
            return await asyncio.shield(task)
        except Exception:
            async with self._lock:
                current = self._entries.get(profile.name)
                if current is not None and current[1] is task:
                    del self._entries[profile.name]
            raise

    def _on_build_done(
        self, product: str, task: asyncio.Task[ChecksumIndex]
    ) -> None:
        # Runs even when every waiter was cancelled
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        logger.debug("Pinned manifest build for %s failed: %s", product, error)
        current = self._entries.get(product)
        if current is not None and current[1] is task:
            del self._entries[product]

    @staticmethod
    async def _build(
        profile: ProductProfile, fetcher: TextFetcher
    ) -> ChecksumIndex:
        url = profile.manifest_url_for(profile.version)
        logger.debug("Fetching pinned manifest %s", url)
        manifest = ManifestText(await fetcher.fetch_text(url))
        index = ChecksumIndex.build(
            manifest,
            profile.version,
            profile.installer_file,
            profile.hash_algorithm,
        )
        logger.debug(
            "Indexed %d checksums for %s %s",
            len(index),
            profile.name,
            profile.version,
        )
        return index

    def cached_version(self, product: str) -> VersionIdentifier | None:
        entry = self._entries.get(product)
        if entry is None or not entry[1].done():
            return None
        if entry[1].cancelled() or entry[1].exception() is not None:
            return None
        return entry[0]

    def clear(self) -> None:
        for _version, task in self._entries.values():
            if not task.done():
                task.cancel()
        self._entries.clear()
