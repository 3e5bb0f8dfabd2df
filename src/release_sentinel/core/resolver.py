"""Release resolution: is the known-good record still the newest release?

ReleaseResolver walks one (product, locale) pair through

    discover newest version -> compare -> fetch manifest -> update record

and reports the outcome as a Resolution value rather than raising:

- UNCHANGED: the vendor publishes nothing strictly newer
- UPDATED: a newer release was found and fully verified
- FAILED: the check could not be completed; for network failures the
  known-good record is attached as a fallback, for a manifest that lacks
  the locale no record is attached at all

Cancellation is not converted into a result: CancelledError propagates and
no half-updated record can escape, because the updated record is only
built after both checksums are in hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from release_sentinel.constants import ARCH_32BIT, ARCH_64BIT
from release_sentinel.core.discovery import discover_newest_version
from release_sentinel.core.fetcher import TextFetcher
from release_sentinel.core.manifest import ManifestText, extract_checksum
from release_sentinel.domain.product import ProductProfile
from release_sentinel.domain.release import ReleaseRecord
from release_sentinel.domain.version import VersionIdentifier
from release_sentinel.exceptions import (
    ChecksumNotFoundError,
    DiscoveryError,
    FetchFailedError,
    ReleaseSentinelError,
)
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class ResolutionStatus(Enum):
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one product/locale pair.

    Attributes:
        product: Product name
        locale: Locale code
        status: Outcome
        record: Record the caller should use; None when an update was
            attempted but could not be verified
        known_good: The known-good record the check started from
        discovered_version: Newest version found, if discovery succeeded
        error: Failure cause for FAILED outcomes

    Example:
        >>> resolution = await ReleaseResolver(profile, "de", f).resolve()
        >>> if resolution.has_update:
        ...     print(resolution.record.version)

    """

    product: str
    locale: str
    status: ResolutionStatus
    record: ReleaseRecord | None
    known_good: ReleaseRecord
    discovered_version: VersionIdentifier | None = None
    error: ReleaseSentinelError | None = None

    @property
    def is_success(self) -> bool:
        return self.status is not ResolutionStatus.FAILED

    @property
    def has_update(self) -> bool:
        return self.status is ResolutionStatus.UPDATED

    @property
    def error_reason(self) -> str | None:
        return str(self.error) if self.error else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "product": self.product,
            "locale": self.locale,
            "status": self.status.value,
            "known_version": str(self.known_good.version),
            "discovered_version": (
                str(self.discovered_version)
                if self.discovered_version
                else None
            ),
            "record": self.record.to_dict() if self.record else None,
            "error": self.error_reason,
        }


class ReleaseResolver:
    """Resolve the current release of one product for one locale."""

    def __init__(
        self, profile: ProductProfile, locale: str, fetcher: TextFetcher
    ) -> None:
        """Initialize resolver.

        Args:
            profile: Product to check
            locale: Locale code, e.g. "en-GB"
            fetcher: Network capability

        Raises:
            UnknownLocaleError: If the product has no data for locale

        """
        self.profile = profile
        self.locale = profile.validate_locale(locale)
        self.fetcher = fetcher

    def _result(
        self,
        status: ResolutionStatus,
        record: ReleaseRecord | None,
        known_good: ReleaseRecord,
        discovered: VersionIdentifier | None = None,
        error: ReleaseSentinelError | None = None,
    ) -> Resolution:
        return Resolution(
            product=self.profile.name,
            locale=self.locale,
            status=status,
            record=record,
            known_good=known_good,
            discovered_version=discovered,
            error=error,
        )

    async def resolve(self) -> Resolution:
        """Run discovery and, if a newer version exists, verify it.

        Returns:
            Resolution; never raises for network or manifest problems

        Raises:
            InvariantViolationError: If the known-good data is inconsistent

        """
        known_good = self.profile.known_record(self.locale)
        target = f"{self.profile.name} ({self.locale})"

        try:
            discovered = await discover_newest_version(
                self.profile, self.locale, self.fetcher
            )
        except FetchFailedError as e:
            logger.warning("Version discovery for %s failed: %s", target, e)
            return self._result(
                ResolutionStatus.FAILED, known_good, known_good, error=e
            )

        if discovered is None:
            error = DiscoveryError("no published version found", target)
            logger.warning("%s", error)
            return self._result(
                ResolutionStatus.FAILED, known_good, known_good, error=error
            )

        if not discovered > known_good.version:
            logger.info(
                "%s is up to date at %s (newest published: %s)",
                target,
                known_good.version,
                discovered,
            )
            return self._result(
                ResolutionStatus.UNCHANGED, known_good, known_good, discovered
            )

        logger.info(
            "%s: newer version %s found (known %s)",
            target,
            discovered,
            known_good.version,
        )
        manifest_url = self.profile.manifest_url_for(discovered)
        try:
            text = await self.fetcher.fetch_text(manifest_url)
            manifest = ManifestText(text)
        except FetchFailedError as e:
            logger.warning("Manifest fetch for %s failed: %s", target, e)
            return self._result(
                ResolutionStatus.FAILED,
                known_good,
                known_good,
                discovered,
                error=e,
            )

        checksums: dict[str, str] = {}
        for arch in (ARCH_32BIT, ARCH_64BIT):
            checksum = extract_checksum(
                manifest,
                arch,
                self.locale,
                discovered,
                self.profile.installer_file,
                self.profile.hash_algorithm,
            )
            if checksum is None:
                error = ChecksumNotFoundError(
                    f"{manifest_url} has no {arch} entry for version "
                    f"{discovered}",
                    target,
                )
                logger.warning("%s", error)
                return self._result(
                    ResolutionStatus.FAILED,
                    None,
                    known_good,
                    discovered,
                    error=error,
                )
            checksums[arch] = checksum

        updated = known_good.with_version(
            discovered, checksums[ARCH_32BIT], checksums[ARCH_64BIT]
        )
        updated.check_invariants()
        logger.info("%s resolved to %s", target, discovered)
        return self._result(
            ResolutionStatus.UPDATED, updated, known_good, discovered
        )
