"""Cross-check bundled known-good checksums against the vendor manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from release_sentinel.constants import ARCHITECTURES
from release_sentinel.core.fetcher import TextFetcher
from release_sentinel.core.manifest import PinnedManifestCache
from release_sentinel.domain.product import ProductProfile
from release_sentinel.exceptions import FetchFailedError
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class AuditStatus(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING = "missing"


@dataclass(frozen=True)
class AuditEntry:
    locale: str
    arch: str
    status: AuditStatus
    expected: str
    actual: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "locale": self.locale,
            "arch": self.arch,
            "status": self.status.value,
            "expected": self.expected,
            "actual": self.actual,
        }


@dataclass(frozen=True)
class AuditReport:
    """Result of auditing one product's known-good data.

    Attributes:
        product: Product name
        version: Pinned version that was audited
        entries: One entry per (locale, architecture)
        error: Reason the audit could not run, if any

    """

    product: str
    version: str
    entries: tuple[AuditEntry, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def is_clean(self) -> bool:
        return self.error is None and all(
            entry.status is AuditStatus.MATCH for entry in self.entries
        )

    def problems(self) -> list[AuditEntry]:
        return [e for e in self.entries if e.status is not AuditStatus.MATCH]

    def to_dict(self) -> dict[str, Any]:
        return {
            "product": self.product,
            "version": self.version,
            "clean": self.is_clean,
            "error": self.error,
            "entries": [entry.to_dict() for entry in self.entries],
        }


class KnownGoodAuditor:
    """Compare a product's bundled checksum tables with its manifest.

    The pinned manifest is fetched once through the shared
    PinnedManifestCache, so auditing and other pinned-version work for the
    same product reuse one download.
    """

    def __init__(
        self,
        fetcher: TextFetcher,
        cache: PinnedManifestCache | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache or PinnedManifestCache()

    async def audit(
        self, profile: ProductProfile, locales: list[str] | None = None
    ) -> AuditReport:
        """Audit the given locales (all known locales by default).

        Returns:
            AuditReport; a failed manifest fetch is reported in its error
            field rather than raised

        Raises:
            UnknownLocaleError: If a requested locale is not known

        """
        codes = (
            [profile.validate_locale(code) for code in locales]
            if locales
            else profile.valid_locales()
        )
        version = str(profile.version)

        try:
            index = await self.cache.get_index(profile, self.fetcher)
        except FetchFailedError as e:
            logger.warning(
                "Audit of %s %s failed: %s", profile.name, version, e
            )
            return AuditReport(profile.name, version, error=str(e))

        entries: list[AuditEntry] = []
        for code in codes:
            for arch in ARCHITECTURES:
                expected = profile.checksums[arch][code]
                actual = index.lookup(arch, code)
                if actual is None:
                    status = AuditStatus.MISSING
                elif actual == expected:
                    status = AuditStatus.MATCH
                else:
                    status = AuditStatus.MISMATCH
                entries.append(
                    AuditEntry(code, arch, status, expected, actual)
                )

        report = AuditReport(profile.name, version, tuple(entries))
        for problem in report.problems():
            logger.warning(
                "%s %s %s/%s: %s",
                profile.name,
                version,
                problem.arch,
                problem.locale,
                problem.status.value,
            )
        return report
