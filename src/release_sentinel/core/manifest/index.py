"""Per-version checksum index over both architectures."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from release_sentinel.constants import (
    ARCHITECTURES,
    DEFAULT_HASH_ALGORITHM,
    HashAlgorithm,
)
from release_sentinel.core.manifest.text import ManifestText, build_index
from release_sentinel.domain.version import VersionIdentifier


@dataclass(frozen=True)
class ChecksumIndex:
    """Locale to checksum mapping for every architecture of one version.

    An index is built in one step by ChecksumIndex.build() and is never
    modified afterwards, so a reader can never see it half populated.
    """

    version: VersionIdentifier
    entries: Mapping[str, Mapping[str, str]]

    @classmethod
    def build(
        cls,
        manifest: ManifestText,
        version: VersionIdentifier,
        installer_file: str,
        hash_algorithm: HashAlgorithm = DEFAULT_HASH_ALGORITHM,
    ) -> "ChecksumIndex":
        entries = {
            arch: MappingProxyType(
                build_index(
                    manifest, arch, version, installer_file, hash_algorithm
                )
            )
            for arch in ARCHITECTURES
        }
        return cls(version=version, entries=MappingProxyType(entries))

    def lookup(self, arch: str, locale: str) -> str | None:
        return self.entries.get(arch, {}).get(locale)

    def locales(self, arch: str) -> list[str]:
        return sorted(self.entries.get(arch, {}))

    def __len__(self) -> int:
        return sum(len(table) for table in self.entries.values())
