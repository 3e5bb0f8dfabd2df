"""Checksum manifest text and line extraction.

A manifest (SHA512SUMS) lists one installer per line:

    <hex digest>  <arch>/<locale>/<installer file name>

for example::

    1f2e...9a0b  win64/en-GB/Firefox Setup 106.0b9.exe

Lines are matched whole, so a locale or version that is a prefix of another
("de" vs "dsb", "106.0b9" vs "106.0b90") never matches by accident.
"""

import re
from dataclasses import dataclass
from functools import cached_property, lru_cache

from release_sentinel.constants import (
    DEFAULT_HASH_ALGORITHM,
    HASH_HEX_LENGTH,
    LOCALE_PATTERN,
    HashAlgorithm,
)
from release_sentinel.domain.product import expand_template
from release_sentinel.domain.version import VersionIdentifier


@dataclass(frozen=True)
class ManifestText:
    """Immutable manifest document."""

    text: str

    @cached_property
    def lines(self) -> tuple[str, ...]:
        return tuple(line.strip() for line in self.text.splitlines())

    def __len__(self) -> int:
        return len(self.lines)


@lru_cache(maxsize=256)
def _line_pattern(
    arch: str, locale_pattern: str, file_name: str, digest_length: int
) -> re.Pattern[str]:
    return re.compile(
        rf"(?P<digest>[0-9a-f]{{{digest_length}}})  "
        rf"{re.escape(arch)}/(?P<locale>{locale_pattern})/"
        rf"{re.escape(file_name)}"
    )


def installer_file_name(template: str, version: VersionIdentifier) -> str:
    return expand_template(template, version=str(version))


def extract_checksum(
    manifest: ManifestText,
    arch: str,
    locale: str,
    version: VersionIdentifier,
    installer_file: str,
    hash_algorithm: HashAlgorithm = DEFAULT_HASH_ALGORITHM,
) -> str | None:
    """Find the checksum of one installer.

    Args:
        manifest: Manifest to search
        arch: Architecture token, "win32" or "win64"
        locale: Locale code; matched literally
        version: Version whose installer is wanted
        installer_file: File name template, e.g. "Firefox Setup {version}.exe"
        hash_algorithm: Digest algorithm, determines the digest length

    Returns:
        The hex digest only (never the whole line), or None if no line
        matches

    """
    pattern = _line_pattern(
        arch,
        re.escape(locale),
        installer_file_name(installer_file, version),
        HASH_HEX_LENGTH[hash_algorithm],
    )
    for line in manifest.lines:
        match = pattern.fullmatch(line)
        if match:
            return match.group("digest")
    return None


def build_index(
    manifest: ManifestText,
    arch: str,
    version: VersionIdentifier,
    installer_file: str,
    hash_algorithm: HashAlgorithm = DEFAULT_HASH_ALGORITHM,
) -> dict[str, str]:
    """Map every locale listed for one architecture to its checksum.

    Locales must look like "de", "fy-NL" or "hsb"; other path segments
    (e.g. "xpi" folders) are ignored. When a locale appears twice, the
    first line wins.

    Returns:
        Dictionary of locale code to hex digest

    """
    pattern = _line_pattern(
        arch,
        LOCALE_PATTERN,
        installer_file_name(installer_file, version),
        HASH_HEX_LENGTH[hash_algorithm],
    )
    index: dict[str, str] = {}
    for line in manifest.lines:
        match = pattern.fullmatch(line)
        if match:
            index.setdefault(match.group("locale"), match.group("digest"))
    return index
