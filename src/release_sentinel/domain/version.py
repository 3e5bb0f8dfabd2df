"""Vendor version identifiers.

Mozilla-style versions are not semver: finals look like "102.3.0" or
"60.0", pre-releases like "116.0b5" (one stage letter plus a number, no
patch component). packaging.version cannot be used because any lowercase
stage letter is allowed, so the ordering is implemented here explicitly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from release_sentinel.exceptions import MalformedVersionError

_VERSION_BODY = (
    r"(?P<major>\d+)\.(?P<minor>\d+)"
    r"(?:\.(?P<patch>\d+)|(?P<stage>[a-z])(?P<stage_number>\d+))?"
)

_VERSION_RE = re.compile(rf"^{_VERSION_BODY}$")

# Unanchored variant for URLs; a token must not start inside a word or an
# escape such as "%20", and "115.3.0esr" yields "115.3.0".
_VERSION_SEARCH_RE = re.compile(rf"(?<![\w.%]){_VERSION_BODY}")


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionIdentifier:
    """A parsed vendor version.

    Attributes:
        major: Major component
        minor: Minor component
        stage: Release stage letter ("a", "b", ...) or None for a final
        stage_number: Number following the stage letter, None for a final
        patch: Patch component of a final release, None if absent

    A final release always sorts after any pre-release with the same
    major.minor, so "102.0" > "102.0b9".
    """

    major: int
    minor: int
    stage: str | None = None
    stage_number: int | None = None
    patch: int | None = None

    def __post_init__(self) -> None:
        if (self.stage is None) != (self.stage_number is None):
            msg = "stage letter and stage number must be given together"
            raise MalformedVersionError(msg, str(self.major))
        if self.stage is not None and self.patch is not None:
            msg = "a pre-release version cannot carry a patch component"
            raise MalformedVersionError(msg, str(self.major))

    @classmethod
    def parse(cls, text: str) -> VersionIdentifier:
        """Parse a version string.

        Surrounding whitespace is trimmed; nothing else is normalized.

        Args:
            text: Version string such as "127.0b8" or "102.3.0"

        Returns:
            Parsed VersionIdentifier

        Raises:
            MalformedVersionError: If text does not match the grammar

        """
        candidate = text.strip() if isinstance(text, str) else ""
        match = _VERSION_RE.match(candidate)
        if match is None:
            msg = "expected 'N.N', 'N.N.N' or 'N.N<letter>N'"
            raise MalformedVersionError(msg, str(text))
        return cls._from_match(match)

    @classmethod
    def search(cls, text: str) -> VersionIdentifier | None:
        """Find the first version token inside a longer string.

        Used for redirect targets such as
        ".../pub/firefox/releases/132.0/win64/de/Firefox%20Setup%20132.0.exe".

        Args:
            text: Arbitrary text, typically a URL

        Returns:
            First VersionIdentifier found, or None

        """
        match = _VERSION_SEARCH_RE.search(text)
        if match is None:
            return None
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> VersionIdentifier:
        stage_number = match.group("stage_number")
        patch = match.group("patch")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            stage=match.group("stage"),
            stage_number=int(stage_number) if stage_number else None,
            patch=int(patch) if patch is not None else None,
        )

    @property
    def is_prerelease(self) -> bool:
        return self.stage is not None

    def _sort_key(self) -> tuple[int, int, int, str, int, int]:
        # Third slot ranks finals (1) above pre-releases (0)
        if self.stage is not None:
            return (
                self.major,
                self.minor,
                0,
                self.stage,
                self.stage_number or 0,
                0,
            )
        return (self.major, self.minor, 1, "", 0, self.patch or 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}"
        if self.stage is not None:
            return f"{base}{self.stage}{self.stage_number}"
        if self.patch is not None:
            return f"{base}.{self.patch}"
        return base

    def __repr__(self) -> str:
        return f"VersionIdentifier('{self}')"


def compare(a: VersionIdentifier, b: VersionIdentifier) -> int:
    """Compare two versions.

    Major and minor are compared numerically first. If exactly one side is
    a pre-release, the final release is greater. Two pre-releases compare
    by stage letter, then stage number; two finals compare by patch, an
    absent patch counting as 0.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b

    """
    if (a.major, a.minor) != (b.major, b.minor):
        return -1 if (a.major, a.minor) < (b.major, b.minor) else 1

    if a.is_prerelease != b.is_prerelease:
        return -1 if a.is_prerelease else 1

    if a.is_prerelease:
        left = (a.stage, a.stage_number)
        right = (b.stage, b.stage_number)
    else:
        left = (a.patch or 0,)
        right = (b.patch or 0,)

    if left == right:
        return 0
    return -1 if left < right else 1


def compare_versions(version1: str, version2: str) -> int:
    """Compare two version strings.

    Raises:
        MalformedVersionError: If either string fails to parse

    """
    return compare(
        VersionIdentifier.parse(version1), VersionIdentifier.parse(version2)
    )
