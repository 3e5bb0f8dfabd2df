"""Per-product configuration for the release resolution engine.

Every tracked application (Firefox, Firefox ESR, Firefox Developer Edition,
Thunderbird, ...) runs the same discovery/manifest/compare algorithm; only
the URL templates, the installer file name and the known-good data differ.
A ProductProfile carries exactly those differences.

Templates use literal "{placeholder}" markers that are substituted with
str.replace, never str.format: detection patterns contain regex
quantifiers like "[0-9]{2}".
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from release_sentinel.constants import (
    ARCH_32BIT,
    ARCH_64BIT,
    ARCHITECTURES,
    DEFAULT_HASH_ALGORITHM,
    HASH_HEX_LENGTH,
    HashAlgorithm,
)
from release_sentinel.domain.release import (
    InstallArtifact,
    PublisherIdentity,
    ReleaseRecord,
)
from release_sentinel.domain.version import VersionIdentifier
from release_sentinel.exceptions import (
    CatalogError,
    UnknownLocaleError,
)


class DiscoveryMethod(Enum):
    """How the newest published version is discovered."""

    DIRECTORY_LISTING = "directory_listing"
    REDIRECT = "redirect"


def expand_template(template: str, **values: str) -> str:
    """Substitute "{name}" placeholders in template.

    Example:
        >>> expand_template("{version}/{arch}/", version="60.0", arch="win32")
        '60.0/win32/'

    """
    result = template
    for key, value in values.items():
        result = result.replace("{" + key + "}", value)
    return result


@dataclass(frozen=True)
class DiscoverySettings:
    """Where and how to look for the newest version.

    Attributes:
        method: Discovery strategy
        url: Index page URL, or per-locale redirect probe URL template
        path_prefix: Href prefix of release entries on the index page,
            e.g. "/pub/devedition/releases/"

    """

    method: DiscoveryMethod
    url: str
    path_prefix: str | None = None


@dataclass(frozen=True)
class ProductProfile:
    """Static description of a tracked product and its known-good release."""

    name: str
    display_name: str
    version: VersionIdentifier
    discovery: DiscoverySettings
    manifest_url: str
    installer_file: str
    download_url: str
    detection_x86: str
    detection_x64: str
    checksums: Mapping[str, Mapping[str, str]]
    ids: tuple[str, ...] = ()
    hash_algorithm: HashAlgorithm = DEFAULT_HASH_ALGORITHM
    publisher: PublisherIdentity | None = None
    silent_install_args: str = ""
    blocker_processes: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductProfile:
        """Build a profile from a catalog JSON document.

        Args:
            data: Decoded catalog entry

        Returns:
            ProductProfile

        Raises:
            CatalogError: If required keys are missing or malformed

        """
        name = str(data.get("name", "<unnamed>"))
        try:
            discovery_data = data["discovery"]
            discovery = DiscoverySettings(
                method=DiscoveryMethod(discovery_data["method"]),
                url=discovery_data["url"],
                path_prefix=discovery_data.get("path_prefix"),
            )
            if (
                discovery.method is DiscoveryMethod.DIRECTORY_LISTING
                and not discovery.path_prefix
            ):
                msg = "directory listing discovery requires 'path_prefix'"
                raise CatalogError(msg, name)

            publisher = None
            if data.get("publisher"):
                expires = data["publisher"].get("expires")
                publisher = PublisherIdentity(
                    subject=data["publisher"]["subject"],
                    expires=(
                        datetime.fromisoformat(expires) if expires else None
                    ),
                )

            checksums = {
                arch: MappingProxyType(dict(data["checksums"][arch]))
                for arch in ARCHITECTURES
            }
            hash_algorithm = data.get(
                "hash_algorithm", DEFAULT_HASH_ALGORITHM
            )
            if hash_algorithm not in HASH_HEX_LENGTH:
                msg = f"unsupported hash algorithm '{hash_algorithm}'"
                raise CatalogError(msg, name)

            return cls(
                name=data["name"],
                display_name=data["display_name"],
                version=VersionIdentifier.parse(data["version"]),
                discovery=discovery,
                manifest_url=data["manifest_url"],
                installer_file=data["installer_file"],
                download_url=data["download_url"],
                detection_x86=data["detection"]["x86"],
                detection_x64=data["detection"]["x64"],
                checksums=MappingProxyType(checksums),
                ids=tuple(data.get("ids", ())),
                hash_algorithm=hash_algorithm,
                publisher=publisher,
                silent_install_args=data.get("silent_install_args", ""),
                blocker_processes=tuple(data.get("blocker_processes", ())),
            )
        except KeyError as e:
            msg = f"missing catalog key {e}"
            raise CatalogError(msg, name) from e
        except (TypeError, ValueError) as e:
            msg = f"invalid catalog value: {e}"
            raise CatalogError(msg, name) from e

    def valid_locales(self) -> list[str]:
        """Return locales that have checksums for both architectures."""
        return sorted(
            set(self.checksums[ARCH_32BIT]) & set(self.checksums[ARCH_64BIT])
        )

    def validate_locale(self, locale: str) -> str:
        """Return the trimmed locale if the product knows it.

        Raises:
            UnknownLocaleError: If locale is blank or has no checksums for
                one of the architectures

        """
        if not locale or not locale.strip():
            msg = "the locale code must not be empty"
            raise UnknownLocaleError(msg, self.name)
        code = locale.strip()
        for arch in ARCHITECTURES:
            if code not in self.checksums[arch]:
                msg = f"'{code}' is not a valid locale code ({arch})"
                raise UnknownLocaleError(msg, self.name)
        return code

    def ids_for(self, locale: str) -> list[str]:
        return [
            expand_template(
                template, locale=locale, locale_lower=locale.lower()
            )
            for template in self.ids
        ]

    def discovery_url_for(self, locale: str) -> str:
        return expand_template(self.discovery.url, locale=locale)

    def manifest_url_for(self, version: VersionIdentifier) -> str:
        return expand_template(self.manifest_url, version=str(version))

    def installer_file_for(self, version: VersionIdentifier) -> str:
        return expand_template(self.installer_file, version=str(version))

    def known_record(self, locale: str) -> ReleaseRecord:
        """Build the known-good record for locale.

        A fresh record is built on every call, so callers can never alter
        the catalog data through it.

        Args:
            locale: Locale code, e.g. "en-GB"

        Returns:
            Known-good ReleaseRecord

        Raises:
            UnknownLocaleError: If the locale is not known
            InvariantViolationError: If the catalog data is inconsistent

        """
        code = self.validate_locale(locale)
        version_text = str(self.version)
        escaped_locale = re.escape(code)

        def artifact(arch: str) -> InstallArtifact:
            return InstallArtifact(
                download_url=expand_template(
                    self.download_url,
                    version=version_text,
                    arch=arch,
                    locale=code,
                ),
                hash_algorithm=self.hash_algorithm,
                checksum=self.checksums[arch][code],
                publisher=self.publisher,
                silent_install_args=self.silent_install_args,
            )

        record = ReleaseRecord(
            display_name=expand_template(self.display_name, locale=code),
            version=self.version,
            detection_x86=expand_template(
                self.detection_x86, locale=escaped_locale
            ),
            detection_x64=expand_template(
                self.detection_x64, locale=escaped_locale
            ),
            install_32bit=artifact(ARCH_32BIT),
            install_64bit=artifact(ARCH_64BIT),
        )
        record.check_invariants()
        return record


__all__ = [
    "DiscoveryMethod",
    "DiscoverySettings",
    "ProductProfile",
    "expand_template",
]
