"""Release record types.

A ReleaseRecord describes one trackable application variant (one locale)
with its 32-bit and 64-bit installers. Records are frozen; an update
produces a new record via ReleaseRecord.with_version().
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from release_sentinel.constants import HASH_HEX_LENGTH, HashAlgorithm
from release_sentinel.domain.version import VersionIdentifier
from release_sentinel.exceptions import InvariantViolationError

_HEX_RE = re.compile(r"^[0-9a-f]+$")


@dataclass(frozen=True)
class PublisherIdentity:
    """Opaque trust descriptor of the installer's code-signing publisher.

    Attributes:
        subject: X.509 subject of the signing certificate
        expires: Certificate expiration time, if known

    """

    subject: str
    expires: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "expires": self.expires.isoformat() if self.expires else None,
        }


@dataclass(frozen=True)
class InstallArtifact:
    """A downloadable installer.

    The download URL must contain the literal version string of the record
    that owns it: version updates are applied by substring replacement.
    """

    download_url: str
    hash_algorithm: HashAlgorithm
    checksum: str
    publisher: PublisherIdentity | None
    silent_install_args: str = ""

    def with_update(
        self, old_version: str, new_version: str, checksum: str
    ) -> InstallArtifact:
        """Return a copy pointing at another version.

        Args:
            old_version: Version string currently embedded in the URL
            new_version: Version string to substitute
            checksum: Checksum of the new installer

        Returns:
            Updated InstallArtifact

        Raises:
            InvariantViolationError: If the URL lacks old_version

        """
        if old_version not in self.download_url:
            msg = f"download URL does not contain version {old_version}"
            raise InvariantViolationError(msg, self.download_url)
        return replace(
            self,
            download_url=self.download_url.replace(old_version, new_version),
            checksum=checksum,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "download_url": self.download_url,
            "hash_algorithm": self.hash_algorithm,
            "checksum": self.checksum,
            "publisher": self.publisher.to_dict() if self.publisher else None,
            "silent_install_args": self.silent_install_args,
        }


@dataclass(frozen=True)
class ReleaseRecord:
    """Known release information for one application variant.

    Attributes:
        display_name: Human readable name, e.g. "Mozilla Thunderbird (de)"
        version: Release version
        detection_x86: Regex matching the 32-bit installed-software name
        detection_x64: Regex matching the 64-bit installed-software name
        install_32bit: 32-bit installer
        install_64bit: 64-bit installer

    """

    display_name: str
    version: VersionIdentifier
    detection_x86: str
    detection_x64: str
    install_32bit: InstallArtifact
    install_64bit: InstallArtifact

    @property
    def artifacts(self) -> tuple[InstallArtifact, InstallArtifact]:
        return (self.install_32bit, self.install_64bit)

    def check_invariants(self) -> None:
        """Validate URL/version/checksum consistency.

        Raises:
            InvariantViolationError: If a URL lacks the version string or a
                checksum is not lowercase hex of the algorithm's length

        """
        version_text = str(self.version)
        for artifact in self.artifacts:
            if version_text not in artifact.download_url:
                msg = f"download URL does not contain version {version_text}"
                raise InvariantViolationError(msg, artifact.download_url)

            expected_length = HASH_HEX_LENGTH.get(artifact.hash_algorithm)
            if (
                expected_length is not None
                and len(artifact.checksum) != expected_length
            ) or not _HEX_RE.match(artifact.checksum):
                msg = (
                    f"checksum is not a {artifact.hash_algorithm} hex digest: "
                    f"{artifact.checksum[:16]}..."
                )
                raise InvariantViolationError(msg, self.display_name)

    def with_version(
        self,
        new_version: VersionIdentifier,
        checksum_32bit: str,
        checksum_64bit: str,
    ) -> ReleaseRecord:
        """Return a copy updated to new_version.

        Both download URLs get the old version substring replaced and both
        checksums are swapped in; all other fields are carried over.

        Raises:
            InvariantViolationError: If a URL lacks the current version

        """
        old_text = str(self.version)
        new_text = str(new_version)
        return replace(
            self,
            version=new_version,
            install_32bit=self.install_32bit.with_update(
                old_text, new_text, checksum_32bit
            ),
            install_64bit=self.install_64bit.with_update(
                old_text, new_text, checksum_64bit
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "display_name": self.display_name,
            "version": str(self.version),
            "detection": {
                "x86": self.detection_x86,
                "x64": self.detection_x64,
            },
            "install_32bit": self.install_32bit.to_dict(),
            "install_64bit": self.install_64bit.to_dict(),
        }
