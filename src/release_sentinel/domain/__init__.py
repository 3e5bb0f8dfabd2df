"""Domain types: versions, release records and product profiles."""

from release_sentinel.domain.product import (
    DiscoveryMethod,
    DiscoverySettings,
    ProductProfile,
)
from release_sentinel.domain.release import (
    InstallArtifact,
    PublisherIdentity,
    ReleaseRecord,
)
from release_sentinel.domain.version import (
    VersionIdentifier,
    compare,
    compare_versions,
)

__all__ = [
    "DiscoveryMethod",
    "DiscoverySettings",
    "InstallArtifact",
    "ProductProfile",
    "PublisherIdentity",
    "ReleaseRecord",
    "VersionIdentifier",
    "compare",
    "compare_versions",
]
