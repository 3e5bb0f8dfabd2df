"""Release resolution engine.

Usage:
    from release_sentinel.core import ReleaseResolver, ResolutionStatus
"""

from release_sentinel.core.audit import (
    AuditEntry,
    AuditReport,
    AuditStatus,
    KnownGoodAuditor,
)
from release_sentinel.core.discovery import (
    DirectoryScraper,
    discover_newest_version,
    version_from_location,
)
from release_sentinel.core.fetcher import HttpTextFetcher, TextFetcher
from release_sentinel.core.resolver import (
    ReleaseResolver,
    Resolution,
    ResolutionStatus,
)
from release_sentinel.core.service import ReleaseCheckService

__all__ = [
    "AuditEntry",
    "AuditReport",
    "AuditStatus",
    "DirectoryScraper",
    "HttpTextFetcher",
    "KnownGoodAuditor",
    "ReleaseCheckService",
    "ReleaseResolver",
    "Resolution",
    "ResolutionStatus",
    "TextFetcher",
    "discover_newest_version",
    "version_from_location",
]
