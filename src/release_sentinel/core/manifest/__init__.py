"""Checksum manifest parsing, indexing and caching.

Available:
    ManifestText: Immutable manifest document
    extract_checksum: Checksum of one (arch, locale, version) installer
    build_index: Locale to checksum mapping for one architecture
    ChecksumIndex: Both architectures of one version
    PinnedManifestCache: Shared index of a product's pinned version
"""

from .cache import PinnedManifestCache
from .index import ChecksumIndex
from .text import ManifestText, build_index, extract_checksum

__all__ = [
    "ChecksumIndex",
    "ManifestText",
    "PinnedManifestCache",
    "build_index",
    "extract_checksum",
]
