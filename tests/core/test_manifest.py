"""Tests for checksum manifest parsing and indexing."""

import pytest

from release_sentinel.core.manifest import (
    ChecksumIndex,
    ManifestText,
    build_index,
    extract_checksum,
)
from release_sentinel.domain.version import VersionIdentifier

INSTALLER = "Firefox Setup {version}.exe"
V106 = VersionIdentifier.parse("106.0b9")


class TestExtractChecksum:
    """Test single checksum lookup."""

    @pytest.mark.parametrize("arch", ["win32", "win64"])
    def test_extract(self, manifest, digest, arch):
        text = ManifestText(manifest("106.0b9"))

        checksum = extract_checksum(text, arch, "en-GB", V106, INSTALLER)

        assert checksum == digest(arch, "en-GB", "106.0b9")
        assert len(checksum) == 128

    def test_missing_locale(self, manifest):
        text = ManifestText(manifest("106.0b9", locales=["de"]))

        assert extract_checksum(text, "win32", "fr", V106, INSTALLER) is None

    def test_locale_prefix_does_not_match(self, manifest):
        """A "dsb" line never answers a lookup for "de"."""
        text = ManifestText(manifest("106.0b9", locales=["dsb"]))

        assert extract_checksum(text, "win64", "de", V106, INSTALLER) is None

    @pytest.mark.parametrize("arch", ["win32", "win64"])
    def test_hyphen_in_locale_is_literal(self, digest, arch):
        """Only the exact "en-GB" line answers; "enXGB" is a near miss."""
        decoy = digest(arch, "enXGB", "106.0b9")
        wanted = digest(arch, "en-GB", "106.0b9")
        text = ManifestText(
            f"{decoy}  {arch}/enXGB/Firefox Setup 106.0b9.exe\n"
            f"{wanted}  {arch}/en-GB/Firefox Setup 106.0b9.exe\n"
        )

        checksum = extract_checksum(text, arch, "en-GB", V106, INSTALLER)

        assert checksum == wanted
        assert len(checksum) == 128
        assert (
            extract_checksum(
                ManifestText(
                    f"{decoy}  {arch}/enXGB/Firefox Setup 106.0b9.exe\n"
                ),
                arch,
                "en-GB",
                V106,
                INSTALLER,
            )
            is None
        )

    def test_version_prefix_does_not_match(self, manifest):
        text = ManifestText(manifest("106.0b90"))

        assert extract_checksum(text, "win64", "de", V106, INSTALLER) is None

    def test_other_architecture_only(self, manifest):
        text = ManifestText(manifest("106.0b9", archs=["win64"]))

        assert extract_checksum(text, "win32", "de", V106, INSTALLER) is None

    def test_tolerates_crlf_and_padding(self, digest):
        line = (
            f"  {digest('win32', 'de', '106.0b9')}  "
            "win32/de/Firefox Setup 106.0b9.exe  "
        )
        text = ManifestText(f"header\r\n{line}\r\n")

        assert extract_checksum(
            text, "win32", "de", V106, INSTALLER
        ) == digest("win32", "de", "106.0b9")

    def test_sha256_digest_length(self):
        checksum = "0123456789abcdef" * 4
        text = ManifestText(
            f"{checksum}  win64/de/Firefox Setup 106.0b9.exe\n"
        )

        assert (
            extract_checksum(text, "win64", "de", V106, INSTALLER, "sha512")
            is None
        )
        assert (
            extract_checksum(text, "win64", "de", V106, INSTALLER, "sha256")
            == checksum
        )

    def test_empty_manifest(self):
        text = ManifestText("")

        assert len(text) == 0
        assert extract_checksum(text, "win32", "de", V106, INSTALLER) is None


class TestBuildIndex:
    """Test whole-manifest indexing."""

    def test_indexes_installer_lines_only(self, manifest, digest):
        text = ManifestText(manifest("106.0b9"))

        index = build_index(text, "win64", V106, INSTALLER)

        assert index == {
            locale: digest("win64", locale, "106.0b9")
            for locale in ("de", "dsb", "en-GB")
        }

    def test_first_occurrence_wins(self, manifest, digest):
        duplicate = (
            f"{'f' * 128}  win32/de/Firefox Setup 106.0b9.exe\n"
        )
        text = ManifestText(manifest("106.0b9") + duplicate)

        index = build_index(text, "win32", V106, INSTALLER)

        assert index["de"] == digest("win32", "de", "106.0b9")

    def test_checksum_index(self, manifest, digest):
        text = ManifestText(manifest("106.0b9", locales=["de", "fr"]))

        index = ChecksumIndex.build(text, V106, INSTALLER)

        assert len(index) == 4
        assert index.locales("win32") == ["de", "fr"]
        assert index.lookup("win64", "fr") == digest("win64", "fr", "106.0b9")
        assert index.lookup("win64", "en-GB") is None
        assert index.lookup("arm64", "de") is None
