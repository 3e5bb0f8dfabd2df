"""Tests for loading product catalog entries."""

import orjson
import pytest

from release_sentinel.config import CatalogLoader
from release_sentinel.domain.product import DiscoveryMethod
from release_sentinel.exceptions import CatalogError

BUNDLED = ["firefox", "firefox-aurora", "firefox-esr", "thunderbird"]


class TestBundledCatalog:
    """The catalog shipped with the package must always load."""

    def test_list_products(self):
        assert CatalogLoader().list_products() == BUNDLED

    def test_load_all(self):
        profiles, failed = CatalogLoader().load_all()

        assert failed == []
        assert sorted(profiles) == BUNDLED

    @pytest.mark.parametrize("product", BUNDLED)
    def test_every_locale_builds_a_record(self, product):
        profile = CatalogLoader().load(product)

        for locale in profile.valid_locales():
            record = profile.known_record(locale)
            assert str(profile.version) in record.install_32bit.download_url

    def test_esr_download_url(self):
        profile = CatalogLoader().load("firefox-esr")
        record = profile.known_record(profile.valid_locales()[0])

        assert f"{profile.version}esr" in record.install_64bit.download_url

    def test_discovery_methods(self):
        loader = CatalogLoader()

        assert loader.load("firefox-aurora").discovery.method is (
            DiscoveryMethod.DIRECTORY_LISTING
        )
        assert loader.load("thunderbird").discovery.method is (
            DiscoveryMethod.REDIRECT
        )


class TestCatalogLoader:
    """Test validation of catalog entries."""

    def write(self, catalog_dir, name, data):
        (catalog_dir / f"{name}.json").write_bytes(orjson.dumps(data))

    def test_load(self, catalog_dir):
        profile = CatalogLoader(catalog_dir).load("firefox-aurora")

        assert str(profile.version) == "106.0b9"

    def test_missing_entry(self, catalog_dir):
        loader = CatalogLoader(catalog_dir)

        assert not loader.exists("seamonkey")
        with pytest.raises(CatalogError, match="not found"):
            loader.load("seamonkey")

    def test_invalid_json(self, catalog_dir):
        (catalog_dir / "broken.json").write_text("{ not json", "utf-8")

        with pytest.raises(CatalogError, match="invalid JSON"):
            CatalogLoader(catalog_dir).load("broken")

    def test_not_an_object(self, catalog_dir):
        self.write(catalog_dir, "listy", ["firefox"])

        with pytest.raises(CatalogError, match="JSON object"):
            CatalogLoader(catalog_dir).load("listy")

    def test_name_mismatch(self, catalog_dir, devedition_data):
        self.write(catalog_dir, "devedition", devedition_data)

        with pytest.raises(CatalogError, match="declares name"):
            CatalogLoader(catalog_dir).load("devedition")

    def test_locale_tables_disagree(self, catalog_dir, devedition_data):
        del devedition_data["checksums"]["win32"]["dsb"]
        self.write(catalog_dir, "firefox-aurora", devedition_data)

        with pytest.raises(CatalogError, match="dsb"):
            CatalogLoader(catalog_dir).load("firefox-aurora")

    def test_no_locales(self, catalog_dir, devedition_data):
        devedition_data["checksums"] = {"win32": {}, "win64": {}}
        self.write(catalog_dir, "firefox-aurora", devedition_data)

        with pytest.raises(CatalogError, match="no locales"):
            CatalogLoader(catalog_dir).load("firefox-aurora")

    def test_bad_checksum(self, catalog_dir, devedition_data):
        devedition_data["checksums"]["win64"]["de"] = "ABCDEF"
        self.write(catalog_dir, "firefox-aurora", devedition_data)

        with pytest.raises(CatalogError, match="locale de"):
            CatalogLoader(catalog_dir).load("firefox-aurora")

    def test_download_url_without_version(self, catalog_dir, devedition_data):
        devedition_data["download_url"] = (
            "https://ftp.mozilla.org/pub/devedition/latest/{arch}/{locale}/"
            "setup.exe"
        )
        self.write(catalog_dir, "firefox-aurora", devedition_data)

        with pytest.raises(CatalogError):
            CatalogLoader(catalog_dir).load("firefox-aurora")

    def test_load_all_reports_failures(self, catalog_dir):
        (catalog_dir / "broken.json").write_text("[", "utf-8")

        profiles, failed = CatalogLoader(catalog_dir).load_all()

        assert list(profiles) == ["firefox-aurora"]
        assert failed == ["broken"]
