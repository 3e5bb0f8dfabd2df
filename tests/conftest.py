"""Pytest configuration and fixtures for release-sentinel tests."""

import asyncio
import hashlib
import logging
import os
import tempfile

# Keep test logs out of the user's config directory; must run before the
# first release_sentinel import initializes logging.
os.environ.setdefault(
    "RELEASE_SENTINEL_LOG_DIR",
    tempfile.mkdtemp(prefix="release-sentinel-logs-"),
)

import pytest  # noqa: E402

from release_sentinel.config.settings import (  # noqa: E402
    GlobalConfig,
    GlobalConfigManager,
)
from release_sentinel.domain.product import ProductProfile  # noqa: E402
from release_sentinel.exceptions import FetchFailedError  # noqa: E402

PINNED_VERSION = "106.0b9"
TEST_LOCALES = ("de", "dsb", "en-GB")
DEVEDITION_RELEASES = "https://ftp.mozilla.org/pub/devedition/releases/"
THUNDERBIRD_RELEASES = "https://ftp.mozilla.org/pub/thunderbird/releases/"


def fake_digest(arch: str, locale: str, version: str) -> str:
    """Deterministic sha512 hex digest for an installer."""
    return hashlib.sha512(f"{arch}/{locale}/{version}".encode()).hexdigest()


def build_manifest(
    version: str,
    locales=TEST_LOCALES,
    installer: str = "Firefox Setup {version}.exe",
    archs=("win32", "win64"),
) -> str:
    """Render a SHA512SUMS document like the ones Mozilla publishes."""
    file_name = installer.replace("{version}", version)
    lines = []
    for arch in archs:
        for locale in locales:
            digest = fake_digest(arch, locale, version)
            lines.append(f"{digest}  {arch}/{locale}/{file_name}")
            lines.append(
                f"{fake_digest('xpi', locale, version)}  "
                f"{arch}/xpi/{locale}.xpi"
            )
        lines.append(
            f"{fake_digest(arch, 'zip', version)}  "
            f"{arch}/en-US/firefox-{version}.zip"
        )
    return "\n".join(lines) + "\n"


def build_listing(prefix: str, entries) -> str:
    """Render an Apache-style directory index page."""
    rows = "\n".join(
        f'<tr><td><a href="{prefix}{entry}/">{entry}/</a></td></tr>'
        for entry in entries
    )
    return f"<html><body><table>\n{rows}\n</table></body></html>"


class FakeFetcher:
    """In-memory TextFetcher keyed by URL.

    Values may be strings or exceptions; an unknown URL behaves like an
    HTTP 404.
    """

    def __init__(self, pages=None, redirects=None, delay: float = 0.0):
        self.pages = dict(pages or {})
        self.redirects = dict(redirects or {})
        self.delay = delay
        self.calls: list[tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def fetch_text(self, url: str) -> str:
        return await self._answer("GET", self.pages, url)

    async def fetch_redirect_location(self, url: str) -> str:
        return await self._answer("HEAD", self.redirects, url)

    async def _answer(self, method, table, url):
        self.calls.append((method, url))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if url not in table:
                raise FetchFailedError("HTTP 404 Not Found", url, status=404)
            value = table[url]
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            self.active -= 1

    def count(self, url: str) -> int:
        return sum(1 for _method, called in self.calls if called == url)


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation so caplog sees release_sentinel records.

    The release_sentinel root logger is created with propagate=False.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("release_sentinel"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def devedition_data() -> dict:
    """Catalog entry of a Developer Edition build pinned at 106.0b9."""
    return {
        "name": "firefox-aurora",
        "display_name": "Firefox Developer Edition ({locale})",
        "version": PINNED_VERSION,
        "ids": ["firefox-aurora", "firefox-aurora-{locale_lower}"],
        "discovery": {
            "method": "directory_listing",
            "url": DEVEDITION_RELEASES,
            "path_prefix": "/pub/devedition/releases/",
        },
        "manifest_url": DEVEDITION_RELEASES + "{version}/SHA512SUMS",
        "installer_file": "Firefox Setup {version}.exe",
        "download_url": (
            DEVEDITION_RELEASES
            + "{version}/{arch}/{locale}/Firefox%20Setup%20{version}.exe"
        ),
        "detection": {
            "x86": (
                "^Firefox Developer Edition( [0-9]+\\.[0-9]+([a-z][0-9]+)?)?"
                " \\(x86 {locale}\\)$"
            ),
            "x64": (
                "^Firefox Developer Edition( [0-9]+\\.[0-9]+([a-z][0-9]+)?)?"
                " \\(x64 {locale}\\)$"
            ),
        },
        "hash_algorithm": "sha512",
        "publisher": {
            "subject": "CN=Mozilla Corporation, O=Mozilla Corporation",
            "expires": "2024-06-19T23:59:59+00:00",
        },
        "silent_install_args": "-ms -ma",
        "blocker_processes": [],
        "checksums": {
            arch: {
                locale: fake_digest(arch, locale, PINNED_VERSION)
                for locale in TEST_LOCALES
            }
            for arch in ("win32", "win64")
        },
    }


@pytest.fixture
def devedition_profile(devedition_data) -> ProductProfile:
    return ProductProfile.from_dict(devedition_data)


@pytest.fixture
def thunderbird_profile() -> ProductProfile:
    """Redirect-discovered product pinned at 102.3.0."""
    return ProductProfile.from_dict(
        {
            "name": "thunderbird",
            "display_name": "Mozilla Thunderbird ({locale})",
            "version": "102.3.0",
            "discovery": {
                "method": "redirect",
                "url": (
                    "https://download.mozilla.org/"
                    "?product=thunderbird-latest&os=win&lang={locale}"
                ),
            },
            "manifest_url": THUNDERBIRD_RELEASES + "{version}/SHA512SUMS",
            "installer_file": "Thunderbird Setup {version}.exe",
            "download_url": (
                THUNDERBIRD_RELEASES + "{version}/{arch}/{locale}/"
                "Thunderbird%20Setup%20{version}.exe"
            ),
            "detection": {
                "x86": "^Mozilla Thunderbird ([0-9.]+ )?\\(x86 {locale}\\)$",
                "x64": "^Mozilla Thunderbird ([0-9.]+ )?\\(x64 {locale}\\)$",
            },
            "blocker_processes": ["thunderbird"],
            "checksums": {
                arch: {
                    locale: fake_digest(arch, locale, "102.3.0")
                    for locale in ("de", "fr")
                }
                for arch in ("win32", "win64")
            },
        }
    )


@pytest.fixture
def global_config(tmp_path) -> GlobalConfig:
    """Default configuration rooted in a temporary directory."""
    return GlobalConfigManager(tmp_path / "config").get_default_global_config()


@pytest.fixture
def digest():
    return fake_digest


@pytest.fixture
def manifest():
    return build_manifest


@pytest.fixture
def listing():
    return build_listing
