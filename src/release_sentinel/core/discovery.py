"""Discovery of the newest published version.

Two strategies exist:
- directory listing: scrape an HTML index such as
  https://ftp.mozilla.org/pub/devedition/releases/ for release folders
- redirect probe: HEAD a "latest" download URL and read the version from
  the Location header it redirects to
"""

import re

from release_sentinel.core.fetcher import TextFetcher
from release_sentinel.domain.product import DiscoveryMethod, ProductProfile
from release_sentinel.domain.version import VersionIdentifier
from release_sentinel.exceptions import MalformedVersionError
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class DirectoryScraper:
    """Find release versions in a directory listing page.

    Only anchors of the form <a href="<path_prefix><version>/"> are
    considered. Entries whose captured text is not a valid version are
    skipped, since listings also contain non-release folders.
    """

    def __init__(self, path_prefix: str) -> None:
        if not path_prefix.endswith("/"):
            path_prefix += "/"
        self.path_prefix = path_prefix
        self._anchor_re = re.compile(
            r"<a\s+href=\"" + re.escape(path_prefix) + r"([^\"/]+)/\"",
            re.IGNORECASE,
        )

    def discover_all(self, index_html: str) -> list[VersionIdentifier]:
        """Return every parseable version listed, in page order."""
        versions: list[VersionIdentifier] = []
        for match in self._anchor_re.finditer(index_html):
            candidate = match.group(1)
            try:
                versions.append(VersionIdentifier.parse(candidate))
            except MalformedVersionError:
                logger.debug("Skipping non-release entry %r", candidate)
        return versions

    def discover_newest(self, index_html: str) -> VersionIdentifier | None:
        """Return the greatest listed version, or None if none parse."""
        versions = self.discover_all(index_html)
        if not versions:
            return None
        return max(versions)


def version_from_location(location: str) -> VersionIdentifier | None:
    """Extract the version from a redirect target URL.

    Example:
        >>> version_from_location(
        ...     "https://download-installer.cdn.mozilla.net/pub/firefox/"
        ...     "releases/132.0/win32/de/Firefox%20Setup%20132.0.exe"
        ... )
        VersionIdentifier('132.0')

    """
    return VersionIdentifier.search(location)


async def discover_newest_version(
    profile: ProductProfile, locale: str, fetcher: TextFetcher
) -> VersionIdentifier | None:
    """Discover the newest published version of a product.

    Args:
        profile: Product whose discovery settings are used
        locale: Locale code, used by redirect probes
        fetcher: Network capability

    Returns:
        Newest VersionIdentifier, or None if nothing usable was found

    Raises:
        FetchFailedError: If the index page or probe request fails

    """
    discovery = profile.discovery
    if discovery.method is DiscoveryMethod.DIRECTORY_LISTING:
        index_html = await fetcher.fetch_text(discovery.url)
        scraper = DirectoryScraper(discovery.path_prefix or "")
        newest = scraper.discover_newest(index_html)
    else:
        location = await fetcher.fetch_redirect_location(
            profile.discovery_url_for(locale)
        )
        newest = version_from_location(location)

    if newest is None:
        logger.debug("No version discovered for %s (%s)", profile.name, locale)
    return newest
