"""Catalog loader for product profiles.

Each tracked product is described by one JSON file in the catalog
directory. Loading an entry also checks that its known-good data satisfies
the release record invariants for every locale, so a broken catalog fails
at load time rather than in the middle of a check.
"""

from pathlib import Path

import orjson

from release_sentinel.config.paths import Paths
from release_sentinel.constants import ARCH_32BIT, ARCH_64BIT
from release_sentinel.domain.product import ProductProfile
from release_sentinel.exceptions import CatalogError, InvariantViolationError
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class CatalogLoader:
    """Load and validate product catalog entries."""

    def __init__(self, catalog_dir: Path | None = None) -> None:
        """Initialize catalog loader.

        Args:
            catalog_dir: Optional custom catalog directory.
                        Defaults to bundled catalog.
        """
        self.catalog_dir = catalog_dir or Paths.CATALOG_DIR

    def load(self, product: str) -> ProductProfile:
        """Load the catalog entry of a product.

        Args:
            product: Product name, e.g. "thunderbird"

        Returns:
            Validated ProductProfile

        Raises:
            CatalogError: If the entry is missing, is not valid JSON or
                breaks a release record invariant
        """
        path = self.catalog_dir / f"{product}.json"

        if not path.exists():
            msg = "catalog entry not found"
            raise CatalogError(msg, product)

        with path.open("rb") as f:
            try:
                data = orjson.loads(f.read())
            except orjson.JSONDecodeError as e:
                msg = f"invalid JSON in catalog entry: {e}"
                raise CatalogError(msg, product) from e

        if not isinstance(data, dict):
            msg = "catalog entry must be a JSON object"
            raise CatalogError(msg, product)

        profile = ProductProfile.from_dict(data)
        if profile.name != product:
            msg = f"entry declares name '{profile.name}'"
            raise CatalogError(msg, product)

        self._check_profile(profile)
        logger.debug(
            "Loaded catalog entry %s (version %s, %d locales)",
            product,
            profile.version,
            len(profile.valid_locales()),
        )
        return profile

    @staticmethod
    def _check_profile(profile: ProductProfile) -> None:
        locales_32 = set(profile.checksums[ARCH_32BIT])
        locales_64 = set(profile.checksums[ARCH_64BIT])
        if locales_32 != locales_64:
            missing = sorted(locales_32 ^ locales_64)
            msg = f"checksum tables disagree on locales: {missing}"
            raise CatalogError(msg, profile.name)
        if not locales_32:
            msg = "catalog entry has no locales"
            raise CatalogError(msg, profile.name)

        for locale in sorted(locales_32):
            try:
                profile.known_record(locale)
            except InvariantViolationError as e:
                msg = f"locale {locale}: {e}"
                raise CatalogError(msg, profile.name) from e

    def load_all(self) -> tuple[dict[str, ProductProfile], list[str]]:
        """Load all catalog entries.

        Returns:
            Tuple of (profiles, failed_products) where:
            - profiles: Dictionary mapping product names to profiles
            - failed_products: Names of entries that failed to load
        """
        profiles: dict[str, ProductProfile] = {}
        failed: list[str] = []

        for product in self.list_products():
            try:
                profiles[product] = self.load(product)
            except CatalogError as e:
                logger.warning(
                    "Skipping invalid catalog entry %s: %s", product, e
                )
                failed.append(product)

        return profiles, failed

    def exists(self, product: str) -> bool:
        return (self.catalog_dir / f"{product}.json").exists()

    def list_products(self) -> list[str]:
        """List all products in the catalog, sorted by name."""
        return sorted(path.stem for path in self.catalog_dir.glob("*.json"))
