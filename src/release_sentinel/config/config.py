"""Configuration facade for release-sentinel.

Coordinates the specialized managers:
- settings.py: GlobalConfigManager for INI configuration
- catalog.py: CatalogLoader for product catalog access
- paths.py: Path constants and utilities
"""

from pathlib import Path

from release_sentinel.config.catalog import CatalogLoader
from release_sentinel.config.paths import Paths
from release_sentinel.config.settings import GlobalConfig, GlobalConfigManager
from release_sentinel.domain.product import ProductProfile
from release_sentinel.exceptions import CatalogError


class ConfigManager:
    """Facade that coordinates all configuration managers."""

    def __init__(
        self, config_dir: Path | None = None, catalog_dir: Path | None = None
    ) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Optional custom config directory.
                Defaults to Paths.CONFIG_DIR
            catalog_dir: Optional custom catalog directory. Overrides the
                directory.catalog setting when given
        """
        self._config_dir = config_dir or Paths.CONFIG_DIR
        self._catalog_override = catalog_dir
        self.global_config_manager = GlobalConfigManager(self._config_dir)
        self._catalog_loader: CatalogLoader | None = None
        self._config: GlobalConfig | None = None

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def settings_file(self) -> Path:
        return self.global_config_manager.settings_file

    @property
    def config(self) -> GlobalConfig:
        """Loaded global configuration (read once, then cached)."""
        if self._config is None:
            self._config = self.load_global_config()
        return self._config

    @property
    def catalog_loader(self) -> CatalogLoader:
        """Catalog loader for the configured directory.

        Raises:
            CatalogError: If the catalog directory is missing or empty
        """
        if self._catalog_loader is None:
            catalog_dir = (
                self._catalog_override or self.config["directory"]["catalog"]
            )
            try:
                Paths.validate_catalog_directory(catalog_dir)
            except OSError as e:
                raise CatalogError(str(e), str(catalog_dir)) from e
            self._catalog_loader = CatalogLoader(catalog_dir)
        return self._catalog_loader

    def load_global_config(self) -> GlobalConfig:
        """Load global configuration from INI file."""
        return self.global_config_manager.load_global_config()

    def save_global_config(self, config: GlobalConfig) -> None:
        """Save global configuration to INI file."""
        self.global_config_manager.save_global_config(config)
        self._config = config

    def load_product(self, product: str) -> ProductProfile:
        """Load one product profile from the catalog."""
        return self.catalog_loader.load(product)

    def list_products(self) -> list[str]:
        return self.catalog_loader.list_products()
