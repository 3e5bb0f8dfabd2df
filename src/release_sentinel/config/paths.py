"""Path constants and utilities for release-sentinel configuration."""

from pathlib import Path

from release_sentinel.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_DIR = HOME_DIR / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    # Catalog directory (bundled with package)
    PACKAGE_DIR = Path(__file__).parent.parent
    CATALOG_DIR = PACKAGE_DIR / "catalog"

    LOGS_DIR = CONFIG_DIR / "logs"
    GLOBAL_CONFIG_FILE = CONFIG_DIR / CONFIG_FILE_NAME

    @classmethod
    def get_catalog_entry_path(cls, product: str) -> Path:
        """Get path to the bundled catalog entry of a product.

        Args:
            product: Product name, e.g. "firefox-esr"

        Returns:
            Path to catalog JSON file
        """
        return cls.CATALOG_DIR / f"{product}.json"

    @classmethod
    def expand_path(cls, path_str: str | Path) -> Path:
        """Expand and resolve path with ~ and relative path support.

        Example:
            >>> Paths.expand_path("~/logs")
            Path('/home/user/logs')
        """
        return Path(path_str).expanduser().resolve(strict=False)

    @classmethod
    def validate_catalog_directory(
        cls, catalog_dir: Path | None = None
    ) -> None:
        """Validate that a catalog directory exists and holds entries.

        Raises:
            FileNotFoundError: If the directory or its JSON files are missing
            NotADirectoryError: If the catalog path is not a directory
        """
        directory = catalog_dir or cls.CATALOG_DIR
        if not directory.exists():
            msg = (
                f"Catalog directory not found: {directory}\n"
                "This indicates a packaging or installation issue."
            )
            raise FileNotFoundError(msg)

        if not directory.is_dir():
            msg = f"Catalog path is not a directory: {directory}"
            raise NotADirectoryError(msg)

        if not any(directory.glob("*.json")):
            msg = f"No catalog entries found in: {directory}"
            raise FileNotFoundError(msg)

    @classmethod
    def ensure_directories(cls, config_dir: Path | None = None) -> None:
        """Create the configuration and log directories if missing."""
        base = config_dir or cls.CONFIG_DIR
        for directory in (base, base / "logs"):
            directory.mkdir(parents=True, exist_ok=True)
