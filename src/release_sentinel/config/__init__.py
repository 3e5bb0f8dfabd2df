"""Configuration management - settings, catalog, and path utilities.

This package provides:
- ConfigManager: Unified facade for all configuration operations
- GlobalConfigManager: INI configuration management (from settings.py)
- CatalogLoader: Product catalog access (from catalog.py)
- Paths: Path constants and utilities (from paths.py)
"""

from release_sentinel.config.catalog import CatalogLoader
from release_sentinel.config.config import ConfigManager
from release_sentinel.config.paths import Paths
from release_sentinel.config.settings import (
    DirectoryConfig,
    GlobalConfig,
    GlobalConfigManager,
    NetworkConfig,
)

__all__ = [
    "CatalogLoader",
    "ConfigManager",
    "DirectoryConfig",
    "GlobalConfig",
    "GlobalConfigManager",
    "NetworkConfig",
    "Paths",
]
