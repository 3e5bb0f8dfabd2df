"""Shared fixtures for config module tests.

- catalog_dir: temporary catalog directory holding one valid entry
- config_manager: ConfigManager on temporary config and catalog dirs
"""

from pathlib import Path

import orjson
import pytest

from release_sentinel.config import ConfigManager


@pytest.fixture
def catalog_dir(tmp_path: Path, devedition_data) -> Path:
    catalog_dir = tmp_path / "catalog"
    catalog_dir.mkdir()
    (catalog_dir / "firefox-aurora.json").write_bytes(
        orjson.dumps(devedition_data, option=orjson.OPT_INDENT_2)
    )
    return catalog_dir


@pytest.fixture
def config_manager(tmp_path: Path, catalog_dir: Path) -> ConfigManager:
    return ConfigManager(tmp_path / "config", catalog_dir)
