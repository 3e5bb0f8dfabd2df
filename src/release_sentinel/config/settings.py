"""Global configuration manager for INI settings.

The settings file lives at ~/.config/release-sentinel/settings.conf and is
created with defaults on first load. Values that fail to parse fall back to
their defaults with a warning instead of aborting the run.
"""

import configparser
from datetime import UTC, datetime
from pathlib import Path
from typing import TypedDict

from release_sentinel.config.paths import Paths
from release_sentinel.constants import (
    CONFIG_FILE_NAME,
    CONFIG_VERSION,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOCALE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONCURRENT_CHECKS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DIRECTORY_KEYS,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DEFAULT_LOCALE,
    KEY_LOG_LEVEL,
    KEY_MAX_CONCURRENT_CHECKS,
    KEY_RETRY_ATTEMPTS,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_NETWORK,
)
from release_sentinel.exceptions import ConfigurationError
from release_sentinel.logger import get_logger

logger = get_logger(__name__)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NetworkConfig(TypedDict):
    """Network configuration options."""

    timeout_seconds: int
    retry_attempts: int


class DirectoryConfig(TypedDict):
    """Directory paths configuration."""

    logs: Path
    catalog: Path


class GlobalConfig(TypedDict):
    """Global application configuration."""

    config_version: str
    max_concurrent_checks: int
    log_level: str
    console_log_level: str
    default_locale: str
    network: NetworkConfig
    directory: DirectoryConfig


def _strip_inline_comment(value: str) -> str:
    """Strip an inline comment (anything after '  #') from a value."""
    if "  #" in value:
        return value.split("  #")[0].strip()
    return value.strip()


_FILE_HEADER = """# release-sentinel configuration
# Settings for checking vendor release feeds against known-good records.
#
# Last updated: {timestamp}
# Configuration version: {version}

"""

_SECTION_COMMENTS = {
    SECTION_DEFAULT: """# ========================================
# MAIN CONFIGURATION
# ========================================
# config_version: Version of configuration format (DO NOT EDIT)
# max_concurrent_checks: Max product checks running at once (1-32)
# log_level: Detail level for log files (DEBUG, INFO, WARNING, ERROR)
# console_log_level: Console output detail level (DEBUG, INFO, etc.)
# default_locale: Locale used when a check names none, e.g. en-US

""",
    SECTION_NETWORK: """
# ========================================
# NETWORK CONFIGURATION
# ========================================
# timeout_seconds: Seconds to wait before a request times out
# retry_attempts: Extra attempts after a failed request (0-10)

""",
    SECTION_DIRECTORY: """
# ========================================
# DIRECTORY PATHS
# ========================================
# logs: Log files location
# catalog: Directory holding product catalog JSON files

""",
}


class GlobalConfigManager:
    """Manages global INI configuration."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize global config manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.CONFIG_DIR)

        """
        self.config_dir = config_dir or Paths.CONFIG_DIR
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_global_config(self) -> GlobalConfig:
        """Get default global configuration values."""
        return GlobalConfig(
            config_version=CONFIG_VERSION,
            max_concurrent_checks=DEFAULT_MAX_CONCURRENT_CHECKS,
            log_level=DEFAULT_LOG_LEVEL,
            console_log_level=DEFAULT_CONSOLE_LOG_LEVEL,
            default_locale=DEFAULT_LOCALE,
            network=NetworkConfig(
                timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
                retry_attempts=DEFAULT_RETRY_ATTEMPTS,
            ),
            directory=DirectoryConfig(
                logs=self.config_dir / "logs",
                catalog=Paths.CATALOG_DIR,
            ),
        )

    def load_global_config(self) -> GlobalConfig:
        """Load global configuration from the INI file.

        A missing file is created from defaults.

        Returns:
            Loaded global configuration

        Raises:
            ConfigurationError: If the file exists but cannot be parsed

        """
        if not self.settings_file.exists():
            config = self.get_default_global_config()
            self.save_global_config(config)
            return config

        parser = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        try:
            parser.read(self.settings_file, encoding="utf-8")
        except configparser.Error as e:
            msg = f"cannot parse {self.settings_file}: {e}"
            raise ConfigurationError(msg, str(self.settings_file)) from e

        return self._convert_to_global_config(parser)

    def save_global_config(self, config: GlobalConfig) -> None:
        """Save global configuration to the INI file with comments.

        Raises:
            ConfigurationError: If the file cannot be written

        """
        timestamp = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%S")
        sections = {
            SECTION_DEFAULT: {
                KEY_CONFIG_VERSION: config["config_version"],
                KEY_MAX_CONCURRENT_CHECKS: str(
                    config["max_concurrent_checks"]
                ),
                KEY_LOG_LEVEL: config["log_level"],
                KEY_CONSOLE_LOG_LEVEL: config["console_log_level"],
                KEY_DEFAULT_LOCALE: config["default_locale"],
            },
            SECTION_NETWORK: {
                KEY_TIMEOUT_SECONDS: str(
                    config["network"]["timeout_seconds"]
                ),
                KEY_RETRY_ATTEMPTS: str(config["network"]["retry_attempts"]),
            },
            SECTION_DIRECTORY: {
                key: str(path) for key, path in config["directory"].items()
            },
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with self.settings_file.open("w", encoding="utf-8") as f:
                f.write(
                    _FILE_HEADER.format(
                        timestamp=timestamp, version=CONFIG_VERSION
                    )
                )
                for section, values in sections.items():
                    f.write(_SECTION_COMMENTS[section])
                    f.write(f"[{section}]\n")
                    for key, value in values.items():
                        f.write(f"{key} = {value}\n")
        except OSError as e:
            msg = f"cannot write {self.settings_file}: {e}"
            raise ConfigurationError(msg, str(self.settings_file)) from e

    def _convert_to_global_config(
        self, parser: configparser.ConfigParser
    ) -> GlobalConfig:
        """Convert a parsed INI file to a typed GlobalConfig."""
        defaults = self.get_default_global_config()
        default_section = parser.defaults()

        def get_str(key: str, default: str) -> str:
            value = default_section.get(key)
            if value is None:
                return default
            return _strip_inline_comment(value) or default

        def get_int(
            section: str, key: str, default: int, minimum: int = 0
        ) -> int:
            if section == SECTION_DEFAULT:
                raw = default_section.get(key)
            elif parser.has_section(section):
                raw = parser.get(section, key, raw=True, fallback=None)
            else:
                raw = None
            if raw is None:
                return default
            try:
                value = int(_strip_inline_comment(raw))
            except ValueError:
                logger.warning(
                    "Invalid %s.%s value %r, using default %d",
                    section,
                    key,
                    raw,
                    default,
                )
                return default
            if value < minimum:
                logger.warning(
                    "%s.%s must be at least %d, using default %d",
                    section,
                    key,
                    minimum,
                    default,
                )
                return default
            return value

        def get_level(key: str, default: str) -> str:
            level = get_str(key, default).upper()
            if level not in _VALID_LOG_LEVELS:
                logger.warning(
                    "Invalid %s %r, using default %s", key, level, default
                )
                return default
            return level

        directory: dict[str, Path] = dict(defaults["directory"])
        if parser.has_section(SECTION_DIRECTORY):
            for key in DIRECTORY_KEYS:
                raw = parser.get(SECTION_DIRECTORY, key, raw=True, fallback="")
                cleaned = _strip_inline_comment(raw)
                if cleaned:
                    directory[key] = Paths.expand_path(cleaned)

        return GlobalConfig(
            config_version=get_str(KEY_CONFIG_VERSION, CONFIG_VERSION),
            max_concurrent_checks=get_int(
                SECTION_DEFAULT,
                KEY_MAX_CONCURRENT_CHECKS,
                DEFAULT_MAX_CONCURRENT_CHECKS,
                minimum=1,
            ),
            log_level=get_level(KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            console_log_level=get_level(
                KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL
            ),
            default_locale=get_str(KEY_DEFAULT_LOCALE, DEFAULT_LOCALE),
            network=NetworkConfig(
                timeout_seconds=get_int(
                    SECTION_NETWORK,
                    KEY_TIMEOUT_SECONDS,
                    DEFAULT_TIMEOUT_SECONDS,
                    minimum=1,
                ),
                retry_attempts=get_int(
                    SECTION_NETWORK,
                    KEY_RETRY_ATTEMPTS,
                    DEFAULT_RETRY_ATTEMPTS,
                ),
            ),
            directory=DirectoryConfig(
                logs=directory["logs"], catalog=directory["catalog"]
            ),
        )
