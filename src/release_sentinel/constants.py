"""Centralized constants for release-sentinel.

Constants are grouped by concern and annotated with typing.Final.

Usage:
    from release_sentinel.constants import DEFAULT_TIMEOUT_SECONDS
"""

from typing import Final, Literal

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_VERSION: Final[str] = "1.0.0"
CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "release-sentinel"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_MAX_CONCURRENT_CHECKS: Final[int] = 8
DEFAULT_LOCALE: Final[str] = "en-US"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_DIRECTORY: Final[str] = "directory"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_MAX_CONCURRENT_CHECKS: Final[str] = "max_concurrent_checks"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_DEFAULT_LOCALE: Final[str] = "default_locale"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"
KEY_RETRY_ATTEMPTS: Final[str] = "retry_attempts"

DIRECTORY_KEYS: Final[tuple[str, ...]] = ("logs", "catalog")

# =============================================================================
# Network Constants
# =============================================================================

DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
DEFAULT_RETRY_ATTEMPTS: Final[int] = 2
RETRY_BACKOFF_SECONDS: Final[float] = 1.0
USER_AGENT: Final[str] = "release-sentinel"

HTTP_REDIRECT_STATUSES: Final[frozenset[int]] = frozenset(
    {301, 302, 303, 307, 308}
)

# =============================================================================
# Release Data Constants
# =============================================================================

HashAlgorithm = Literal["sha256", "sha512"]
Architecture = Literal["win32", "win64"]

ARCH_32BIT: Final[Architecture] = "win32"
ARCH_64BIT: Final[Architecture] = "win64"
ARCHITECTURES: Final[tuple[Architecture, ...]] = (ARCH_32BIT, ARCH_64BIT)

HASH_HEX_LENGTH: Final[dict[str, int]] = {"sha256": 64, "sha512": 128}
DEFAULT_HASH_ALGORITHM: Final[HashAlgorithm] = "sha512"

# Locale codes as they appear in Mozilla manifests, e.g. "de", "en-GB"
LOCALE_PATTERN: Final[str] = r"[a-z]{2,3}(?:-[A-Z]+)?"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 3
LOG_FILE_NAME: Final[str] = "release-sentinel.log"
LOG_DIR_ENV: Final[str] = "RELEASE_SENTINEL_LOG_DIR"
LOG_ROOT_NAME: Final[str] = "release_sentinel"

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}
