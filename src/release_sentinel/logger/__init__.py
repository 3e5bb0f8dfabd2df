"""Logging for release-sentinel.

Architecture:
    Application → QueueHandler → Queue → QueueListener Thread
                                              ↓
                                    Console + File Handlers

Usage:
    >>> from release_sentinel.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Checking %s", product)  # %-style, never f-strings

Rules:
    1. Always use get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Only the root "release_sentinel" logger has handlers

Environment Variables:
    RELEASE_SENTINEL_LOG_DIR: redirect the log file directory (tests)
"""

from release_sentinel.logger.formatters import ConsoleFormatter
from release_sentinel.logger.logger import (
    apply_config_levels,
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    set_console_level,
    setup_logging,
)
from release_sentinel.logger.state import LogRuntime, get_runtime

__all__ = [
    "ConsoleFormatter",
    "LogRuntime",
    "apply_config_levels",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_runtime",
    "set_console_level",
    "setup_logging",
]
