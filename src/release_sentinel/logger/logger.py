"""Public logging API.

- setup_logging(): initialize the root logger once, return a named logger
- get_logger(): the call every module makes at import time
- apply_config_levels(): push levels from settings.conf onto the handlers
- set_console_level(): temporary console override for --verbose
- flush_all_handlers() / clear_logger_state(): shutdown and test isolation
"""

import atexit
import logging
import os
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from release_sentinel.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV,
    LOG_FILE_NAME,
    LOG_ROOT_NAME,
)
from release_sentinel.logger.handlers import setup_root_logger
from release_sentinel.logger.state import get_runtime

if TYPE_CHECKING:
    from release_sentinel.config.settings import GlobalConfig

_DRAIN_TIMEOUT_SECONDS = 5.0


def load_log_settings() -> tuple[str, str, Path]:
    """Return bootstrap console level, file level and log path.

    settings.conf is not read here: logging starts before configuration
    is loaded, and apply_config_levels() adjusts the levels afterwards.
    RELEASE_SENTINEL_LOG_DIR redirects the log directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    override = os.getenv(LOG_DIR_ENV)
    log_dir = (
        Path(override).expanduser()
        if override
        else Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR / "logs"
    )
    log_path = log_dir / LOG_FILE_NAME
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def flush_all_handlers() -> None:
    """Let the listener drain the queue, then flush its handlers."""
    runtime = get_runtime()
    log_queue = runtime.log_queue
    if log_queue is None:
        return

    deadline = time.monotonic() + _DRAIN_TIMEOUT_SECONDS
    while not log_queue.empty() and time.monotonic() < deadline:
        time.sleep(0.01)
    # The last dequeued record may still be in emit()
    time.sleep(0.05)

    for handler in runtime.handlers():
        try:
            handler.flush()
        except (OSError, ValueError):
            continue


def _stop_listener() -> None:
    runtime = get_runtime()
    if not runtime.running:
        return
    flush_all_handlers()
    runtime.detach()


atexit.register(_stop_listener)


def setup_logging(
    name: str = LOG_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the root logger once and return the named logger.

    Module loggers ("release_sentinel.core.resolver", ...) have no
    handlers of their own and propagate to the release_sentinel logger.

    Args:
        name: Logger name, normally __name__
        console_level: Console level name; bootstrap default if None
        file_level: File level name; bootstrap default if None
        log_file: Log file path; bootstrap default if None
        enable_file_logging: Whether to write the rotating log file

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    runtime = get_runtime()
    with runtime.lock:
        if not runtime.running:
            default_console, default_file, default_path = load_log_settings()
            setup_root_logger(
                runtime,
                console_level or default_console,
                file_level or default_file,
                log_file or default_path,
                enable_file_logging,
            )
    return logging.getLogger(name)


def get_logger(name: str = LOG_ROOT_NAME) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Resolving %s (%s)", product, locale)

    """
    return setup_logging(name=name)


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, RotatingFileHandler
    )


def apply_config_levels(config: "GlobalConfig") -> None:
    """Apply log_level and console_log_level from the global config.

    Handler levels change; handlers are never added or removed.
    """
    console_level = getattr(
        logging, config["console_log_level"], logging.WARNING
    )
    file_level = getattr(logging, config["log_level"], logging.INFO)

    runtime = get_runtime()
    for handler in runtime.handlers():
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(file_level)
        elif _is_console(handler):
            handler.setLevel(console_level)

    runtime.config_applied = True


def set_console_level(level: str) -> None:
    """Change the console handler level, e.g. to DEBUG for --verbose."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    for handler in get_runtime().handlers():
        if _is_console(handler):
            handler.setLevel(numeric)


def clear_logger_state() -> None:
    """Return logging to its uninitialized state.

    Test helper: stops the listener and detaches every handler from the
    release_sentinel logger tree.
    """
    runtime = get_runtime()
    with runtime.lock:
        _stop_listener()

        names = [
            name
            for name in logging.Logger.manager.loggerDict
            if name == LOG_ROOT_NAME or name.startswith(LOG_ROOT_NAME + ".")
        ]
        for name in names:
            named_logger = logging.getLogger(name)
            for handler in list(named_logger.handlers):
                named_logger.removeHandler(handler)
                handler.close()
