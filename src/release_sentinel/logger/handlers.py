"""Handler construction for the release_sentinel root logger.

Records flow through a QueueHandler into a QueueListener thread that owns
the console and rotating file handlers, so coroutines never block on I/O
while logging.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from release_sentinel.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROOT_NAME,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from release_sentinel.exceptions import ConfigurationError
from release_sentinel.logger.formatters import ConsoleFormatter
from release_sentinel.logger.state import LogRuntime


def _level(name: str, fallback: int) -> int:
    return getattr(logging, name.upper(), fallback)


def build_console_handler(level: str) -> logging.StreamHandler:
    """Console handler on stderr; stdout is reserved for command output."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
            use_color=sys.stderr.isatty(),
        )
    )
    handler.setLevel(_level(level, logging.WARNING))
    return handler


def build_file_handler(log_file: Path, level: str) -> RotatingFileHandler:
    """Rotating file handler writing to log_file.

    Raises:
        ConfigurationError: If the log directory or file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"cannot open log file: {e}"
        raise ConfigurationError(msg, str(log_file)) from e

    handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    handler.setLevel(_level(level, logging.INFO))
    return handler


def setup_root_logger(
    runtime: LogRuntime,
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Attach a QueueHandler to the release_sentinel logger.

    Called once per process, or again after clear_logger_state().

    Raises:
        ConfigurationError: If the file handler cannot be created

    """
    targets: list[logging.Handler] = [build_console_handler(console_level)]
    if enable_file_logging:
        targets.append(build_file_handler(log_file, file_level))

    root_logger = logging.getLogger(LOG_ROOT_NAME)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
        existing.close()

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue()
    listener = QueueListener(log_queue, *targets, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(QueueHandler(log_queue))

    runtime.attach(
        log_queue, listener, log_file if enable_file_logging else None
    )
