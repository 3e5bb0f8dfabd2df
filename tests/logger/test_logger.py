"""Tests for logging setup and level control."""

import logging
import os
import queue
from logging.handlers import QueueListener, RotatingFileHandler
from pathlib import Path

import pytest

from release_sentinel.constants import LOG_COLORS
from release_sentinel.logger import (
    ConsoleFormatter,
    LogRuntime,
    apply_config_levels,
    get_logger,
    get_runtime,
    set_console_level,
)


def _handlers():
    get_logger(__name__)
    return get_runtime().handlers()


def _console_handler():
    return next(
        h
        for h in _handlers()
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, RotatingFileHandler)
    )


def _file_handler():
    return next(h for h in _handlers() if isinstance(h, RotatingFileHandler))


@pytest.fixture(autouse=True)
def restore_levels():
    console_level = _console_handler().level
    file_level = _file_handler().level
    yield
    _console_handler().setLevel(console_level)
    _file_handler().setLevel(file_level)


class TestLogging:
    """Test the queue-based logging setup."""

    def test_child_loggers_share_root(self):
        logger = get_logger("release_sentinel.core.resolver")

        assert logger.name == "release_sentinel.core.resolver"
        assert logger.handlers == []
        assert get_runtime().running

    def test_log_file_redirected(self):
        log_file = Path(_file_handler().baseFilename)

        assert log_file.parent == Path(
            os.environ["RELEASE_SENTINEL_LOG_DIR"]
        ).expanduser()
        assert get_runtime().log_file == log_file

    def test_apply_config_levels(self, global_config):
        global_config["console_log_level"] = "ERROR"
        global_config["log_level"] = "DEBUG"

        apply_config_levels(global_config)

        assert _console_handler().level == logging.ERROR
        assert _file_handler().level == logging.DEBUG
        assert get_runtime().config_applied

    def test_set_console_level(self):
        file_level = _file_handler().level

        set_console_level("debug")

        assert _console_handler().level == logging.DEBUG
        assert _file_handler().level == file_level


class TestConsoleFormatter:
    """Test console line rendering."""

    def record(self, level: int) -> logging.LogRecord:
        return logging.LogRecord(
            "release_sentinel.core.fetcher",
            level,
            __file__,
            1,
            "Attempt %s failed",
            (1,),
            None,
        )

    def test_info_is_bare(self):
        formatter = ConsoleFormatter("%(levelname)s - %(message)s")

        assert formatter.format(self.record(logging.INFO)) == (
            "Attempt 1 failed"
        )

    def test_warning_is_colored_without_touching_record(self):
        formatter = ConsoleFormatter("%(levelname)s - %(message)s")
        record = self.record(logging.WARNING)

        line = formatter.format(record)

        assert line.startswith(LOG_COLORS["WARNING"])
        assert line.endswith("WARNING\033[0m - Attempt 1 failed")
        assert record.levelname == "WARNING"

    def test_plain_when_color_disabled(self):
        formatter = ConsoleFormatter(
            "%(levelname)s - %(message)s", use_color=False
        )

        assert formatter.format(self.record(logging.ERROR)) == (
            "ERROR - Attempt 1 failed"
        )


class TestLogRuntime:
    """Test the listener lifecycle on a private runtime."""

    def test_attach_and_detach(self, tmp_path):
        runtime = LogRuntime()
        log_queue = queue.Queue()
        handler = logging.NullHandler()
        listener = QueueListener(log_queue, handler)
        listener.start()

        runtime.attach(log_queue, listener, tmp_path / "release.log")
        runtime.config_applied = True

        assert runtime.running
        assert runtime.handlers() == (handler,)

        runtime.detach()

        assert not runtime.running
        assert runtime.handlers() == ()
        assert runtime.log_queue is None
        assert runtime.log_file is None
        assert not runtime.config_applied
