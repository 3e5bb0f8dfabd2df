"""Running log pipeline of the process.

One LogRuntime exists per process. It owns the queue and the listener
thread that feeds the console and file handlers, and knows where the log
file lives.
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from logging.handlers import QueueListener
from pathlib import Path


@dataclass
class LogRuntime:
    """Queue, listener and bookkeeping for the release_sentinel logger."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    log_queue: "queue.Queue[logging.LogRecord] | None" = None
    listener: QueueListener | None = None
    log_file: Path | None = None
    config_applied: bool = False

    @property
    def running(self) -> bool:
        return self.listener is not None

    def attach(
        self,
        log_queue: "queue.Queue[logging.LogRecord]",
        listener: QueueListener,
        log_file: Path | None,
    ) -> None:
        self.log_queue = log_queue
        self.listener = listener
        self.log_file = log_file

    def handlers(self) -> tuple[logging.Handler, ...]:
        if self.listener is None:
            return ()
        return tuple(self.listener.handlers)

    def detach(self) -> None:
        """Stop the listener thread and forget the pipeline."""
        if self.listener is not None:
            self.listener.stop()
        self.listener = None
        self.log_queue = None
        self.log_file = None
        self.config_applied = False


_runtime = LogRuntime()


def get_runtime() -> LogRuntime:
    return _runtime
