"""Console formatter.

The CLI prints its results with print(); logger.info() lines on the console
are progress notes and appear as bare messages. Warnings and errors get a
timestamped line with a coloured level name.
"""

import logging

from release_sentinel.constants import LOG_COLORS


class ConsoleFormatter(logging.Formatter):
    """Bare INFO messages, coloured structured lines for other levels.

    Example Output:
        INFO:     "Checking 3 release record(s)"
        WARNING:  "12:30:45 - release_sentinel.core.fetcher - WARNING - ..."

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        use_color: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()

        color = LOG_COLORS.get(record.levelname)
        if not self.use_color or color is None:
            return super().format(record)

        # Format a copy; the file handler receives the same record
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{LOG_COLORS['RESET']}"
        return super().format(colored)
