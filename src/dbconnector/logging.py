"""This module defines log formats, a caching handler and the logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from collections import deque
from typing import Sequence

from .config import DbConnectorConfig
from .config.base import get_log_path


__all__ = [
    "CachedHandler",
    "LOG_FMT_LONG",
    "LOG_FMT_SHORT",
    "setup_logging",
]

LOG_FMT_LONG = logging.Formatter(
    fmt="%(asctime)s %(module)s %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
LOG_FMT_SHORT = logging.Formatter(fmt="%(message)s")


class CachedHandler(logging.Handler):
    """Handler which stores past records

    :param level: Initial log level. Defaults to NOTSET.
    :param maxlen: Maximum number of records to store. If ``None``, all records will be
        stored. Defaults to ``None``.
    """

    cached_records: deque[logging.LogRecord]

    def __init__(self, level: int = logging.NOTSET, maxlen: int | None = None) -> None:
        super().__init__(level=level)
        self.cached_records = deque([], maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        """
        Saves the specified log record to the cache.

        :param record: Log record.
        """
        self.cached_records.append(record)

    def get_last_message(self) -> str:
        """
        :returns: The log message of the last record or an empty string.
        """
        try:
            last_record = self.cached_records[-1]
            return last_record.getMessage()
        except IndexError:
            return ""

    def get_all_messages(self) -> list[str]:
        """
        :returns: A list of all record messages.
        """
        return [r.getMessage() for r in self.cached_records]

    def clear(self) -> None:
        """
        Clears all cached records.
        """
        self.cached_records.clear()


def setup_logging(
    config_name: str,
    file: bool = True,
    stderr: bool = True,
    level: int | None = None,
) -> Sequence[logging.Handler]:
    """
    Set up logging for the "dbconnector" logger hierarchy. Handlers installed by a
    previous call are replaced.

    :param config_name: Config name to determine the log level and the log file name.
    :param file: Whether to log to a rotating log file.
    :param stderr: Whether to log to stderr.
    :param level: Log level, overrides the level from the config.
    :returns: Log handlers.
    """
    if level is None:
        level = DbConnectorConfig(config_name).get("app", "log_level")

    root_logger = logging.getLogger("dbconnector")
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_dbconnector_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = []

    # Log to file.
    if file:
        logfile = get_log_path("dbconnector", f"{config_name}.log")
        log_handler_file = RotatingFileHandler(
            logfile,
            maxBytes=10**7,
            backupCount=1,
            encoding="utf-8",
            errors="backslashreplace",
        )
        log_handler_file.setFormatter(LOG_FMT_LONG)
        log_handler_file.setLevel(level)
        handlers.append(log_handler_file)

    # Log to stderr if requested.
    if stderr:
        log_handler_stream = logging.StreamHandler()
        log_handler_stream.setFormatter(LOG_FMT_SHORT)
        log_handler_stream.setLevel(level)
        handlers.append(log_handler_stream)

    for handler in handlers:
        setattr(handler, "_dbconnector_handler", True)
        root_logger.addHandler(handler)

    return handlers
