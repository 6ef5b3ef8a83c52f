"""Thread-safe application logger writing to a file, the console and a callback."""

from __future__ import annotations

import enum
import functools
import sys
import threading
from datetime import datetime
from os import PathLike
from typing import Callable, Optional, TextIO, Union


class LogLevel(enum.IntEnum):
    """Severity of a log message, in increasing order."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


LogCallback = Callable[[LogLevel, str], None]


def _timestamp() -> str:
    now = datetime.now()
    return now.strftime("%Y-%m-%d %H:%M:%S") + f".{now.microsecond // 1000:03d}"


class Logger:
    """Writes timestamped messages to an optional file, stdout and a callback."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._file: Optional[TextIO] = None
        self._callback: Optional[LogCallback] = None

    def debug(self, message: str) -> None:
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self.log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def critical(self, message: str) -> None:
        self.log(LogLevel.CRITICAL, message)

    def log(self, level: LogLevel, message: str) -> None:
        """Format and emit one message at the given level."""
        level = LogLevel(level)
        with self._lock:
            formatted = f"{_timestamp()} [{level.name}] {message}"
            if self._file is not None:
                self._file.write(formatted + "\n")
                self._file.flush()
            print(formatted, file=sys.stdout, flush=True)
            if self._callback is not None:
                self._callback(level, message)

    def set_log_file(self, file_path: Union[str, PathLike]) -> None:
        """Append further messages to ``file_path``; raises OSError if it cannot be opened."""
        with self._lock:
            self._close()
            self._file = open(file_path, "a", encoding="utf-8")

    def close_log_file(self) -> None:
        with self._lock:
            self._close()

    def set_log_callback(self, callback: Optional[LogCallback]) -> None:
        """Register a function called with ``(level, message)`` for every message."""
        with self._lock:
            self._callback = callback

    def _close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


@functools.lru_cache(maxsize=None)
def get_logger() -> Logger:
    """Return the process-wide logger."""
    return Logger()