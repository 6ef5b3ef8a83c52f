"""Asynchronous logger with a separate troubleshooting log and size-based rotation."""

from __future__ import annotations

import collections
import functools
import os
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from os import PathLike
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

from .logger import LogLevel

MAX_QUEUE_SIZE = 1000
MAX_LOG_FILE_SIZE = 10 * 1024 * 1024

LogCallback = Callable[[LogLevel, str], None]
PathType = Union[str, PathLike]


def timestamp() -> str:
    """Current local time as ``YYYY-MM-DD HH:MM:SS.mmm``."""
    now = datetime.now()
    return now.strftime("%Y-%m-%d %H:%M:%S") + f".{now.microsecond // 1000:03d}"


def level_name(level: int) -> str:
    """Upper-case name of a level, or ``UNKNOWN`` for any other value."""
    try:
        return LogLevel(level).name
    except ValueError:
        return "UNKNOWN"


def format_log_message(level: int, message: str) -> str:
    return f"[{timestamp()}] [{level_name(level)}] {message}"


def format_troubleshooting_message(category: str, operation: str, message: str) -> str:
    return f"[{timestamp()}] [{category}][{operation}] {message}"


@dataclass
class LogMessage:
    """One queued log entry."""

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    category: str = ""
    operation: str = ""
    is_troubleshooting: bool = False

    def formatted(self) -> str:
        if self.is_troubleshooting:
            return format_troubleshooting_message(self.category, self.operation, self.message)
        return format_log_message(self.level, self.message)


class LoggerBridge:
    """Queues messages and writes them from a background thread.

    Ordinary messages go to the application log, troubleshooting messages to
    their own file. Both files are rotated once they grow past a size limit.
    """

    def __init__(
        self,
        max_queue_size: int = MAX_QUEUE_SIZE,
        max_file_size: int = MAX_LOG_FILE_SIZE,
    ) -> None:
        self._max_file_size = max_file_size
        self._queue: collections.deque[LogMessage] = collections.deque(maxlen=max_queue_size)
        self._condition = threading.Condition()
        self._callback_lock = threading.Lock()
        self._callback: Optional[LogCallback] = None
        self._initialized = False
        self._running = False
        self._min_level = LogLevel.INFO
        self._console_output = True
        self._log_path: Optional[Path] = None
        self._troubleshooting_path: Optional[Path] = None
        self._log_file: Optional[TextIO] = None
        self._troubleshooting_file: Optional[TextIO] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(
        self,
        log_file_path: PathType,
        troubleshooting_log_path: PathType,
        console_output: bool = True,
        min_level: LogLevel = LogLevel.INFO,
    ) -> None:
        """Open the log files and start the writer thread.

        The application log is truncated, the troubleshooting log appended to.
        Does nothing if already initialized; raises OSError if a file cannot be opened.
        """
        if self._initialized:
            return
        self._log_path = Path(log_file_path)
        self._troubleshooting_path = Path(troubleshooting_log_path)
        self._console_output = console_output
        self._min_level = LogLevel(min_level)

        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._troubleshooting_path.parent.mkdir(parents=True, exist_ok=True)

        self._log_file = open(self._log_path, "w", encoding="utf-8")
        try:
            self._troubleshooting_file = open(self._troubleshooting_path, "a", encoding="utf-8")
        except OSError:
            self._log_file.close()
            self._log_file = None
            raise

        self._running = True
        self._thread = threading.Thread(target=self._process_loop, name="log-writer", daemon=True)
        self._thread.start()
        self._initialized = True
        self.info("Logger initialized successfully")

    def shutdown(self) -> None:
        """Stop the writer thread, flush pending messages and close the files."""
        if not self._initialized:
            return
        with self._condition:
            self._running = False
            self._condition.notify_all()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        while self._queue:
            self._process(self._queue.popleft())
        for handle in (self._log_file, self._troubleshooting_file):
            if handle is not None:
                handle.close()
        self._log_file = None
        self._troubleshooting_file = None
        self._initialized = False

    def set_min_level(self, level: LogLevel) -> None:
        self._min_level = LogLevel(level)

    def set_console_output(self, enable: bool) -> None:
        self._console_output = enable

    def debug(self, message: str) -> None:
        self._log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self._log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self._log(LogLevel.ERROR, message)

    def critical(self, message: str) -> None:
        self._log(LogLevel.CRITICAL, message)

    def troubleshooting_log(self, category: str, operation: str, message: str) -> None:
        """Queue a message for the troubleshooting log, regardless of the minimum level."""
        if not self._initialized:
            print("Logger not initialized", file=sys.stderr)
            return
        self._enqueue(
            LogMessage(
                level=LogLevel.INFO,
                message=message,
                category=category,
                operation=operation,
                is_troubleshooting=True,
            )
        )

    def troubleshooting_log_message(self, message: str) -> None:
        self.troubleshooting_log("General", "Message", message)

    def troubleshooting_log_filter_operation(self, operation: str, message: str) -> None:
        self.troubleshooting_log("Filter", operation, message)

    def set_log_callback(self, callback: Optional[LogCallback]) -> None:
        """Register a function called with ``(level, formatted_message)`` per message."""
        with self._callback_lock:
            self._callback = callback

    def _log(self, level: LogLevel, message: str) -> None:
        if not self._initialized:
            print("Logger not initialized", file=sys.stderr)
            return
        if level < self._min_level:
            return
        self._enqueue(LogMessage(level=level, message=message))

    def _enqueue(self, message: LogMessage) -> None:
        # The deque's maxlen drops the oldest entry when full.
        with self._condition:
            self._queue.append(message)
            self._condition.notify()

    def _process_loop(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._queue or not self._running)
                if not self._queue:
                    return
                message = self._queue.popleft()
            self._process(message)

    def _process(self, message: LogMessage) -> None:
        self._write_to_file(message)
        if self._console_output:
            self._write_to_console(message)
        self._call_callback(message)

    def _write_to_file(self, message: LogMessage) -> None:
        self._rotate_if_needed()
        handle = self._troubleshooting_file if message.is_troubleshooting else self._log_file
        if handle is not None:
            handle.write(message.formatted() + "\n")
            handle.flush()

    def _write_to_console(self, message: LogMessage) -> None:
        stream = sys.stderr if message.level >= LogLevel.ERROR else sys.stdout
        print(message.formatted(), file=stream, flush=True)

    def _call_callback(self, message: LogMessage) -> None:
        with self._callback_lock:
            if self._callback is not None:
                self._callback(message.level, message.formatted())

    def _rotate_if_needed(self) -> None:
        if self._log_file is not None and self._log_path is not None:
            rotated = self._rotate(self._log_file, self._log_path)
            if rotated is False:
                return
            self._log_file = rotated
        if self._troubleshooting_file is not None and self._troubleshooting_path is not None:
            rotated = self._rotate(self._troubleshooting_file, self._troubleshooting_path)
            if rotated is not False:
                self._troubleshooting_file = rotated

    def _rotate(self, handle: TextIO, path: Path):
        """Rotate one file if it is too large; False if its size could not be read."""
        handle.flush()
        try:
            size = path.stat().st_size
        except OSError as exc:
            print(f"Failed to get log file size: {exc}", file=sys.stderr)
            return False
        if size <= self._max_file_size:
            return handle
        handle.close()
        rotated_path = path.with_name(f"{path.name}.{int(time.time())}")
        try:
            os.replace(path, rotated_path)
        except OSError as exc:
            print(f"Failed to rotate log file: {exc}", file=sys.stderr)
        try:
            return open(path, "a", encoding="utf-8")
        except OSError as exc:
            print(f"Failed to reopen log file after rotation: {path}: {exc}", file=sys.stderr)
            return None


@functools.lru_cache(maxsize=None)
def get_logger_bridge() -> LoggerBridge:
    """Return the process-wide logger bridge."""
    return LoggerBridge()