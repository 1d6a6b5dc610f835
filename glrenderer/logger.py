"""Console and file logger with levels, colours and source locations."""

from __future__ import annotations

import functools
import os
import sys
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Callable, Optional, TextIO

_GRAY = "\033[90m"
_RESET = "\033[0m"


class LogLevel(IntEnum):
    """Severity of a log message; higher values are more severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4
    TODO = 5


_PLAIN_LABELS = {
    LogLevel.DEBUG: "[DEBUG]  ",
    LogLevel.INFO: "[INFO]   ",
    LogLevel.WARNING: "[WARNING]",
    LogLevel.ERROR: "[ERROR]  ",
    LogLevel.FATAL: "[FATAL]  ",
    LogLevel.TODO: "[TODO]   ",
}

_LABEL_COLOURS = {
    LogLevel.DEBUG: "\033[36m",
    LogLevel.INFO: "\033[32m",
    LogLevel.WARNING: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.FATAL: "\033[35m",
    LogLevel.TODO: "\033[34m",
}

_GL_ERRORS = {
    0x0000: "GL_NO_ERROR - No error has been recorded",
    0x0500: "GL_INVALID_ENUM - An unacceptable value is specified for an enumerated argument",
    0x0501: "GL_INVALID_VALUE - A numeric argument is out of range",
    0x0502: "GL_INVALID_OPERATION - The specified operation is not allowed in the current state",
    0x0506: "GL_INVALID_FRAMEBUFFER_OPERATION - The framebuffer object is not complete",
    0x0505: "GL_OUT_OF_MEMORY - There is not enough memory left to execute the command",
    0x0504: (
        "GL_STACK_UNDERFLOW - An attempt has been made to perform an operation "
        "that would cause an internal stack to underflow"
    ),
    0x0503: (
        "GL_STACK_OVERFLOW - An attempt has been made to perform an operation "
        "that would cause an internal stack to overflow"
    ),
}


def level_label(level: LogLevel, colors: bool) -> str:
    """Return the fixed-width label for a level, optionally ANSI coloured."""
    try:
        plain = _PLAIN_LABELS[LogLevel(level)]
    except ValueError:
        return "[UNKNOWN]"
    if not colors:
        return plain
    return f"{_LABEL_COLOURS[LogLevel(level)]}{plain}{_RESET}"


def normalize_base_path(path: str) -> str:
    """Make a non-empty path end with a separator."""
    if path and not path.endswith(("/", "\\")):
        return path + "/"
    return path


def short_file_path(base_path: str, file_path: str) -> str:
    """Shorten a source file path for display."""
    if not base_path or not file_path:
        return file_path
    if file_path.startswith(base_path):
        return file_path[len(base_path):]
    src_pos = file_path.find("/src/")
    if src_pos != -1:
        return file_path[src_pos + 1:]
    last_slash = max(file_path.rfind("/"), file_path.rfind("\\"))
    if last_slash != -1:
        return file_path[last_slash + 1:]
    return file_path


def log_file_name(moment: datetime) -> str:
    """Name of a log file (without extension) for the given moment."""
    return moment.strftime("%d_%m_%Y_|_%H:%M")


def timestamp(moment: datetime) -> str:
    """Bracketed time of day used as a line prefix."""
    return moment.strftime("[%H:%M:%S]")


def gl_error_to_string(error: int) -> str:
    """Describe an OpenGL error code."""
    return _GL_ERRORS.get(error, f"Unknown OpenGL error code: 0x{error}")


class Logger:
    """Writes messages to the console (optionally coloured) and to a log file."""

    def __init__(
        self,
        log_dir: str | os.PathLike = "logs",
        *,
        stream: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.level = LogLevel.INFO
        self.show_timestamps = True
        self.show_source_info = True
        self.use_colors = True
        self.file_name = ""
        self._base_path = ""
        self._stream = stream
        self._clock = clock
        self._file: Optional[TextIO] = None
        self._initialized = False

    @property
    def base_path(self) -> str:
        """Prefix stripped from source file paths; always ends with a separator."""
        return self._base_path

    @base_path.setter
    def base_path(self, path: str) -> None:
        self._base_path = normalize_base_path(path)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def log_path(self) -> Path:
        return self.log_dir / f"{self.file_name}.log"

    def init(self) -> None:
        """Open the log file; raises OSError if it cannot be opened."""
        if self._initialized:
            return
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.file_name = log_file_name(self._clock())
        try:
            self._file = open(self.log_path, "w", encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to open log file: {self.log_path}") from exc

        if not self._base_path:
            try:
                self.base_path = os.getcwd()
            except OSError as exc:
                print(f"Warning: Could not determine current path: {exc}", file=sys.stderr)

        self._initialized = True
        self.info(f"Logger initialized: {self.file_name}")

    def close(self) -> None:
        """Close the log file if it is open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _log(self, level: LogLevel, message: str, file: Optional[str], line: int) -> None:
        if self.level > level:
            return
        if not self._initialized:
            try:
                self.init()
            except OSError as exc:
                print(exc, file=sys.stderr)
                print("Logger not initialized!", file=sys.stderr)
                return

        console: list[str] = []
        written: list[str] = []

        if self.show_timestamps:
            stamp = timestamp(self._clock())
            console.append(f"{_GRAY}{stamp}{_RESET} " if self.use_colors else f"{stamp} ")
            written.append(f"{stamp} ")

        console.append(level_label(level, self.use_colors) + " ")
        written.append(level_label(level, False) + " ")

        if self.show_source_info and file is not None:
            source = f"({short_file_path(self._base_path, file)}:{line}) "
            console.append(f"{_GRAY}{source}{_RESET}" if self.use_colors else source)
            written.append(source)

        console.append(message)
        written.append(message)

        stream = self._stream if self._stream is not None else sys.stdout
        print("".join(console), file=stream)

        if self._file is not None:
            self._file.write("".join(written) + "\n")
            self._file.flush()

    def debug(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.DEBUG, message, file, line)

    def info(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.INFO, message, file, line)

    def warning(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.WARNING, message, file, line)

    def error(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.ERROR, message, file, line)

    def fatal(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.FATAL, message, file, line)

    def todo(self, message: str, file: Optional[str] = None, line: int = 0) -> None:
        self._log(LogLevel.TODO, message, file, line)


@functools.lru_cache(maxsize=None)
def get_instance() -> Logger:
    """Return the process-wide logger."""
    return Logger()