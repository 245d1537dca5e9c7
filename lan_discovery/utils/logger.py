"""
Colored console logging for LAN discovery sessions.

This module provides a Logger class with colorama-colored levels and simple
table helpers. Because the interactive screen owns the terminal while a
session runs, the logger can hold its output and flush it once the screen
has been torn down.
"""

import sys
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, TextIO, Tuple

from colorama import Fore, Style, init

init(autoreset=True)


class LogLevel(Enum):
    """Log levels, least to most severe."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
}

# Label printed for each level and the color it is printed in
_LEVEL_STYLE = {
    LogLevel.DEBUG: (Fore.CYAN, "DEBUG"),
    LogLevel.INFO: (Fore.GREEN, "INFO"),
    LogLevel.WARNING: (Fore.YELLOW, "WARN"),
    LogLevel.ERROR: (Fore.RED, "ERROR"),
}


def _details(context: Dict) -> str:
    if not context:
        return ""
    pairs = " | ".join(f"{key}={value}" for key, value in context.items())
    return f" {Style.DIM}({pairs}){Style.RESET_ALL}"


class Logger:
    """
    Logger class with colored console output.

    Messages are written immediately unless output is on hold, in which
    case they are kept in order and written by ``release_output()``.
    """

    def __init__(self, name: str = "LanDiscovery", min_level: LogLevel = LogLevel.INFO):
        """
        Args:
            name: Name of the logger
            min_level: Least severe level this logger prints
        """
        self.name = name
        self.min_level = min_level

    def enabled_for(self, level: LogLevel) -> bool:
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[_effective_level(self)]

    def _emit(self, line: str, is_error: bool = False) -> None:
        if _held is not None:
            _held.append((line, is_error))
        else:
            _write(line, is_error)

    def _line(self, label: str, message: str, context: Dict) -> str:
        stamp = datetime.now().strftime("%H:%M:%S")
        return f"{Style.DIM}[{stamp}]{Style.RESET_ALL} {label}{Style.RESET_ALL} {message}{_details(context)}"

    def _log(self, level: LogLevel, message: str, **context) -> None:
        if not self.enabled_for(level):
            return
        color, label = _LEVEL_STYLE[level]
        self._emit(self._line(f"{color}{label:<7}", message, context),
                   is_error=level is LogLevel.ERROR)

    def debug(self, message: str, **context) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(self, message: str, exception: Optional[BaseException] = None, **context) -> None:
        """
        Log an error, written to stderr.

        Args:
            message: What went wrong
            exception: Exception whose type and text are appended to the context
        """
        if exception is not None:
            context["exception"] = f"{type(exception).__name__}: {exception}"
        self._log(LogLevel.ERROR, message, **context)

    def success(self, message: str, **context) -> None:
        """Log at INFO level with the success label."""
        if self.enabled_for(LogLevel.INFO):
            self._emit(self._line(f"{Fore.GREEN}{Style.BRIGHT}{'OK':<7}",
                                  f"{Style.BRIGHT}{message}{Style.RESET_ALL}", context))

    def section(self, title: str) -> None:
        if not self.enabled_for(LogLevel.INFO):
            return
        rule = "=" * 60
        self._emit(f"\n{Fore.BLUE}{Style.BRIGHT}{rule}")
        self._emit(f"  {title.upper()}")
        self._emit(f"{rule}{Style.RESET_ALL}\n")

    def table_header(self, headers: List[str], widths: List[int]) -> None:
        """Print column titles padded to ``widths`` and a rule below them."""
        if not self.enabled_for(LogLevel.INFO):
            return
        self._emit(f"{Style.BRIGHT}{_cells(headers, widths)}{Style.RESET_ALL}")
        self._emit(f"{Style.DIM}{'-+-'.join('-' * width for width in widths)}{Style.RESET_ALL}")

    def table_row(self, values: List, widths: List[int]) -> None:
        if self.enabled_for(LogLevel.INFO):
            self._emit(_cells(values, widths))


def _cells(values: List, widths: List[int]) -> str:
    return " | ".join(f"{str(value):<{width}}" for value, width in zip(values, widths))


# Global logger instance
logger = Logger()

# Lines waiting for release_output(), shared by every Logger instance
_held: Optional[List[Tuple[str, bool]]] = None


def _write(line: str, is_error: bool) -> None:
    stream: TextIO = sys.stderr if is_error else sys.stdout
    print(line, file=stream)


def hold_output() -> None:
    """Buffer all logger output until release_output() is called."""
    global _held
    if _held is None:
        _held = []


def release_output() -> None:
    """Stop buffering and write every held line in order."""
    global _held
    held, _held = _held, None
    for line, is_error in held or []:
        _write(line, is_error)


def output_on_hold() -> bool:
    return _held is not None


def _effective_level(instance: Logger) -> LogLevel:
    # Named loggers follow the global level when it is more verbose.
    if _LEVEL_ORDER[logger.min_level] < _LEVEL_ORDER[instance.min_level]:
        return logger.min_level
    return instance.min_level


def set_log_level(level: LogLevel) -> None:
    """Set the level of the global logger, which every named logger follows."""
    logger.min_level = level


def get_logger(name: str = "LanDiscovery") -> Logger:
    return Logger(name)
