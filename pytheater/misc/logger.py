"""
Centralized logging utility for pytheater.

Every component (regions, selector, asset manager, inventories) logs through
a TheaterLogger so output shares one format:

    [pytheater] [Region] Warning: template 'x' not for map 'y' - ignoring

INFO and DEBUG lines only appear when the logger is verbose. Warnings and
errors are always written to stderr.
"""

import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


_LEVEL_PREFIX = {
    LogLevel.DEBUG: "DEBUG:",
    LogLevel.INFO: "",
    LogLevel.WARNING: "Warning:",
    LogLevel.ERROR: "ERROR:",
}


class TheaterLogger:
    """
    Component logger for pytheater.

    Usage:
        logger = TheaterLogger(verbose=True, name="Region")
        logger.info("'Kutaisi' loaded")
        logger.warning("template not for this map, ignoring")
    """

    def __init__(self, verbose: bool = True, name: Optional[str] = None, min_level: LogLevel = LogLevel.INFO):
        """
        Args:
            verbose: If False, suppresses INFO and DEBUG messages
            name: Component name included in each line (e.g. "Region", "Inventory")
            min_level: Lowest level printed while verbose
        """
        self.verbose = verbose
        self.name = name
        self.min_level = min_level

    def _format_message(self, level: LogLevel, message: str) -> str:
        parts = ["[pytheater]"]
        if self.name:
            parts.append(f"[{self.name}]")
        if _LEVEL_PREFIX[level]:
            parts.append(_LEVEL_PREFIX[level])
        parts.append(message)
        return " ".join(parts)

    def _should_log(self, level: LogLevel) -> bool:
        if level in (LogLevel.WARNING, LogLevel.ERROR):
            return True
        if not self.verbose:
            return False
        return level.value >= self.min_level.value

    def _emit(self, level: LogLevel, message: str):
        if not self._should_log(level):
            return
        stream = sys.stderr if level in (LogLevel.WARNING, LogLevel.ERROR) else sys.stdout
        print(self._format_message(level, message), file=stream)

    def debug(self, message: str):
        """Log debug message (only if verbose and min_level allows it)."""
        self._emit(LogLevel.DEBUG, message)

    def info(self, message: str):
        """Log info message (only if verbose)."""
        self._emit(LogLevel.INFO, message)

    def warning(self, message: str):
        """Log warning message (always shown)."""
        self._emit(LogLevel.WARNING, message)

    def error(self, message: str):
        """Log error message (always shown)."""
        self._emit(LogLevel.ERROR, message)

    def log(self, message: str, level: LogLevel = LogLevel.INFO):
        self._emit(level, message)


def create_logger(verbose: bool = True, name: Optional[str] = None, debug: bool = False) -> TheaterLogger:
    """
    Factory function to create a logger instance.

    Args:
        verbose: If False, suppresses INFO and DEBUG messages
        name: Component name (e.g., "Region", "Selector")
        debug: Also print DEBUG lines when verbose

    Returns:
        Configured TheaterLogger instance
    """
    min_level = LogLevel.DEBUG if debug else LogLevel.INFO
    return TheaterLogger(verbose=verbose, name=name, min_level=min_level)
