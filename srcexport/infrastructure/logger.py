#!/usr/bin/env python3
"""Structured logging and export event reporting for SrcExport.

This module provides:
- Log levels matching Python's logging module
- Messages carrying key=value context
- Console and rotating file handlers
- Export event categories (include, exclude, copy, verify, ...)

The export pipeline receives a Logger instance explicitly and only ever
writes to it; nothing read back from the logger influences an export.

Example:
    >>> logger = Logger(level=LogLevel.INFO)
    >>> logger.info("Starting export", source="/src")
    >>> logger.event(LogCategory.COPY, "/src/app/Program.cs")
"""

import logging
import logging.handlers
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from srcexport.core.constants import Limits

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40


class LogCategory(Enum):
    """Discrete events reported during an export run."""

    CONFIGURATION = "Configuration"
    CREATE_DIRECTORY = "CreateDirectory"
    INCLUDE = "Include"
    EXCLUDE = "Exclude"
    COPY = "Copy"
    VERIFY = "Verify"
    SUMMARY = "Summary"
    ERROR = "Error"


# Per-entry decisions only show up with --debug
CATEGORY_LEVELS: Dict[LogCategory, LogLevel] = {
    LogCategory.CONFIGURATION: LogLevel.INFO,
    LogCategory.CREATE_DIRECTORY: LogLevel.INFO,
    LogCategory.INCLUDE: LogLevel.DEBUG,
    LogCategory.EXCLUDE: LogLevel.DEBUG,
    LogCategory.COPY: LogLevel.INFO,
    LogCategory.VERIFY: LogLevel.DEBUG,
    LogCategory.SUMMARY: LogLevel.INFO,
    LogCategory.ERROR: LogLevel.WARNING,
}


class Logger:
    """Export run logger.

    Wraps a stdlib logger; every record carries its key=value context in
    ``record.context`` and, for export events, its ``record.category``.
    """

    def __init__(
        self,
        name: str = "srcexport",
        level: Union[LogLevel, str] = LogLevel.INFO,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output (LogLevel or name)
            handlers: Output handlers (a console handler when omitted)
        """
        self.name = name
        self.logger = logging.getLogger(name)

        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = Limits.LOG_MAX_BYTES,
        backup_count: int = Limits.LOG_BACKUP_COUNT,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def _log(
        self,
        level: LogLevel,
        msg: str,
        context: Dict[str, Any],
        exc_info: Optional[Exception] = None,
        **extra: Any,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if context:
            msg = f"{msg} | " + " ".join(f"{k}={v}" for k, v in context.items())
        self.logger.log(level, msg, exc_info=exc_info, extra={"context": context, **extra})

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)

    def exception(self, msg: str, exc: Exception, **context) -> None:
        """Log an error with its traceback.

        Args:
            msg: Log message
            exc: Exception to log
            **context: Additional context key-value pairs
        """
        context["exception_type"] = type(exc).__name__
        context["exception_message"] = str(exc)
        self._log(LogLevel.ERROR, msg, context, exc_info=exc)

    def event(self, category: LogCategory, value: Any, **context) -> None:
        """Report an export event as ``"<Category>: <value>"``.

        Args:
            category: Event category
            value: Event payload (usually a path)
            **context: Additional context key-value pairs
        """
        level = CATEGORY_LEVELS.get(category, LogLevel.INFO)
        self._log(level, f"{category.value}: {value}", context, category=category)
