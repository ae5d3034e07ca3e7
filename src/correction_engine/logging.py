"""Structured logging for the correction engine.

Console output goes through rich; an optional log file receives every
record as plain text or JSON lines. Context attached with ``extra=``,
``EngineLogger.with_context`` or ``LogContext`` is rendered after the
message as ``[key=value ...]``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "correction_engine"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class LogLevel(IntEnum):
    """Log verbosity levels."""

    QUIET = 0  # Only errors
    NORMAL = 1  # Errors + warnings
    VERBOSE = 2  # + info (learned corrections, maintenance sweeps)
    DEBUG = 3  # Everything


_LEVEL_MAP = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.WARNING,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


@dataclass
class LogConfig:
    """Configuration for logging.

    Attributes:
        level: Console verbosity
        log_file: Optional file that receives every record
        json_format: Write the log file as JSON lines
    """

    level: LogLevel = LogLevel.NORMAL
    log_file: Path | None = None
    json_format: bool = False


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """The non-standard attributes attached to a record."""
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class StructuredFormatter(logging.Formatter):
    """Formats records with their context.

    Args:
        json_format: Emit one JSON object per record
        header: Prefix text records with timestamp, level and logger name;
            the rich console handler draws its own and turns this off
    """

    def __init__(self, json_format: bool = False, header: bool = True):
        super().__init__()
        self.json_format = json_format
        self.header = header

    def format(self, record: logging.LogRecord) -> str:
        if self.json_format:
            return self._format_json(record)
        return self._format_text(record)

    def _format_json(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {}
        for key, value in record_context(record).items():
            try:
                json.dumps(value)
                context[key] = value
            except (TypeError, ValueError):
                context[key] = str(value)
        if context:
            data["context"] = context

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False)

    def _format_text(self, record: logging.LogRecord) -> str:
        result = record.getMessage()
        if self.header:
            timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
            result = f"{timestamp} | {record.levelname:<7} | {record.name} | {result}"

        context = record_context(record)
        if context:
            result += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class EngineLogger(logging.Logger):
    """Logger that carries bound context into every record."""

    def __init__(self, name: str, level: int = logging.NOTSET):
        super().__init__(name, level)
        self._context: dict[str, Any] = {}

    def with_context(self, **context: Any) -> "EngineLogger":
        """Return a logger that adds ``context`` to each record it emits."""
        bound = EngineLogger(self.name, self.level)
        bound.parent = self.parent
        bound.handlers = self.handlers
        bound._context = {**self._context, **context}
        return bound

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra={**self._context, **(extra or {})},
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


_config = LogConfig()
_initialized = False


def configure_logging(config: LogConfig | None = None) -> None:
    """(Re)build the handlers of the engine's root logger.

    Args:
        config: Logging configuration (keeps the current one when omitted)
    """
    global _config, _initialized

    if config:
        _config = config

    logging.setLoggerClass(EngineLogger)
    console_level = _LEVEL_MAP[_config.level]

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(console_level)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    console_handler.setLevel(console_level)
    console_handler.setFormatter(StructuredFormatter(header=False))
    root_logger.addHandler(console_handler)

    if _config.log_file:
        _config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(_config.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(json_format=_config.json_format))
        root_logger.addHandler(file_handler)
        # The file gets everything regardless of console verbosity
        root_logger.setLevel(logging.DEBUG)

    _initialized = True


def get_logger(name: str) -> EngineLogger:
    """Get a logger for the given name (usually ``__name__``)."""
    if not _initialized:
        configure_logging()

    logger = logging.getLogger(name)
    if not isinstance(logger, EngineLogger):
        # Created before our logger class was installed
        wrapped = EngineLogger(name)
        wrapped.parent = logger.parent
        wrapped.handlers = logger.handlers
        wrapped.level = logger.level
        return wrapped

    return logger


def set_verbosity(level: LogLevel) -> None:
    _config.level = level
    configure_logging(_config)


def enable_file_logging(log_file: Path, json_format: bool = False) -> None:
    _config.log_file = log_file
    _config.json_format = json_format
    configure_logging(_config)


class LogContext:
    """Attach context to every record created inside a ``with`` block.

    Example:
        with LogContext(language="tr"):
            engine.process_transcript(raw)
    """

    def __init__(self, **context: Any):
        self.context = context
        self._old_factory = None

    def __enter__(self) -> "LogContext":
        self._old_factory = logging.getLogRecordFactory()
        old_factory = self._old_factory
        context = self.context

        def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            for key, value in context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> None:
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)


def log_operation_start(logger: logging.Logger, operation: str, **context: Any) -> None:
    logger.info(f"Starting: {operation}", extra=context)


def log_operation_complete(logger: logging.Logger, operation: str, **context: Any) -> None:
    logger.info(f"Completed: {operation}", extra=context)


def log_operation_failed(
    logger: logging.Logger,
    operation: str,
    error: Exception,
    **context: Any,
) -> None:
    """Log a failed operation with the error's type and message."""
    context["error_type"] = type(error).__name__
    context["error_message"] = str(error)
    logger.error(f"Failed: {operation}", extra=context)
