"""
Logging for watson-speech.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications call ``setup_logging()`` once
to get either coloured console lines or JSON records, optionally mirrored
to ``<app>.log`` / ``<app>.error.log`` files.

Every service request runs with its ID in ``request_id_var``; both
formatters add it to the records emitted during that request.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

APP_NAME = "watson-speech"
PACKAGE_LOGGER = "watson_speech"

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            entry["extra"] = extra_data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    ``time | LEVEL | logger [request=...] | message``

    Levels are coloured when stdout is a terminal.
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def _level(self, levelname: str) -> str:
        padded = f"{levelname:8s}"
        if not self.use_colors:
            return padded
        return f"{self.COLORS.get(levelname, '')}{padded}{self.RESET}"

    def format(self, record: logging.LogRecord) -> str:
        source = record.name
        request_id = request_id_var.get()
        if request_id:
            source = f"{source} [request={request_id}]"

        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        time_str = datetime.now(timezone.utc).strftime('%H:%M:%S.%f')[:-3]
        return f"{time_str} | {self._level(record.levelname)} | {source} | {message}"


class PerformanceLogger:
    """
    Records how long Watson calls take.

    Calls slower than ``target_ms`` are logged at WARNING, the rest at
    DEBUG. The numbers travel in ``extra_data`` so JsonFormatter keeps
    them as fields.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_latency(
        self,
        operation: str,
        latency_ms: float,
        target_ms: Optional[float] = None,
        **extra: Any
    ) -> None:
        data = {"operation": operation, "latency_ms": round(latency_ms, 2), **extra}
        slow = target_ms is not None and latency_ms > target_ms
        if target_ms is not None:
            data["target_ms"] = target_ms

        if slow:
            self.logger.warning(
                f"{operation} took {latency_ms:.2f}ms, over the {target_ms}ms target",
                extra={"extra_data": data}
            )
        else:
            self.logger.debug(f"{operation} took {latency_ms:.2f}ms", extra={"extra_data": data})


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def _build_handlers(level: int, log_directory: Optional[str], json_format: bool, app_name: str) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(JsonFormatter() if json_format else ConsoleFormatter())
    handlers: List[logging.Handler] = [console]

    if log_directory:
        directory = Path(log_directory)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(directory / f"{app_name}.log", logging.DEBUG))
        handlers.append(_file_handler(directory / f"{app_name}.error.log", logging.ERROR))

    return handlers


def setup_logging(
    log_level: str = "INFO",
    log_directory: Optional[str] = None,
    json_format: bool = False,
    app_name: str = APP_NAME
) -> logging.Logger:
    """
    Configure the application logger and the ``watson_speech`` logger.

    Both loggers get the same handlers and stop propagating to the root
    logger, so calling this twice does not duplicate output.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_directory: Also write JSON log files here
        json_format: JSON instead of coloured console lines
        app_name: Name of the application logger and log files

    Returns:
        The application logger
    """
    level = getattr(logging, log_level.upper())
    handlers = _build_handlers(level, log_directory, json_format, app_name)

    app_logger = logging.getLogger(app_name)
    for target in (app_logger, logging.getLogger(PACKAGE_LOGGER)):
        target.setLevel(level)
        target.handlers = list(handlers)
        target.propagate = False

    return app_logger
