"""
Unified logging
Structured JSON log lines for every module
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .exceptions import BaymaxxException

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'exc_info', 'exc_text', 'stack_info', 'taskName',
])


class StructuredFormatter(logging.Formatter):
    """Structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None
            }

            if isinstance(record.exc_info[1], BaymaxxException):
                log_entry["exception"]["error_code"] = record.exc_info[1].error_code
                log_entry["exception"]["details"] = record.exc_info[1].details

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class BaymaxxLogger:
    """Logger registry"""

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def configure(cls, log_level: str = "INFO"):
        """Attach the structured handler to the package root logger once"""
        if cls._configured:
            return

        root_logger = logging.getLogger("baymaxx")
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(console_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if name not in cls._loggers:
            logger_name = name if name.startswith("baymaxx") else f"baymaxx.{name}"
            cls._loggers[name] = logging.getLogger(logger_name)

        return cls._loggers[name]


def get_logger(name: str) -> logging.Logger:
    return BaymaxxLogger.get_logger(name)


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None):
    """Error log with traceback"""
    extra_info = {"event_type": "error"}
    if context:
        extra_info.update(context)

    logger.error(f"Error occurred: {str(error)}", exc_info=True, extra=extra_info)


def log_degraded(logger: logging.Logger, source: str, error: BaseException | str,
                 user_id: Optional[str] = None, **kwargs):
    """A single input signal failed and was replaced by its default"""
    extra_info = {
        "event_type": "degraded_signal",
        "source": source,
        "reason": str(error) or error.__class__.__name__,
    }
    if user_id:
        extra_info["user_id"] = user_id
    extra_info.update(kwargs)

    logger.warning(f"Degraded signal: {source}", extra=extra_info)


def log_business_event(logger: logging.Logger, event: str, user_id: Optional[str] = None,
                       **kwargs):
    """Business event log"""
    extra_info = {
        "event_type": "business_event",
        "business_event": event
    }
    if user_id:
        extra_info["user_id"] = user_id
    extra_info.update(kwargs)

    logger.info(f"Business event: {event}", extra=extra_info)
