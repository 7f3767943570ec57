# 📄 File: appserver/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the server in a structured way,
# so every line can be traced back to the request that produced it.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger) or a plain text format,
# request correlation through context variables, and one-time root logger configuration.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: appserver.main (startup), appserver.api.middleware.logging (request context)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from appserver.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

SERVICE_NAME = "appserver"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """
    Attaches request id, service name and hostname to every record
    so both formatters can reference them.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        record.service = SERVICE_NAME
        record.hostname = self.hostname
        return True


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter with a stable key layout for log aggregation."""

    def __init__(self):
        super().__init__(
            JSON_FORMAT,
            rename_fields={"levelname": "level", "name": "logger", "asctime": "timestamp"},
            static_fields={"service": SERVICE_NAME},
        )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["request_id"] = getattr(record, "request_id", "-")
        log_record["module"] = record.module
        log_record["line"] = record.lineno


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Logging level name, defaults to LOG_LEVEL setting
        log_format: 'json' or 'text', defaults to LOG_FORMAT setting
        enable_console: Attach a stdout handler

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == "json":
        formatter: logging.Formatter = ServiceJsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(RequestContextFilter())
        root_logger.addHandler(console_handler)

    # SQL echo is controlled by DB_ECHO, keep the engine loggers quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_request_id() -> str:
    """Return the request id bound to the current context, if any."""
    return request_id_var.get("")


@contextmanager
def log_context(request_id: Optional[str] = None) -> Iterator[str]:
    """
    Context manager binding a request id to every log record emitted inside it.

    Args:
        request_id: Request identifier, generated when omitted

    Yields:
        The bound request id
    """
    if request_id is None:
        request_id = str(uuid4())

    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)
