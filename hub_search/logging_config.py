"""Logging setup with per-request correlation ids."""

import logging
import re
import sys
import uuid
from contextvars import ContextVar, Token
from typing import TextIO

from hub_search.config import get_settings

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(request_id)s | "
    "%(name)s:%(funcName)s:%(lineno)d | %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries capped at WARNING
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def resolve_request_id(candidate: str | None) -> str:
    """Reuse a caller's request id when it is safe to log, else mint one.

    Args:
        candidate: Value of the incoming request-id header, if any

    Returns:
        The stripped candidate, or a fresh UUID4 string
    """
    if candidate and _REQUEST_ID_PATTERN.match(candidate.strip()):
        return candidate.strip()
    return str(uuid.uuid4())


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Tint a copy so other handlers see the plain level name
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def build_formatter(stream: TextIO) -> logging.Formatter:
    """Colored output for terminals, plain text for pipes and files."""
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> logging.Handler:
    """Route all application logs through one request-aware handler.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
        stream: Output stream; defaults to stdout

    Returns:
        The installed handler
    """
    level = (level or get_settings().log_level).upper()
    stream = stream or sys.stdout

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(build_formatter(stream))
    handler.addFilter(RequestIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured with level: {level}")
    return handler


def get_logger(name: str) -> logging.Logger:
    """Module logger; records pick up the request id from the root handler."""
    return logging.getLogger(name)


def set_request_id(request_id: str) -> Token:
    """Bind a request id to the current context."""
    return request_id_var.set(request_id)


def clear_request_id(token: Token | None = None) -> None:
    """Restore the previous request id, or unset it when no token is given."""
    if token is not None:
        request_id_var.reset(token)
    else:
        request_id_var.set(None)
