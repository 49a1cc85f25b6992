# Standard library imports
from collections.abc import MutableMapping
from functools import lru_cache
import logging
import sys
from typing import Any

# Third-party imports
from starlette.requests import Request

# Local application imports
from consulta.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ANSI colour per level, used only on an interactive console outside production
LEVEL_COLORS = {
    logging.DEBUG: "\x1b[38;20m",
    logging.INFO: "\x1b[38;20m",
    logging.WARNING: "\x1b[33;20m",
    logging.ERROR: "\x1b[31;20m",
    logging.CRITICAL: "\x1b[31;1m",
}
RESET = "\x1b[0m"


class ConsoleFormatter(logging.Formatter):
    def __init__(self, colored: bool) -> None:
        super().__init__(LOG_FORMAT)
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.colored:
            return message
        return f"{LEVEL_COLORS.get(record.levelno, '')}{message}{RESET}"


@lru_cache
def get_logger(name: str) -> logging.Logger:
    """
    Cached module logger writing to stdout.

    Level is DEBUG when `DEBUG_MODE` is on, INFO otherwise. Records at
    WARNING and above also reach Sentry once `init_sentry` has run.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.DEBUG if settings.DEBUG_MODE else logging.INFO
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    colored = settings.ENVIRONMENT != "production" and sys.stdout.isatty()
    handler.setFormatter(ConsoleFormatter(colored))
    logger.addHandler(handler)
    return logger


class ContextAdapter(logging.LoggerAdapter[logging.Logger]):
    """Appends `key=value` pairs to each message, skipping unset values."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        context = " ".join(f"{key}={value}" for key, value in (self.extra or {}).items() if value is not None)
        if context:
            msg = f"{msg} [{context}]"
        return msg, kwargs


def get_contextual_logger(name: str, **context: Any) -> ContextAdapter:
    return ContextAdapter(get_logger(name), context)


def get_request_logger(name: str, request: Request | None, **context: Any) -> ContextAdapter:
    """Contextual logger carrying the request id set by RequestIDMiddleware."""
    request_id = getattr(request.state, "request_id", None) if request is not None else None
    return get_contextual_logger(name, request_id=request_id, **context)
