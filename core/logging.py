"""
Logging for the storefront core.

The root logger gets a stdout handler at import unless the host already
configured one. Level comes from ``LOG_LEVEL`` (default INFO).

    from core.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)

    # RedisStorage goes through httpx; one INFO line per REST call otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape(value: object) -> str:
    # Control characters in ids or selectors could forge log lines
    return str(value).replace("\n", "\\n").replace("\r", "\\r").replace("\x00", "")


def sanitize_id_for_logging(id_value: object | None) -> str:
    """Product id for logs: escaped, at most 8 characters, ``N/A`` when missing."""
    if id_value is None or id_value == "":
        return "N/A"
    return _escape(id_value)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Selector or path for logs, escaped and cut to ``max_length`` with an ellipsis."""
    if not value:
        return "N/A"
    safe_value = _escape(value)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
