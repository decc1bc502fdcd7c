"""
Logging setup for the storefront.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.debug("Cart persisted (%d lines)", len(cart.items))
    logger.warning("Cart snapshot unreadable", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Chatty client libraries pulled in by supabase / upstash-redis
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "gotrue")


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach a stdout handler to the root logger unless one exists."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    is_production = os.environ.get("STOREFRONT_ENV", "").lower() == "production"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)


def _escape_control_chars(value: str) -> str:
    # Keeps user-supplied ids from forging extra log lines (CWE-117)
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None, max_length: int = 12) -> str:
    """
    Make a product or session id safe to put in a log line.

    Control characters are escaped and the value is truncated, since ids
    arrive straight from request bodies and cookies.

    Args:
        id_value: Raw id (may be None)
        max_length: Characters to keep

    Returns:
        Escaped, truncated id or "N/A"
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_control_chars(str(id_value))
    return safe_value[:max_length]


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_id_for_logging",
]
