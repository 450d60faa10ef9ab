"""
Centralized logging configuration for foodcart.

Usage:
    from foodcart.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart persisted")
    logger.error("Failed to persist cart", exc_info=True)

FOODCART_LOG_LEVEL (or LOG_LEVEL) sets the level. FOODCART_ENV=production
drops timestamps, since the hosting platform adds its own.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Upstash REST transport and tenacity log every request and retry
NOISY_LOGGERS = ("upstash_redis", "aiohttp", "httpx", "httpcore", "tenacity")

_HANDLER_NAME = "foodcart"


def _get_log_level(level: str | None = None) -> int:
    level_name = level or os.environ.get("FOODCART_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    return getattr(logging, level_name.upper(), logging.INFO)


def configure_logging(level: str | None = None, force: bool = False) -> None:
    """
    Attach the foodcart stdout handler to the root logger.

    Does nothing if the root logger already has handlers (the host
    application configured logging), unless force is set. Forcing replaces
    only the foodcart handler.
    """
    root = logging.getLogger()
    ours = [h for h in root.handlers if h.get_name() == _HANDLER_NAME]

    if root.handlers and not (force or ours):
        return
    for handler in ours:
        root.removeHandler(handler)

    log_level = _get_log_level(level)
    root.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(log_level)
    is_production = os.environ.get("FOODCART_ENV") == "production"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Sanitize an identifier for logging.

    Escapes injection characters and truncates to the first 8 chars.

    Args:
        id_value: ID value to sanitize (can be None)

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:8] if len(safe_value) > 8 else safe_value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Sanitize free text (store names, addresses, queries) for logging.

    Args:
        value: String value to sanitize (can be None)
        max_length: Maximum length to keep (default: 50)

    Returns:
        Sanitized string or "N/A" if empty
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "NOISY_LOGGERS",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
