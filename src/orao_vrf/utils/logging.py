"""
Structured logging helpers for the ORAO VRF SDK.

All SDK loggers live under the ``orao_vrf`` namespace. The SDK installs a
NullHandler only; applications opt in with ``configure_logging()`` or their
own logging configuration. Context is passed through ``extra={...}``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "orao_vrf"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the SDK namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger named ``orao_vrf.<...>``
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the SDK root logger.

    Calling it twice does not add a second handler.

    Args:
        level: Log level (name or number)
        fmt: Optional format string

    Returns:
        The SDK root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
    set_level(level)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Set the level of the SDK root logger."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def short_hex(value: str, keep: int = 10) -> str:
    """Truncate a hex string for log lines."""
    if len(value) <= keep:
        return value
    return value[:keep] + "..."
