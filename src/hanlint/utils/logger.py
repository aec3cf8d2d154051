"""Minimal logging utilities for hanlint.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from hanlint.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("Ignored case never matched")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "hanlint." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("ignored")
        >>> logger.name
        'hanlint.ignored'
    """
    # Ensure hanlint prefix for consistent namespacing
    if not (name == "hanlint" or name.startswith("hanlint.")):
        name = f"hanlint.{name}"
    return logging.getLogger(name)
