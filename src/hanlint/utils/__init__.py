"""Utility modules for hanlint.

Provides:
- logger: get_logger for logging
"""

from hanlint.utils.logger import get_logger

__all__ = [
    "get_logger",
]
