"""Utility modules for strata.

Provides:
- logger: get_logger for logging
"""

from strata.utils.logger import get_logger

__all__ = [
    "get_logger",
]
