"""Minimal logging utilities for strata.

Provides a simple get_logger function that wraps the standard library logging.
strata never installs handlers; applications decide where records go.

Example:
    >>> from strata.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("compiled grammar")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "strata." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'strata.mymodule'
    """
    # Ensure strata prefix for consistent namespacing
    if not (name == "strata" or name.startswith("strata.")):
        name = f"strata.{name}"
    return logging.getLogger(name)
