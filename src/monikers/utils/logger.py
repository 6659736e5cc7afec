"""Minimal logging utilities for monikers.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from monikers.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "monikers." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("scanner")
        >>> logger.name
        'monikers.scanner'
    """
    if not (name == "monikers" or name.startswith("monikers.")):
        name = f"monikers.{name}"
    return logging.getLogger(name)
