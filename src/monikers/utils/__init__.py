"""Utility modules for monikers.

Provides:
- logger: get_logger for logging
"""

from monikers.utils.logger import get_logger

__all__ = ["get_logger"]
