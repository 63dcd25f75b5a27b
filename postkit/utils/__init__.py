"""
Shared utility functions.

This package contains utility code used across the loading, lint and
output stages.
"""

from .logging import JsonlFormatter, get_logger, log_event, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "JsonlFormatter",
]
