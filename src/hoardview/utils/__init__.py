"""Utility functions for hoardview.

This module provides:

- Logging setup and configuration
- Reveal progress and statistics logging
"""

from hoardview.utils.logging import (
    RevealLogger,
    RevealStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "RevealLogger",
    "RevealStats",
    "configure_logging",
    "get_logger",
]
