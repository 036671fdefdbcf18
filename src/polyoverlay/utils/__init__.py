"""Utility functions for polyoverlay.

This module provides logging setup and run statistics tracking.
"""

from polyoverlay.utils.logging import (
    OverlayLogger,
    OverlayStats,
    configure_logging,
)

__all__ = [
    "OverlayLogger",
    "OverlayStats",
    "configure_logging",
]
