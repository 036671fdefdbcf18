"""Configuration management for polyoverlay.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- OverlayConfig: Overlay operation and area verification settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- OverlaySettings: Main application settings
"""

from polyoverlay.config.settings import (
    LoggingConfig,
    OverlayConfig,
    OverlayOp,
    OverlaySettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "OverlayConfig",
    "OverlayOp",
    "OverlaySettings",
    "ProcessingConfig",
    "get_default_settings",
]
