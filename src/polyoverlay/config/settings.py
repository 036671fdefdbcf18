"""Configuration settings for polyoverlay."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class OverlayOp(str, Enum):
    """Boolean overlay operation."""

    INTERSECTION = "intersection"
    UNION = "union"
    DIFFERENCE = "difference"
    SYM_DIFFERENCE = "symdifference"


class OverlayConfig(BaseModel):
    """Configuration for overlay computation."""

    operation: OverlayOp = Field(
        default=OverlayOp.INTERSECTION,
        description="Boolean operation applied to the two inputs",
    )
    verify_area: bool = Field(
        default=False,
        description="Cross-check the direct area against the area of the linked result rings",
    )
    area_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        le=1.0,
        description="Relative tolerance used when cross-checking areas",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class OverlaySettings(BaseModel):
    """Main application settings."""

    overlay: OverlayConfig = Field(default_factory=OverlayConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> OverlaySettings:
    """Get default application settings."""
    return OverlaySettings()
