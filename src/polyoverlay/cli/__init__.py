"""Command-line interface for polyoverlay.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Overlay area of two geometries without building result rings
- Full overlay with linked result rings written as JSON
- Parallel batch evaluation with a progress bar
"""

from polyoverlay.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
