"""CLI module for rasterkit.

Provides the command-line interface for transforming image files.
"""

from __future__ import annotations

from rasterkit.cli.main import app

__all__ = ["app"]
