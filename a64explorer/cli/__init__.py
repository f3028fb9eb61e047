"""Command-line interface for the A64 instruction explorer."""

from .app import app

__all__ = ["app"]
