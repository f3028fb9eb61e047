"""CLI commands for the A64 instruction explorer."""

from . import (
    config_cmd,
    export,
    inspect,
    listing,
)

__all__ = [
    "config_cmd",
    "export",
    "inspect",
    "listing",
]
