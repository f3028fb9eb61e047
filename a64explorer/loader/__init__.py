"""Hierarchy loader: walks index and section documents into node trees."""

from .engine import XMLLoader, Visitor
from .errors import (
    DocumentNotFoundError,
    DocumentParseError,
    LoaderError,
    StopTraversal,
)
from .stats import LoadStats

__all__ = [
    "XMLLoader",
    "Visitor",
    "DocumentNotFoundError",
    "DocumentParseError",
    "LoaderError",
    "StopTraversal",
    "LoadStats",
]
