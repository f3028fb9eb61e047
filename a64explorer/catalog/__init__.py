"""Instruction catalog: flat records, dedup/sort policy and exporters."""

from .builder import build_catalog, catalog_sort_key, format_listing_line
from .export import (
    CatalogFormat,
    render_catalog,
    render_js,
    render_json,
    render_jsonl,
    write_catalog,
)
from .records import InstructionRecord, html_file_name

__all__ = [
    "build_catalog",
    "catalog_sort_key",
    "format_listing_line",
    "CatalogFormat",
    "render_catalog",
    "render_js",
    "render_json",
    "render_jsonl",
    "write_catalog",
    "InstructionRecord",
    "html_file_name",
]
