"""Serializers for the instruction catalog."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Sequence

from .records import InstructionRecord


class CatalogFormat(str, Enum):
    JS = "js"
    JSON = "json"
    JSONL = "jsonl"


def _dump(records: Sequence[InstructionRecord]) -> list[dict]:
    return [record.model_dump(mode="json") for record in records]


def render_js(records: Sequence[InstructionRecord]) -> str:
    """Script defining ``instrs`` for the search page."""
    payload = json.dumps(_dump(records), separators=(",", ":"), ensure_ascii=False)
    return f"const instrs = {payload};\n"


def render_json(records: Sequence[InstructionRecord]) -> str:
    return json.dumps(_dump(records), indent=2, ensure_ascii=False) + "\n"


def render_jsonl(records: Sequence[InstructionRecord]) -> str:
    return "".join(
        json.dumps(row, ensure_ascii=False) + "\n" for row in _dump(records)
    )


_RENDERERS = {
    CatalogFormat.JS: render_js,
    CatalogFormat.JSON: render_json,
    CatalogFormat.JSONL: render_jsonl,
}


def render_catalog(
    records: Sequence[InstructionRecord], fmt: CatalogFormat | str
) -> str:
    return _RENDERERS[CatalogFormat(fmt)](records)


def write_catalog(
    records: Sequence[InstructionRecord],
    path: Path | str,
    fmt: CatalogFormat | str = CatalogFormat.JS,
) -> Path:
    """Write the rendered catalog to ``path`` and return it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_catalog(records, fmt))
    return path
