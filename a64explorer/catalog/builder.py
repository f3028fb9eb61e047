"""Catalog assembly on top of the streaming loader.

The loader yields every encoding, duplicates included. Deduplication and
ordering are decided here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..core.models import (
    INSTR_SET_IDS,
    INSTR_SET_ORDER,
    InstrSetId,
    InstructionEncoding,
)
from ..loader import XMLLoader
from .records import InstructionRecord

logger = logging.getLogger(__name__)


def catalog_sort_key(record: InstructionRecord) -> tuple[str, int, str]:
    """Order by mnemonic, then canonical set order, then heading."""
    try:
        set_order = INSTR_SET_ORDER[InstrSetId(record.category)]
    except ValueError:
        set_order = len(INSTR_SET_ORDER)
    return (record.mnemonic, set_order, record.heading or "")


def build_catalog(
    xml_dir: Path | str,
    set_ids: Sequence[InstrSetId | str] = INSTR_SET_IDS,
    loader: XMLLoader | None = None,
) -> list[InstructionRecord]:
    """Flatten the release into sorted, deduplicated instruction records.

    Only the first encoding per (mnemonic, section file) pair is kept.
    Loader errors propagate; no partial catalog is returned.
    """
    loader = loader or XMLLoader()
    records: list[InstructionRecord] = []
    seen: set[tuple[str, str]] = set()
    duplicates = 0

    def add(encoding: InstructionEncoding) -> None:
        nonlocal duplicates
        key = (encoding.mnemonic, encoding.instr_section.section_file)
        if key in seen:
            duplicates += 1
            return
        seen.add(key)
        records.append(InstructionRecord.from_encoding(encoding))

    loader.for_each_in_sets(xml_dir, add, set_ids=set_ids)
    records.sort(key=catalog_sort_key)
    logger.info(
        "Catalog has %d instructions (%d duplicate encodings skipped)",
        len(records),
        duplicates,
    )
    return records


def format_listing_line(encoding: InstructionEncoding) -> str:
    """One plain-text line per encoding.

    Example:
        Base    - ADD <Wd|WSP>, <Wn|WSP>, #<imm>{, <shift>} ; [] 'ADD (immediate)' - `Add (immediate)` @ add_addsub_imm.xml
    """
    section = encoding.instr_section
    return "%-7s %s %s ; [%s] '%s' - `%s` @ %s" % (
        encoding.instr_set.name,
        "A" if encoding.alias_mnemonic else "-",
        encoding.asmtemplate,
        " ".join(encoding.features),
        section.heading or "",
        section.brief or "",
        section.section_file,
    )
