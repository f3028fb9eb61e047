"""Instruction-set identifiers and traversal levels."""

from dataclasses import dataclass
from enum import Enum


class InstrSetId(str, Enum):
    """Top-level A64 instruction set. Declaration order is the canonical order."""

    BASE = "base"
    SIMDFP = "simdfp"
    SVE = "sve"
    SME = "sme"


@dataclass(frozen=True)
class InstrSetInfo:
    """Display name and index document of one instruction set."""

    name: str
    file: str


INSTR_SET_DATA: dict[InstrSetId, InstrSetInfo] = {
    InstrSetId.BASE: InstrSetInfo(name="Base", file="index.xml"),
    InstrSetId.SIMDFP: InstrSetInfo(name="SIMD&FP", file="fpsimdindex.xml"),
    InstrSetId.SVE: InstrSetInfo(name="SVE", file="sveindex.xml"),
    InstrSetId.SME: InstrSetInfo(name="SME", file="mortlachindex.xml"),
}

INSTR_SET_IDS: tuple[InstrSetId, ...] = tuple(InstrSetId)

# Position of each set in catalog sort order
INSTR_SET_ORDER: dict[InstrSetId, int] = {
    set_id: index for index, set_id in enumerate(INSTR_SET_IDS)
}


class StopLevel(str, Enum):
    """Depth at which a traversal stops descending and hands nodes out."""

    SET = "set"
    SECTION = "section"
    CLASS = "class"
    ENCODING = "encoding"

    @property
    def depth(self) -> int:
        return _LEVEL_DEPTH[self]


_LEVEL_DEPTH = {
    StopLevel.SET: 0,
    StopLevel.SECTION: 1,
    StopLevel.CLASS: 2,
    StopLevel.ENCODING: 3,
}
