"""Node types for the instruction document hierarchy.

- levels.py: InstrSetId, StopLevel and the per-set index data
- nodes.py: ArchVariant and the Set → Section → Class → Encoding nodes
"""

from .levels import (
    INSTR_SET_DATA,
    INSTR_SET_IDS,
    INSTR_SET_ORDER,
    InstrSetId,
    InstrSetInfo,
    StopLevel,
)
from .nodes import (
    ArchVariant,
    InstructionClass,
    InstructionEncoding,
    InstructionSection,
    InstructionSet,
)

__all__ = [
    "INSTR_SET_DATA",
    "INSTR_SET_IDS",
    "INSTR_SET_ORDER",
    "InstrSetId",
    "InstrSetInfo",
    "StopLevel",
    "ArchVariant",
    "InstructionClass",
    "InstructionEncoding",
    "InstructionSection",
    "InstructionSet",
]
