"""A64 Instruction Explorer.

Walks the A64 ISA XML release (index documents per instruction set plus one
document per instruction section) and flattens it into instruction records
suitable for a search page or a plain listing.
"""

__version__ = "0.1.0"

from .core.models import (
    ArchVariant,
    InstrSetId,
    InstructionClass,
    InstructionEncoding,
    InstructionSection,
    InstructionSet,
    StopLevel,
)
from .core.features import resolve_features
from .loader import (
    DocumentNotFoundError,
    DocumentParseError,
    LoaderError,
    LoadStats,
    StopTraversal,
    XMLLoader,
)

__all__ = [
    "__version__",
    "ArchVariant",
    "InstrSetId",
    "InstructionClass",
    "InstructionEncoding",
    "InstructionSection",
    "InstructionSet",
    "StopLevel",
    "resolve_features",
    "DocumentNotFoundError",
    "DocumentParseError",
    "LoaderError",
    "LoadStats",
    "StopTraversal",
    "XMLLoader",
]
