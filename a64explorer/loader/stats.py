"""Counters collected while walking the document hierarchy."""

from dataclasses import dataclass, asdict, field

from ..core.models import StopLevel


@dataclass
class LoadStats:
    """Per-traversal bookkeeping, reset at the start of each public call.

    ``constructed`` counts node objects built per level; a level below the
    stop level stays at zero. ``evicted`` counts nodes removed from their
    parent's child list, either after a visitor ran (streaming) or because
    an encoding had no mnemonic.
    """

    constructed: dict[StopLevel, int] = field(
        default_factory=lambda: {level: 0 for level in StopLevel}
    )
    documents_read: int = 0
    dropped_encodings: int = 0
    visited: int = 0
    evicted: int = 0
    stopped: bool = False

    def record_construct(self, level: StopLevel) -> None:
        self.constructed[level] += 1

    def snapshot(self) -> dict:
        """Return a plain dict copy (level keys as strings)."""
        data = asdict(self)
        data["constructed"] = {
            level.value: count for level, count in self.constructed.items()
        }
        return data
