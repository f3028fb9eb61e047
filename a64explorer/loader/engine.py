"""Depth-first traversal of the instruction document hierarchy.

Walks index document → section documents → classes → encodings, building
one node per element down to a caller-chosen stop level.

Two ways to consume the result:

- collect_*: nothing is handed out; every node is kept and the root(s) of
  the tree are returned. Memory grows with the total node count.
- for_each_*: each node at the stop level is passed to a visitor, then
  removed from its parent's child list before the walk moves to the next
  sibling. Ancestors are removed the same way once their subtree is done,
  so only the currently open path is alive at any time.

Nodes below the stop level are never built. Encodings without a mnemonic
are built, removed again and never visited, in both modes.

Each public call carries its own stop level, visitor and counters, so a
visitor may call back into the same loader without disturbing the walk
that invoked it.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Sequence

from lxml import etree

from ..core.models import (
    INSTR_SET_DATA,
    INSTR_SET_IDS,
    InstrSetId,
    InstructionClass,
    InstructionEncoding,
    InstructionSection,
    InstructionSet,
    StopLevel,
)
from .errors import DocumentNotFoundError, DocumentParseError, StopTraversal
from .stats import LoadStats

logger = logging.getLogger(__name__)

Visitor = Callable[[Any], None]

# Selectors into the release's documents
INDEX_SECTION_FILES = "//iform/@iformfile"
SECTION_CLASSES = "classes/iclass"
CLASS_ENCODINGS = "encoding"


def _as_set_ids(set_ids: Iterable[InstrSetId | str]) -> list[InstrSetId]:
    """Validate identifiers up front so a typo fails before any file is read."""
    return [InstrSetId(set_id) for set_id in set_ids]


@dataclass
class _Traversal:
    """Mode and counters of one public call."""

    stop_at: StopLevel
    visitor: Visitor | None = None
    stats: LoadStats = field(default_factory=LoadStats)

    @property
    def streaming(self) -> bool:
        return self.visitor is not None


class XMLLoader:
    """Loads instruction sets and sections from an XML release directory.

    Usage:
        loader = XMLLoader()

        # Full tree
        sets = loader.collect_sets("xml")

        # Streaming, one call per encoding
        loader.for_each_in_sets("xml", lambda enc: print(enc.mnemonic))

        # Streaming at class level, encodings never built
        loader.for_each_in_set("xml", "sve", on_class, stop_at=StopLevel.CLASS)

    ``loader.stats`` describes the most recent call to finish, or the call in
    progress while a walk is running.
    """

    def __init__(self) -> None:
        self.stats = LoadStats()
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True)

    # ── Materializing ──

    def collect_section(
        self,
        xml_file: Path | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        instr_set: InstructionSet | None = None,
    ) -> InstructionSection:
        """Load one section document and return it with all descendants."""
        with self._traversal(stop_at) as run:
            return self._walk_section(run, Path(xml_file), instr_set)

    def collect_set(
        self,
        xml_dir: Path | str,
        set_id: InstrSetId | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
    ) -> InstructionSet:
        """Load one instruction set and every section its index references."""
        (set_id,) = _as_set_ids([set_id])
        with self._traversal(stop_at) as run:
            return self._walk_set(run, Path(xml_dir), set_id)

    def collect_sets(
        self,
        xml_dir: Path | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        set_ids: Sequence[InstrSetId | str] = INSTR_SET_IDS,
    ) -> list[InstructionSet]:
        """Load several instruction sets in the given order."""
        ids = _as_set_ids(set_ids)
        with self._traversal(stop_at) as run:
            instr_sets = [self._walk_set(run, Path(xml_dir), set_id) for set_id in ids]
        logger.info(
            "Loaded %d instruction sets (%d sections, %d encodings)",
            len(instr_sets),
            run.stats.constructed[StopLevel.SECTION],
            run.stats.constructed[StopLevel.ENCODING] - run.stats.dropped_encodings,
        )
        return instr_sets

    # ── Streaming ──

    def for_each_in_section(
        self,
        xml_file: Path | str,
        visitor: Visitor,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        instr_set: InstructionSet | None = None,
    ) -> None:
        """Visit every node at ``stop_at`` inside one section document."""
        with self._traversal(stop_at, visitor) as run:
            self._walk_section(run, Path(xml_file), instr_set)

    def for_each_in_set(
        self,
        xml_dir: Path | str,
        set_id: InstrSetId | str,
        visitor: Visitor,
        stop_at: StopLevel | str = StopLevel.ENCODING,
    ) -> None:
        """Visit every node at ``stop_at`` inside one instruction set."""
        (set_id,) = _as_set_ids([set_id])
        with self._traversal(stop_at, visitor) as run:
            self._walk_set(run, Path(xml_dir), set_id)

    def for_each_in_sets(
        self,
        xml_dir: Path | str,
        visitor: Visitor,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        set_ids: Sequence[InstrSetId | str] = INSTR_SET_IDS,
    ) -> None:
        """Visit every node at ``stop_at`` across several instruction sets."""
        ids = _as_set_ids(set_ids)
        with self._traversal(stop_at, visitor) as run:
            for set_id in ids:
                self._walk_set(run, Path(xml_dir), set_id)
        logger.info(
            "Visited %d nodes at %s level across %d instruction sets",
            run.stats.visited,
            run.stop_at.value,
            len(ids),
        )

    # ── Single entry points (visitor selects the mode) ──

    def load_section(
        self,
        xml_file: Path | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        instr_set: InstructionSet | None = None,
        visitor: Visitor | None = None,
    ) -> InstructionSection | None:
        if visitor is None:
            return self.collect_section(xml_file, stop_at, instr_set)
        self.for_each_in_section(xml_file, visitor, stop_at, instr_set)
        return None

    def load_set(
        self,
        xml_dir: Path | str,
        set_id: InstrSetId | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        visitor: Visitor | None = None,
    ) -> InstructionSet | None:
        if visitor is None:
            return self.collect_set(xml_dir, set_id, stop_at)
        self.for_each_in_set(xml_dir, set_id, visitor, stop_at)
        return None

    def load_sets(
        self,
        xml_dir: Path | str,
        stop_at: StopLevel | str = StopLevel.ENCODING,
        set_ids: Sequence[InstrSetId | str] = INSTR_SET_IDS,
        visitor: Visitor | None = None,
    ) -> list[InstructionSet] | None:
        if visitor is None:
            return self.collect_sets(xml_dir, stop_at, set_ids)
        self.for_each_in_sets(xml_dir, visitor, stop_at, set_ids)
        return None

    # ── Internals ──

    @contextmanager
    def _traversal(
        self, stop_at: StopLevel | str, visitor: Visitor | None = None
    ) -> Iterator[_Traversal]:
        """Open one call's traversal; a visitor's StopTraversal ends it quietly."""
        run = _Traversal(StopLevel(stop_at), visitor)
        self.stats = run.stats
        try:
            yield run
        except StopTraversal:
            if not run.streaming:
                raise
            run.stats.stopped = True
            logger.debug("Traversal stopped by visitor after %d visits", run.stats.visited)
        finally:
            # a nested call may have replaced it while this one was running
            self.stats = run.stats

    def _read_document(self, run: _Traversal, path: Path) -> etree._Element:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise DocumentNotFoundError(path) from exc
        try:
            root = etree.fromstring(data, parser=self._parser)
        except etree.XMLSyntaxError as exc:
            raise DocumentParseError(path, str(exc)) from exc
        run.stats.documents_read += 1
        logger.debug("Read %s", path)
        return root

    def _walk_set(
        self, run: _Traversal, xml_dir: Path, set_id: InstrSetId
    ) -> InstructionSet:
        index_file = xml_dir / INSTR_SET_DATA[set_id].file
        instr_set = InstructionSet(self._read_document(run, index_file), set_id)
        run.stats.record_construct(StopLevel.SET)
        self._process(
            run,
            instr_set,
            StopLevel.SET,
            instr_set.xml.values(INDEX_SECTION_FILES),
            lambda section_file: self._walk_section(run, xml_dir / section_file, instr_set),
        )
        return instr_set

    def _walk_section(
        self, run: _Traversal, xml_file: Path, instr_set: InstructionSet | None
    ) -> InstructionSection:
        if run.stop_at is StopLevel.SET:
            raise ValueError("A section document cannot be walked with stop level 'set'")
        if instr_set is None:
            instr_set = InstructionSet.placeholder()
        section = InstructionSection(
            self._read_document(run, xml_file), xml_file.name, instr_set
        )
        run.stats.record_construct(StopLevel.SECTION)
        self._process(
            run,
            section,
            StopLevel.SECTION,
            section.xml.iter(SECTION_CLASSES),
            lambda child: self._walk_class(run, child, section),
            owner=instr_set.instr_sections,
        )
        return section

    def _walk_class(
        self, run: _Traversal, element: etree._Element, section: InstructionSection
    ) -> None:
        instr_class = InstructionClass(element, section)
        run.stats.record_construct(StopLevel.CLASS)
        self._process(
            run,
            instr_class,
            StopLevel.CLASS,
            instr_class.xml.iter(CLASS_ENCODINGS),
            lambda child: self._walk_encoding(run, child, instr_class),
            owner=section.instr_classes,
        )

    def _walk_encoding(
        self, run: _Traversal, element: etree._Element, instr_class: InstructionClass
    ) -> None:
        encoding = InstructionEncoding(element, instr_class)
        run.stats.record_construct(StopLevel.ENCODING)
        if not encoding.mnemonic:
            logger.debug(
                "Dropping encoding %s in %s: no mnemonic",
                encoding.name,
                instr_class.instr_section.section_file,
            )
            run.stats.dropped_encodings += 1
            self._evict(run, instr_class.instr_encodings, encoding)
            return
        self._process(
            run,
            encoding,
            StopLevel.ENCODING,
            (),
            None,
            owner=instr_class.instr_encodings,
        )

    def _process(
        self,
        run: _Traversal,
        node: Any,
        level: StopLevel,
        children: Iterable[Any],
        descend: Callable[[Any], Any] | None,
        owner: list | None = None,
    ) -> None:
        """Visit ``node`` if ``level`` is the stop level, otherwise descend.

        In streaming mode the node leaves ``owner`` afterwards, also when a
        visitor or a deeper level raised.
        """
        try:
            if run.stop_at is level:
                if run.streaming:
                    run.stats.visited += 1
                    run.visitor(node)
            elif descend is not None:
                for child in children:
                    descend(child)
        finally:
            if owner is not None and run.streaming:
                self._evict(run, owner, node)

    def _evict(self, run: _Traversal, owner: list, node: Any) -> None:
        if owner and owner[-1] is node:
            owner.pop()
        else:
            owner.remove(node)
        run.stats.evicted += 1
