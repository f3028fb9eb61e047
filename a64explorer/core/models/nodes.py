"""Instruction document nodes.

The hierarchy mirrors the XML release:

    InstructionSet        one per index document (index.xml, sveindex.xml, ...)
      InstructionSection  one per section document (add_addsub_imm.xml, ...)
        InstructionClass  one per <iclass> in the section
          InstructionEncoding  one per <encoding> in the class

Each node is built from its raw element and its parent, reads all of its
fields at construction time, and appends itself to the parent's child list
so that child order matches document order. Parents own their children;
the ``instr_*`` back-references only exist for upward lookup.
"""

from __future__ import annotations

from dataclasses import dataclass

from lxml import etree

from ..features import resolve_features
from ..xml_element import XmlElement
from .levels import INSTR_SET_DATA, InstrSetId

# docvar keys carrying semantic hints
DOCVAR_INSTR_CLASS = "instr-class"
DOCVAR_MNEMONIC = "mnemonic"
DOCVAR_ALIAS_MNEMONIC = "alias_mnemonic"


@dataclass(frozen=True)
class ArchVariant:
    """One ``<arch_variant name=... feature=...>`` entry."""

    name: str | None
    feature: str | None

    @classmethod
    def parse(cls, xml: XmlElement) -> list[ArchVariant]:
        return [
            cls(name=e.get("name"), feature=e.get("feature"))
            for e in xml.iter("arch_variants/arch_variant")
        ]


class InstructionSet:
    """Top-level instruction set built from its index document."""

    def __init__(self, element: etree._Element | None, set_id: InstrSetId | None):
        self.xml = XmlElement(element)
        self.instr_sections: list[InstructionSection] = []
        self.id = set_id
        if set_id is None:
            self.name = "-"
            self.index_file = "-"
        else:
            info = INSTR_SET_DATA[set_id]
            self.name = info.name
            self.index_file = info.file

    @classmethod
    def placeholder(cls) -> InstructionSet:
        """Owner for a section document loaded on its own."""
        return cls(None, None)

    def __repr__(self) -> str:
        return f"InstructionSet(id={self.id!r}, sections={len(self.instr_sections)})"


class InstructionSection:
    """One section document (``<instructionsection>`` root)."""

    def __init__(
        self,
        element: etree._Element,
        section_file: str,
        instr_set: InstructionSet,
    ):
        self.xml = XmlElement(element)
        self.section_file = section_file
        self.instr_set = instr_set
        instr_set.instr_sections.append(self)
        self.instr_classes: list[InstructionClass] = []
        self.docvars = self.xml.docvars()
        self.id = self.xml.attr("@id")
        self.title = self.xml.attr("@title")
        self.heading = self.xml.text("heading")
        self.brief = self.xml.text("desc/brief/para") or self.xml.text("desc/brief")

    def __repr__(self) -> str:
        return f"InstructionSection(file={self.section_file!r}, id={self.id!r})"


class InstructionClass:
    """An ``<iclass>`` grouping encodings that share a layout."""

    def __init__(self, element: etree._Element, instr_section: InstructionSection):
        self.xml = XmlElement(element)
        self.instr_section = instr_section
        instr_section.instr_classes.append(self)
        self.instr_encodings: list[InstructionEncoding] = []
        self.docvars = self.xml.docvars()
        self.id = self.xml.attr("@id")
        self.name = self.xml.attr("@name")
        self.iclass = self.docvars.get(DOCVAR_INSTR_CLASS)
        self.arch_variants = ArchVariant.parse(self.xml)

    @property
    def instr_set(self) -> InstructionSet:
        return self.instr_section.instr_set

    def __repr__(self) -> str:
        return f"InstructionClass(id={self.id!r}, encodings={len(self.instr_encodings)})"


class InstructionEncoding:
    """A concrete ``<encoding>``: mnemonic, assembler template, features.

    Features are resolved once here from the encoding's own variants, the
    class's variants, the encoding's kind and the class's kind, in that
    order. They do not change afterwards.
    """

    def __init__(self, element: etree._Element, instr_class: InstructionClass):
        self.xml = XmlElement(element)
        self.instr_class = instr_class
        instr_class.instr_encodings.append(self)
        self.docvars = self.xml.docvars()
        self.name = self.xml.attr("@name")
        self.iclass = self.docvars.get(DOCVAR_INSTR_CLASS)
        self.mnemonic = self.docvars.get(DOCVAR_MNEMONIC)
        self.alias_mnemonic = self.docvars.get(DOCVAR_ALIAS_MNEMONIC)
        self.asmtemplate = "".join(self.xml.values("asmtemplate//text()"))
        self.arch_variants = ArchVariant.parse(self.xml)
        self._features = tuple(
            resolve_features(
                self.arch_variants,
                instr_class.arch_variants,
                self.iclass,
                instr_class.iclass,
            )
        )

    @property
    def features(self) -> list[str]:
        return list(self._features)

    @property
    def display_mnemonic(self) -> str | None:
        """Alias mnemonic when the encoding is an alias, else the mnemonic."""
        return self.alias_mnemonic or self.mnemonic

    @property
    def instr_section(self) -> InstructionSection:
        return self.instr_class.instr_section

    @property
    def instr_set(self) -> InstructionSet:
        return self.instr_class.instr_section.instr_set

    def __repr__(self) -> str:
        return f"InstructionEncoding(name={self.name!r}, mnemonic={self.mnemonic!r})"
