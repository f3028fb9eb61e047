"""Flat instruction record handed to the search page and exporters."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..core.models import InstructionEncoding


def html_file_name(section_file: str) -> str:
    """Map a section document name to its rendered page (``.xml`` → ``.html``)."""
    if section_file.endswith(".xml"):
        return section_file[: -len(".xml")] + ".html"
    return section_file


class InstructionRecord(BaseModel):
    """One searchable instruction entry."""

    category: str = Field(description="Instruction set id (base, simdfp, sve, sme)")
    mnemonic: str = Field(description="Alias mnemonic if present, else the mnemonic")
    heading: str | None = Field(default=None, description="Section heading")
    brief: str | None = Field(default=None, description="Section brief description")
    file: str = Field(description="Rendered page of the originating section")
    features: list[str] = Field(default_factory=list)
    asmtemplate: str = ""

    @classmethod
    def from_encoding(cls, encoding: InstructionEncoding) -> InstructionRecord:
        section = encoding.instr_section
        set_id = encoding.instr_set.id
        return cls(
            category=set_id.value if set_id is not None else "-",
            mnemonic=encoding.display_mnemonic or "",
            heading=section.heading,
            brief=section.brief,
            file=html_file_name(section.section_file),
            features=encoding.features,
            asmtemplate=encoding.asmtemplate,
        )
