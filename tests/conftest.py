"""Shared fixtures: synthetic XML releases and config isolation."""

from pathlib import Path

import pytest
from lxml import etree

from a64explorer import config as config_module
from a64explorer.cli.commands import config_cmd
from a64explorer.core.models import INSTR_SET_DATA, InstrSetId


class ReleaseBuilder:
    """Writes index and section documents shaped like the A64 XML release."""

    def __init__(self, root: Path):
        self.root = root

    @staticmethod
    def _docvars(parent: etree._Element, docvars: dict[str, str]) -> None:
        if not docvars:
            return
        block = etree.SubElement(parent, "docvars")
        for key, value in docvars.items():
            etree.SubElement(block, "docvar", key=key, value=value)

    @staticmethod
    def _variants(parent: etree._Element, variants) -> None:
        if not variants:
            return
        block = etree.SubElement(parent, "arch_variants")
        for name, feature in variants:
            attrs = {"name": name}
            if feature is not None:
                attrs["feature"] = feature
            etree.SubElement(block, "arch_variant", **attrs)

    def encoding(
        self,
        name: str,
        mnemonic: str | None = None,
        *,
        alias: str | None = None,
        kind: str | None = None,
        template: tuple[str, ...] = (),
        variants=(),
    ) -> etree._Element:
        """Build an <encoding>; ``template`` alternates <text> and <a> fragments."""
        elem = etree.Element("encoding", name=name)
        docvars = {}
        if kind:
            docvars["instr-class"] = kind
        if mnemonic is not None:
            docvars["mnemonic"] = mnemonic
        if alias:
            docvars["alias_mnemonic"] = alias
        self._docvars(elem, docvars)
        self._variants(elem, variants)
        if template:
            asm = etree.SubElement(elem, "asmtemplate")
            for i, fragment in enumerate(template):
                child = etree.SubElement(asm, "text" if i % 2 == 0 else "a")
                child.text = fragment
        return elem

    def iclass(
        self,
        class_id: str,
        encodings=(),
        *,
        name: str | None = None,
        kind: str | None = None,
        variants=(),
    ) -> etree._Element:
        elem = etree.Element("iclass", id=class_id, name=name or class_id)
        self._docvars(elem, {"instr-class": kind} if kind else {})
        self._variants(elem, variants)
        for encoding in encodings:
            elem.append(encoding)
        return elem

    def section(
        self,
        file_name: str,
        classes=(),
        *,
        section_id: str | None = None,
        title: str | None = None,
        heading: str | None = None,
        brief: str | None = None,
        brief_in_para: bool = True,
    ) -> Path:
        attrs = {}
        if section_id:
            attrs["id"] = section_id
        if title:
            attrs["title"] = title
        root = etree.Element("instructionsection", **attrs)
        if heading is not None:
            etree.SubElement(root, "heading").text = heading
        if brief is not None:
            brief_elem = etree.SubElement(etree.SubElement(root, "desc"), "brief")
            if brief_in_para:
                etree.SubElement(brief_elem, "para").text = brief
            else:
                brief_elem.text = brief
        classes_elem = etree.SubElement(root, "classes")
        for iclass in classes:
            classes_elem.append(iclass)
        return self._write(file_name, root)

    def index(self, set_id: InstrSetId | str, section_files: list[str]) -> Path:
        root = etree.Element("alphaindex", id="index")
        iforms = etree.SubElement(root, "iforms")
        for section_file in section_files:
            etree.SubElement(iforms, "iform", iformfile=section_file).text = section_file
        return self._write(INSTR_SET_DATA[InstrSetId(set_id)].file, root)

    def _write(self, file_name: str, root: etree._Element) -> Path:
        path = self.root / file_name
        path.write_bytes(
            etree.tostring(root, xml_declaration=True, encoding="utf-8")
        )
        return path


@pytest.fixture
def builder(tmp_path) -> ReleaseBuilder:
    xml_dir = tmp_path / "xml"
    xml_dir.mkdir()
    return ReleaseBuilder(xml_dir)


@pytest.fixture
def release(builder) -> Path:
    """A small four-set release.

    base:   sub_addsub_imm.xml (SUB x2), add_addsub_imm.xml (ADD + one
            encoding without mnemonic), mov_add_addsub_imm.xml (ADD alias MOV)
    simdfp: fadd_float.xml (FADD x2, brief without <para>)
    sve:    add_z_zz.xml (ADD gated by the class's FEAT_SVE variant)
    sme:    addha.xml (ADDHA, class kind mortlach)
    """
    b = builder
    b.index("base", ["sub_addsub_imm.xml", "add_addsub_imm.xml", "mov_add_addsub_imm.xml"])
    b.section(
        "sub_addsub_imm.xml",
        [
            b.iclass(
                "imm",
                [
                    b.encoding("SUB_32_addsub_imm", "SUB", kind="general",
                               template=("SUB  ", "<Wd|WSP>", ", ", "<Wn|WSP>")),
                    b.encoding("SUB_64_addsub_imm", "SUB", kind="general",
                               template=("SUB  ", "<Xd|SP>", ", ", "<Xn|SP>")),
                ],
                kind="general",
            )
        ],
        section_id="SUB_addsub_imm",
        title="SUB (immediate) -- A64",
        heading="SUB (immediate)",
        brief="Subtract (immediate)",
    )
    b.section(
        "add_addsub_imm.xml",
        [
            b.iclass(
                "imm",
                [
                    b.encoding("ADD_32_addsub_imm", "ADD",
                               template=("ADD  ", "<Wd|WSP>", ", ", "<Wn|WSP>", ", #", "<imm>")),
                ],
                kind="general",
            ),
            b.iclass("reserved", [b.encoding("ADD_reserved")]),
        ],
        section_id="ADD_addsub_imm",
        heading="ADD (immediate)",
        brief="Add (immediate)",
    )
    b.section(
        "mov_add_addsub_imm.xml",
        [
            b.iclass(
                "imm",
                [
                    b.encoding("MOV_ADD_32_addsub_imm", "ADD", alias="MOV",
                               template=("MOV  ", "<Wd|WSP>", ", ", "<Wn|WSP>")),
                ],
            )
        ],
        section_id="MOV_ADD_addsub_imm",
        heading="MOV (to/from SP)",
        brief="Move between register and stack pointer",
    )

    b.index("simdfp", ["fadd_float.xml"])
    b.section(
        "fadd_float.xml",
        [
            b.iclass(
                "float",
                [
                    b.encoding("FADD_H_floatdp2", "FADD", variants=[("FEAT_FP16", "FEAT_FP16")],
                               template=("FADD  ", "<Hd>")),
                    b.encoding("FADD_S_floatdp2", "FADD", kind="fpsimd",
                               template=("FADD  ", "<Sd>")),
                ],
                kind="float",
            )
        ],
        section_id="FADD_float",
        heading="FADD (scalar)",
        brief="Floating-point Add (scalar)",
        brief_in_para=False,
    )

    b.index("sve", ["add_z_zz.xml"])
    b.section(
        "add_z_zz.xml",
        [
            b.iclass(
                "unpredicated",
                [b.encoding("ADD_z_zz_", "ADD", template=("ADD     ", "<Zd>.<T>"))],
                kind="sve",
                variants=[("ARMv8.2", "FEAT_SVE")],
            )
        ],
        section_id="ADD_z_zz",
        heading="ADD (vectors, unpredicated)",
        brief="Add vectors (unpredicated)",
    )

    b.index("sme", ["addha.xml"])
    b.section(
        "addha.xml",
        [
            b.iclass(
                "32bit",
                [b.encoding("ADDHA_za_pp_z_32", "ADDHA", template=("ADDHA  ", "<ZAda>.S"))],
                kind="mortlach",
            )
        ],
        section_id="ADDHA_za_pp_z",
        heading="ADDHA",
        brief="Add horizontally vector elements to ZA tile",
    )
    return b.root


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from ~/.config and A64_* env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for name in ("A64_XML_DIR", "A64_INSTR_SETS", "A64_OUTPUT_FORMAT", "A64_OUTPUT_PATH"):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()
