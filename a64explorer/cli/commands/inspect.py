"""Inspect commands: counts and section listings for an XML release."""

from __future__ import annotations

from pathlib import Path

import typer

from ...core.models import INSTR_SET_DATA, InstructionSection, StopLevel
from ...loader import XMLLoader
from ..app import app, console, get_json_mode
from ..utils import Output, loader_errors, resolve_sources

inspect_app = typer.Typer(help="Inspect the structure of an XML release")
app.add_typer(inspect_app, name="inspect")


@inspect_app.command("summary")
def inspect_summary(
    xml_dir: Path | None = typer.Option(None, "--xml-dir", "-x"),
    instr_set: list[str] | None = typer.Option(None, "--set", "-s"),
    level: StopLevel = typer.Option(
        StopLevel.ENCODING, "--level", "-l", help="Deepest level to build"
    ),
):
    """Count sections, classes and encodings per instruction set."""
    out = Output(console=console, json_mode=get_json_mode())
    loader = XMLLoader()
    rows: list[list[str]] = []

    with loader_errors(out):
        resolved_dir, set_ids = resolve_sources(xml_dir, instr_set)
        for set_id in set_ids:
            loader.for_each_in_set(resolved_dir, set_id, lambda _node: None, stop_at=level)
            stats = loader.stats
            encodings = stats.constructed[StopLevel.ENCODING]
            rows.append(
                [
                    set_id.value,
                    INSTR_SET_DATA[set_id].name,
                    str(stats.constructed[StopLevel.SECTION]),
                    str(stats.constructed[StopLevel.CLASS]),
                    str(encodings - stats.dropped_encodings),
                    str(stats.dropped_encodings),
                ]
            )

    out.table(
        "Instruction Sets",
        ["Set", "Name", "Sections", "Classes", "Encodings", "Dropped"],
        rows,
        data_key="sets",
    )
    raise typer.Exit(out.finish())


@inspect_app.command("sections")
def inspect_sections(
    xml_dir: Path | None = typer.Option(None, "--xml-dir", "-x"),
    instr_set: list[str] | None = typer.Option(None, "--set", "-s"),
):
    """List every section document with its heading."""
    out = Output(console=console, json_mode=get_json_mode())
    loader = XMLLoader()
    rows: list[list[str]] = []

    def add(section: InstructionSection) -> None:
        rows.append(
            [
                section.instr_set.id.value,
                section.id or "",
                section.heading or "",
                section.section_file,
            ]
        )

    with loader_errors(out):
        resolved_dir, set_ids = resolve_sources(xml_dir, instr_set)
        loader.for_each_in_sets(
            resolved_dir, add, stop_at=StopLevel.SECTION, set_ids=set_ids
        )

    out.table("Sections", ["Set", "Id", "Heading", "File"], rows, data_key="sections")
    raise typer.Exit(out.finish())
