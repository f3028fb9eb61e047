"""List command: one line per instruction encoding."""

from __future__ import annotations

from pathlib import Path

import typer

from ...catalog import InstructionRecord, format_listing_line
from ...core.models import InstructionEncoding
from ...loader import StopTraversal, XMLLoader
from ..app import app, console, get_json_mode
from ..utils import Output, loader_errors, resolve_sources


@app.command("list")
def list_command(
    xml_dir: Path | None = typer.Option(
        None, "--xml-dir", "-x", help="XML release directory (default from config)"
    ),
    instr_set: list[str] | None = typer.Option(
        None, "--set", "-s", help="Instruction set id (repeatable): base, simdfp, sve, sme"
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Stop after this many encodings"
    ),
):
    """List every encoding in document order.

    Nothing is printed unless every document was read; a missing or
    malformed file leaves stdout empty apart from the error.

    Examples:
        a64explorer list --xml-dir ISA_A64_xml
        a64explorer list -s sve -n 20
    """
    out = Output(console=console, json_mode=get_json_mode())
    loader = XMLLoader()
    rows: list[dict] = []
    lines: list[str] = []

    def show(encoding: InstructionEncoding) -> None:
        if out.json_mode:
            rows.append(InstructionRecord.from_encoding(encoding).model_dump(mode="json"))
        else:
            lines.append(format_listing_line(encoding))
        if limit is not None and loader.stats.visited >= limit:
            raise StopTraversal()

    with loader_errors(out):
        resolved_dir, set_ids = resolve_sources(xml_dir, instr_set)
        loader.for_each_in_sets(resolved_dir, show, set_ids=set_ids)

    for line in lines:
        out.text(line)
    out.set_data("encodings", rows)
    out.set_data("count", loader.stats.visited)
    out.set_data("truncated", loader.stats.stopped)
    raise typer.Exit(out.finish())
