"""Export the deduplicated, sorted instruction catalog."""

from __future__ import annotations

from pathlib import Path

import typer

from ...catalog import CatalogFormat, build_catalog, render_catalog, write_catalog
from ...config import get_config
from ..app import app, console, get_json_mode
from ..utils import Output, loader_errors, resolve_sources


@app.command("export")
def export_command(
    xml_dir: Path | None = typer.Option(
        None, "--xml-dir", "-x", help="XML release directory (default from config)"
    ),
    instr_set: list[str] | None = typer.Option(
        None, "--set", "-s", help="Instruction set id (repeatable): base, simdfp, sve, sme"
    ),
    fmt: CatalogFormat | None = typer.Option(
        None, "--format", "-f", help="Output format (default from config)"
    ),
    output: str | None = typer.Option(
        None, "--to", "-o", help="Output file, '-' for stdout (default from config)"
    ),
):
    """Write the instruction catalog used by the search page.

    Examples:
        a64explorer export --xml-dir ISA_A64_xml --to instrs.js
        a64explorer export -f jsonl -o - | head
    """
    config = get_config()
    out = Output(console=console, json_mode=get_json_mode())
    fmt = fmt or config.output_format
    target = output or config.output_path

    with loader_errors(out):
        resolved_dir, set_ids = resolve_sources(xml_dir, instr_set)
        records = build_catalog(resolved_dir, set_ids)

    if target == "-":
        typer.echo(render_catalog(records, fmt), nl=False)
        raise typer.Exit(out.exit_code)

    path = write_catalog(records, Path(target), fmt)
    out.success(
        f"Exported {len(records)} instructions -> {path}",
        count=len(records),
        path=str(path),
        format=CatalogFormat(fmt).value,
    )
    raise typer.Exit(out.finish())
