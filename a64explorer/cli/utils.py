"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts

Example:
    from ..utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Loaded sections", count=120)
        out.table("Sets", ["Set", "Sections"], [["base", "120"]])
        raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import typer
from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import get_config, parse_instr_sets
from ..core.models import InstrSetId
from ..loader import DocumentNotFoundError, DocumentParseError


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Invalid input (unknown set id, bad option value)
        3 = Index or section document not found
        4 = Document is not well-formed XML
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    PARSE_ERROR = 4


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def error(
        self,
        message: str,
        *,
        path: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if path:
                error_obj["path"] = path
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {escape(message)}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        """
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def resolve_sources(
    xml_dir: Path | None, instr_sets: list[str] | None
) -> tuple[Path, list[InstrSetId]]:
    """Fill in the XML directory and set selection from config when not given.

    Raises:
        ValueError: If a set id on the command line is unknown.
    """
    config = get_config()
    resolved_dir = xml_dir if xml_dir is not None else config.xml_dir_path
    if instr_sets:
        resolved_sets = parse_instr_sets(",".join(instr_sets))
    else:
        resolved_sets = list(config.instr_sets)
    return resolved_dir, resolved_sets


@contextmanager
def loader_errors(out: Output) -> Iterator[None]:
    """Report loader failures through ``out`` and exit with the matching code."""
    try:
        yield
    except DocumentNotFoundError as exc:
        out.error(
            f"Document not found: {exc.path}",
            path=str(exc.path),
            suggestion="Check --xml-dir points at the unpacked XML release",
            exit_code=ExitCode.FILE_NOT_FOUND,
        )
        raise typer.Exit(out.finish())
    except DocumentParseError as exc:
        out.error(
            f"Malformed document {exc.path}: {exc.detail}",
            path=str(exc.path),
            exit_code=ExitCode.PARSE_ERROR,
        )
        raise typer.Exit(out.finish())
    except ValueError as exc:
        out.error(str(exc), exit_code=ExitCode.VALIDATION_ERROR)
        raise typer.Exit(out.finish())
