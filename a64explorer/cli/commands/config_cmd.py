"""Config command for viewing and managing explorer configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    get_config,
    parse_instr_sets,
    parse_output_format,
    reset_config,
)


VALID_KEYS = {
    "xml_dir",
    "instr_sets",
    "output_format",
    "output_path",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. xml_dir, instr_sets)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify explorer configuration.

    Examples:
        a64explorer config show
        a64explorer config set xml_dir ~/ISA_A64_xml
        a64explorer config set instr_sets base,simdfp
        a64explorer config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] a64explorer config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]A64 Explorer Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Sources[/bold cyan]")
    console.print(f"  xml_dir       = {config.xml_dir}")
    console.print(
        f"  instr_sets    = {','.join(s.value for s in config.instr_sets)}"
    )

    console.print()
    console.print("[bold cyan]Export[/bold cyan]")
    console.print(f"  output_format = {config.output_format.value}")
    console.print(f"  output_path   = {config.output_path}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()

    try:
        if key == "instr_sets":
            config.instr_sets = parse_instr_sets(value)
        elif key == "output_format":
            config.output_format = parse_output_format(value)
        else:
            setattr(config, key, value)
    except ValueError as exc:
        console.print(f"[red]Invalid value:[/red] {exc}")
        raise typer.Exit(1)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
