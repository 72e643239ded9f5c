"""Configuration management commands."""

from typing import Annotated, Optional

import typer

from pogodoro.config import get_config_manager
from pogodoro.utils.logger import log_file_path
from pogodoro.utils.typer_helpers import SuggestingGroup
from pogodoro.utils.ui.console import get_console
from pogodoro.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (table, json, yaml)")
    ] = "table",
) -> None:
    """Show the current configuration and where files live."""
    config_manager = get_config_manager()
    values = config_manager.as_dict()
    if output in ("json", "yaml"):
        format_output(values, output)
        return

    format_output(values, "table")
    console.print()
    console.print(f"[dim]Config file: {config_manager.config_file}[/dim]")
    console.print(f"[dim]Database:    {config_manager.db_path}[/dim]")
    console.print(f"[dim]Log file:    {log_file_path()}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. timer.work_minutes)")],
) -> None:
    """Get a configuration value."""
    value = get_config_manager().get(key)
    console.print("-" if value is None else str(value))


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g. timer.work_minutes)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager()
    config_manager.set(key, value)
    format_success(f"Configuration '{key}' set to '{config_manager.get(key)}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[
        Optional[str], typer.Argument(help="Configuration key to reset (default: all)")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if key is None and not yes:
        if not typer.confirm("Reset all configuration to defaults?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    get_config_manager().reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
