"""Command 'add' of pogodoro"""

from typing import Annotated, Optional

import typer

from pogodoro.config import get_config_manager
from pogodoro.services.task_service import get_task_service
from pogodoro.utils.ui.console import get_console
from pogodoro.utils.ui.formatters import (
    format_duration,
    format_output,
    format_success,
    task_to_dict,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
def add_command(
    description: Annotated[str, typer.Argument(help="What you will work on")],
    work: Annotated[
        Optional[float], typer.Argument(help="Work minutes (default: timer.work_minutes)")
    ] = None,
    short_break: Annotated[
        Optional[float],
        typer.Argument(help="Short break minutes (default: timer.short_break_minutes)"),
    ] = None,
    long_break: Annotated[
        Optional[float],
        typer.Argument(help="Long break minutes (default: timer.long_break_minutes)"),
    ] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Add a task. Durations are in minutes."""
    timer = get_config_manager().config.timer
    task = get_task_service().add_task(
        description,
        timer.work_minutes if work is None else work,
        timer.short_break_minutes if short_break is None else short_break,
        timer.long_break_minutes if long_break is None else long_break,
    )

    if json_opt:
        format_output(task_to_dict(task), "json")
        return

    format_success(f"Added task #{task.id}: {task.description}")
    console.print(
        f"[dim]{format_duration(task.work_duration)} work / "
        f"{format_duration(task.short_break_duration)} short / "
        f"{format_duration(task.long_break_duration)} long. "
        f"Start it with: pogodoro work-on {task.id}[/dim]"
    )
