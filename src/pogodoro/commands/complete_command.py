"""Command 'complete' of pogodoro"""

from typing import Annotated

import typer

from pogodoro.services.task_service import get_task_service
from pogodoro.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("complete")
@command_wrapper
def complete_command(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
) -> None:
    """Mark a task as completed. Completing it again is a no-op."""
    task = get_task_service().complete_task(task_id)

    description = task.description
    if len(description) > 60:
        description = description[:57] + "..."
    format_success(
        f"✓ Completed: {description} ({task.pomodoros_finished} 🍅)"
    )
