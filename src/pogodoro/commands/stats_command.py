"""Command 'stats' of pogodoro"""

from typing import Annotated

import typer

from pogodoro.services.task_service import get_task_service
from pogodoro.utils.ui.formatters import format_cycles_chart, format_output

from .decorators import command_wrapper

app = typer.Typer()


@app.command("stats")
@command_wrapper
def stats_command(
    days: Annotated[
        int, typer.Option("--days", "-d", help="Number of days to show, ending today")
    ] = 30,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Pomodoros finished per day."""
    counts = get_task_service().cycles_per_day(days)

    if json_opt:
        format_output([{"date": d.isoformat(), "pomodoros": n} for d, n in counts], "json")
        return

    format_cycles_chart(counts)
