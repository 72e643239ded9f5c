"""Output formatters for different formats."""

import json
import math
from datetime import date
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pogodoro.models.task import Task

console = Console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

STATUS_ICONS = {
    "new": "🆕",
    "in_progress": "🍅",
    "completed": "✅",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key, _cell(value))

    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None:
        return "-"
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


# ============================================================================
# Time formatting
# ============================================================================


def format_duration(seconds: int) -> str:
    """Compact duration for task tables: ``25m`` or ``1m30s``."""
    mins, secs = divmod(int(seconds), 60)
    if secs == 0:
        return f"{mins}m"
    return f"{mins}m{secs}s"


def format_remaining(seconds: float) -> str:
    """Countdown text for the live timer: ``12m5s``, ``1h2m3s`` or ``Finished!``."""
    if seconds <= 0:
        return "Finished!"
    to_go = math.ceil(seconds)
    mins, secs = divmod(to_go, 60)
    hours, mins = divmod(mins, 60)
    if hours:
        return f"{hours}h{mins}m{secs}s"
    return f"{mins}m{secs}s"


def get_progress_bar(percentage: float, width: int = 10) -> str:
    """Get a progress bar representation."""
    percentage = max(0.0, min(100.0, percentage))
    filled = int(width * percentage / 100)
    return "▓" * filled + "░" * (width - filled)


# ============================================================================
# Tasks
# ============================================================================


def task_to_dict(task: Task) -> dict:
    return task.model_dump(mode="json")


def format_task_table(title: str, tasks: list[Task], status: str) -> None:
    """Print one titled table of tasks."""
    icon = STATUS_ICONS.get(status, "")
    table = Table(
        title=f"{icon} {title}".strip(),
        title_justify="left",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Description")
    table.add_column("Work", justify="right", style="cyan")
    table.add_column("Short", justify="right", style="green")
    table.add_column("Long", justify="right", style="green")
    table.add_column("🍅", justify="right")

    for task in tasks:
        table.add_row(
            str(task.id),
            task.description,
            format_duration(task.work_duration),
            format_duration(task.short_break_duration),
            format_duration(task.long_break_duration),
            str(task.pomodoros_finished),
        )

    console.print(table)


def format_task_listing(
    new: list[Task], in_progress: list[Task], recently_completed: list[Task]
) -> None:
    """Print the task overview: new, in progress, and completed in the last day."""
    if not (new or in_progress or recently_completed):
        console.print("[yellow]No tasks yet.[/yellow] Add one with [cyan]pogodoro add[/cyan]")
        return

    sections = [
        ("New", new, "new"),
        ("In Progress", in_progress, "in_progress"),
        ("Completed in the last day", recently_completed, "completed"),
    ]
    first = True
    for title, tasks, status in sections:
        if not tasks:
            continue
        if not first:
            console.print()
        format_task_table(title, tasks, status)
        first = False


# ============================================================================
# Stats
# ============================================================================


def format_cycles_chart(counts: list[tuple[date, int]], width: int = 30) -> None:
    """Horizontal bar chart of finished pomodoros per day."""
    total = sum(n for _, n in counts)
    if total == 0:
        console.print(f"[yellow]No pomodoros finished in the last {len(counts)} days.[/yellow]")
        return

    peak = max(n for _, n in counts)
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Day", style="dim")
    table.add_column("Bar")
    table.add_column("Count", justify="right")

    for day, n in counts:
        bar = Text("█" * math.ceil(width * n / peak), style="red") if n else Text("·", style="dim")
        table.add_row(day.strftime("%a %b %d"), bar, str(n))

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {total} 🍅 over {len(counts)} days")
