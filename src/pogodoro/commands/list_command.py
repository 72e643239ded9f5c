"""Command 'list' of pogodoro"""

from typing import Annotated

import typer

from pogodoro.services.task_service import get_task_service
from pogodoro.utils.exit_codes import ERROR_INVALID_ARGS
from pogodoro.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_output,
    format_task_listing,
)

from .decorators import AppError, command_wrapper

app = typer.Typer()


@app.command("list")
@command_wrapper
def list_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty, json, yaml)")
    ] = "pretty",
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
    ] = False,
) -> None:
    """List open tasks and tasks completed in the last day."""
    if json_opt:
        output = "json"
    if output not in OUTPUT_FORMATS:
        raise AppError(f"Unknown output format: {output}", exit_code=ERROR_INVALID_ARGS)

    overview = get_task_service().overview()

    if output in ("json", "yaml"):
        format_output(overview.to_dict(), output)
    else:
        format_task_listing(
            overview.new, overview.in_progress, overview.recently_completed
        )
