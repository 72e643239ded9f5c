"""Main entry point for pogodoro."""

import typer

from pogodoro.commands import (
    add_command,
    complete_command,
    config,
    list_command,
    session_command,
    stats_command,
    version_command,
)
from pogodoro.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="pogodoro",
    cls=SuggestingGroup,
    help="A terminal pomodoro timer that keeps count of your work per task",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("list")(list_command.list_command)
app.command("add")(add_command.add_command)
app.command("complete")(complete_command.complete_command)
app.command("work-on")(session_command.work_on_command)
app.command("start")(session_command.start_command)
app.command("stats")(stats_command.stats_command)
app.command("version")(version_command.version)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
