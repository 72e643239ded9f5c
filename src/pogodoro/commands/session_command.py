"""Commands 'work-on' and 'start' of pogodoro: the live pomodoro timer."""

from typing import Annotated, Optional

import typer

from pogodoro.config import get_config_manager
from pogodoro.focus import TimerDisplay, show_session_summary
from pogodoro.models.focus import SessionController
from pogodoro.services.notification_service import DesktopNotifier
from pogodoro.services.task_service import get_task_service, start_free_session
from pogodoro.utils.ui.console import get_console
from pogodoro.utils.ui.formatters import format_warning

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


def _notifier() -> DesktopNotifier:
    settings = get_config_manager().config.notifications
    return DesktopNotifier(enabled=settings.enabled, bell=settings.bell, console=console)


def run_session(controller: SessionController) -> None:
    """Show the live timer for *controller*, then a summary."""
    display = TimerDisplay(
        console=console,
        tick_seconds=get_config_manager().config.timer.tick_seconds,
    )
    snapshot = display.run(controller)
    show_session_summary(snapshot, console=console)


@app.command("work-on")
@command_wrapper
def work_on_command(
    task_id: Annotated[int, typer.Argument(help="Task ID")],
) -> None:
    """Start a pomodoro session that credits finished cycles to a task."""
    timer = get_config_manager().config.timer
    controller = get_task_service().start_task_session(
        task_id, timer.session_config(), notifier=_notifier()
    )
    if controller.task.completed:
        format_warning(f"Task #{task_id} is already completed; pomodoros will still be counted")
    run_session(controller)


@app.command("start")
@command_wrapper
def start_command(
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
) -> None:
    """Start a free pomodoro session that is not tracked against any task."""
    timer = get_config_manager().config.timer
    controller = start_free_session(
        timer.work_minutes if work is None else work,
        timer.short_break_minutes if short_break is None else short_break,
        timer.long_break_minutes if long_break is None else long_break,
        timer.session_config(),
        notifier=_notifier(),
    )
    run_session(controller)
