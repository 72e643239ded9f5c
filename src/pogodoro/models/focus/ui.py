"""Full-screen live timer for pomodoro sessions."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pogodoro.models.exceptions import PogodoroError
from pogodoro.utils.ui.formatters import format_remaining, get_progress_bar

from .clock import ClockState
from .controller import SessionController, SessionSnapshot
from .cycling import Phase
from .keyboard import ENTER, ESCAPE, KeyboardHandler

PHASE_COLORS = {
    Phase.WORK: "red",
    Phase.SHORT_BREAK: "green",
    Phase.LONG_BREAK: "blue",
}

KEY_BINDINGS = [
    ("p", "pause / unpause"),
    ("n", "skip to the next phase"),
    ("c / Enter", "mark the task completed"),
    ("?", "toggle this help"),
    ("q / Esc", "quit the session"),
]


class TimerDisplay:
    """Renders a SessionController and feeds it key presses and elapsed time."""

    def __init__(self, console: Console | None = None, tick_seconds: float = 0.25):
        self.console = console or Console()
        self.tick_seconds = tick_seconds
        self.show_help = False
        self.message: Text | None = None

    def create_layout(self, snapshot: SessionSnapshot) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        color = PHASE_COLORS[snapshot.phase]
        if snapshot.clock_state is ClockState.PAUSED:
            header_text = Text("⏸️  PAUSED", style="bold yellow", justify="center")
        else:
            header_text = Text(
                f"{snapshot.phase.emoji}  pogodoro: {snapshot.phase.label}",
                style=f"bold {color}",
                justify="center",
            )
        layout["header"].update(Align.center(header_text, vertical="middle"))

        body = self._create_help_panel() if self.show_help else self._create_body_content(snapshot)
        layout["body"].update(Align.center(body, vertical="middle"))

        layout["footer"].update(
            Align.center(self._create_footer_text(snapshot), vertical="middle")
        )
        return layout

    def _create_body_content(self, snapshot: SessionSnapshot) -> Panel:
        components = []

        if snapshot.bound_task is not None:
            task_text = Text("Working on: ", style="dim", justify="center")
            task_text.append(snapshot.bound_task.description[:50], style="bold white")
            if snapshot.task_completed:
                task_text.append("  ✅", style="green")
            components.append(task_text)
            components.append(Text(""))

        if snapshot.clock_state is ClockState.PAUSED:
            timer_color = "yellow"
        elif snapshot.phase is Phase.WORK and snapshot.remaining < 60:
            timer_color = "red"
        else:
            timer_color = PHASE_COLORS[snapshot.phase]
        components.append(
            Text(
                f"Remaining: {format_remaining(snapshot.remaining)}",
                style=f"bold {timer_color}",
                justify="center",
            )
        )
        components.append(Text(""))

        pct = 0.0
        if snapshot.duration > 0:
            pct = (snapshot.duration - snapshot.remaining) / snapshot.duration * 100
        components.append(
            Text(f"{get_progress_bar(pct, width=40)}  {int(pct)}%", style="dim", justify="center")
        )
        components.append(Text(snapshot.progress_dots, style=color_or_dim(snapshot), justify="center"))
        components.append(Text(""))

        finished = snapshot.pomodoros_finished_this_session
        count_text = Text(f"Finished: {finished} 🍅", justify="center")
        if snapshot.bound_task is not None:
            count_text.append(
                f"  (task total {snapshot.bound_task.pomodoros_finished})", style="dim"
            )
        components.append(count_text)

        if snapshot.unpersisted_credits:
            components.append(
                Text(
                    f"⚠ {snapshot.unpersisted_credits} pomodoro(s) could not be saved",
                    style="bold yellow",
                    justify="center",
                )
            )

        if self.message is not None:
            components.append(Text(""))
            components.append(self.message)

        return Panel(
            Group(*components),
            border_style=PHASE_COLORS[snapshot.phase],
            padding=(1, 4),
        )

    def _create_help_panel(self) -> Panel:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="bold cyan")
        table.add_column("Action")
        for key, action in KEY_BINDINGS:
            table.add_row(key, action)
        return Panel(table, title="Keys", border_style="cyan", padding=(1, 2))

    def _create_footer_text(self, snapshot: SessionSnapshot) -> Text:
        pause = "un[p]ause" if snapshot.clock_state is ClockState.PAUSED else "[p]ause"
        hints = f"[n]ext  •  [q]uit  •  {pause}"
        if snapshot.bound_task is not None:
            hints += "  •  [c]omplete"
        hints += "  •  [?] help"
        return Text(hints, style="dim", justify="center")

    def handle_key(self, controller: SessionController, key: str) -> bool:
        """Apply one key press. Returns False when the session should end."""
        if key in ("q", ESCAPE):
            return False
        if key == "?":
            self.show_help = not self.show_help
        elif key == "p":
            controller.toggle_pause()
        elif key == "n":
            self._report(controller.skip())
        elif key in ("c", ENTER):
            try:
                task = controller.complete_task()
            except PogodoroError as e:
                self.message = Text(str(e), style="bold red", justify="center")
            else:
                self.message = Text(
                    f"Task #{task.id} marked completed", style="green", justify="center"
                )
        return True

    def _report(self, result) -> None:
        if result.error is not None:
            self.message = Text(
                f"Could not save pomodoro: {result.error}",
                style="bold yellow",
                justify="center",
            )

    def run(
        self,
        controller: SessionController,
        keyboard_factory: Callable[[], KeyboardHandler] = KeyboardHandler,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> SessionSnapshot:
        """Run the live timer until the user quits.

        Returns the final session snapshot.
        """
        keyboard = keyboard_factory()
        last = monotonic()

        try:
            with Live(
                self.create_layout(controller.snapshot()),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while True:
                    # Time up to this poll belongs to the state before the key
                    now = monotonic()
                    self._report(controller.advance(now - last))
                    last = now

                    key = keyboard.get_key()
                    if key is not None and not self.handle_key(controller, key):
                        break

                    live.update(self.create_layout(controller.snapshot()))
                    sleep(self.tick_seconds)
        except KeyboardInterrupt:
            pass
        finally:
            keyboard.stop()

        return controller.snapshot()


def color_or_dim(snapshot: SessionSnapshot) -> str:
    if snapshot.clock_state is ClockState.PAUSED:
        return "dim"
    return PHASE_COLORS[snapshot.phase]


def show_session_summary(snapshot: SessionSnapshot, console: Console | None = None):
    """Print a short summary after the live timer closes."""
    console = console or Console()

    lines = ["[bold]Session ended[/bold]", ""]
    if snapshot.bound_task is not None:
        lines.append(f"Task: {snapshot.bound_task.description} (#{snapshot.bound_task.id})")
        lines.append(f"Total pomodoros on task: {snapshot.bound_task.pomodoros_finished}")
        if snapshot.task_completed:
            lines.append("[green]Task completed ✅[/green]")
    else:
        lines.append("Free session (not tracked)")
    lines.append(f"Pomodoros this session: {snapshot.pomodoros_finished_this_session} 🍅")
    lines.append(f"Ended during: {snapshot.phase.label}")

    border = "green"
    if snapshot.unpersisted_credits:
        border = "yellow"
        lines.append("")
        lines.append(
            f"[yellow]⚠ {snapshot.unpersisted_credits} pomodoro(s) were not saved "
            "to the task database; see the log file.[/yellow]"
        )

    console.print(Panel("\n".join(lines), border_style=border, padding=(1, 2)))
