"""Desktop notifications for phase changes."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys

from rich.console import Console

from pogodoro.models.focus.cycling import Phase, PhaseChanged

logger = logging.getLogger(__name__)

TITLE = "pogodoro"

PHASE_MESSAGES = {
    Phase.WORK: "time to work!",
    Phase.SHORT_BREAK: "short break time! alright man",
    Phase.LONG_BREAK: "ALRIGHT! long break time man",
}


def notification_message(event: PhaseChanged) -> str:
    return PHASE_MESSAGES[event.to_phase]


def build_command(title: str, message: str, platform: str | None = None) -> list[str] | None:
    """Command line that shows a desktop notification, or None if unsupported."""
    platform = platform or sys.platform
    if platform == "darwin":
        script = f'display notification "{_escape(message)}" with title "{_escape(title)}"'
        return ["osascript", "-e", script]
    if platform.startswith("linux") and shutil.which("notify-send"):
        return ["notify-send", "--app-name", title, title, message]
    return None


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class DesktopNotifier:
    """Phase-change sink: desktop notification plus optional terminal bell.

    Failures to launch the notifier are logged and otherwise ignored; a
    missing notification daemon must never interrupt a session.
    """

    def __init__(
        self,
        enabled: bool = True,
        bell: bool = True,
        console: Console | None = None,
        platform: str | None = None,
    ):
        self.enabled = enabled
        self.bell = bell
        self.console = console
        self.platform = platform

    def __call__(self, event: PhaseChanged) -> None:
        message = notification_message(event)
        if self.bell and self.console is not None:
            self.console.bell()
        if not self.enabled:
            return
        self.send(TITLE, message)

    def send(self, title: str, message: str) -> bool:
        """Launch the platform notifier without waiting for it."""
        command = build_command(title, message, self.platform)
        if command is None:
            logger.debug("no desktop notifier available on %s", self.platform or sys.platform)
            return False
        try:
            subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning("desktop notification failed: %s", e)
            return False
        return True
