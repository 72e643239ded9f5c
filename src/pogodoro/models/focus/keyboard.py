"""Non-blocking keyboard input for the live timer."""

import logging
import os
import select
import sys
import termios
import tty
from typing import Optional

logger = logging.getLogger(__name__)

ESCAPE = "\x1b"
ENTER = "\n"

# How long to wait for the rest of an escape sequence (arrow keys, F-keys)
_SEQUENCE_WAIT = 0.01


class KeyboardHandler:
    """Reads single key presses from a cbreak-mode terminal."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal into cbreak mode, remembering the old settings."""
        try:
            fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except (termios.error, OSError, ValueError) as e:
            # Not a terminal (piped stdin); keys are read as plain lines
            logger.debug("keyboard left in cooked mode: %s", e)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """Return the next key pressed, or None if there is none.

        Letters are lowercased. A lone Esc is returned as ESCAPE; a multi-byte
        escape sequence such as an arrow key is returned whole, so it never
        reads as Esc.
        """
        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        data = os.read(fd, 1)
        if not data:
            return None

        if data == ESCAPE.encode():
            while select.select([fd], [], [], _SEQUENCE_WAIT)[0]:
                more = os.read(fd, 32)
                if not more:
                    break
                data += more
            return data.decode(errors="replace")

        key = data.decode(errors="replace")
        if key == "\r":
            return ENTER
        return key.lower()

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is None:
            return
        try:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self.old_settings)
        except termios.error as e:
            logger.warning("failed to restore terminal settings: %s", e)
        self.old_settings = None
