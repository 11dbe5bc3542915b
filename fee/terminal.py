"""Terminal control for the browser session.

Owns the raw-mode lifecycle: entering it around the event loop, leaving it
while an editor runs, and always restoring the saved tty state on the way
out, including when an exception unwinds the loop.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[2J\x1b[H"
LEAVE_TUI_SEQUENCE = b"\x1b[0m\x1b[2J\x1b[H\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.tui_mode_enabled = False

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self.tui_mode_enabled = True

    def disable_tui_mode(self) -> None:
        """Reset colors, clear, show the cursor and restore line-mode input."""
        os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        self.tui_mode_enabled = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    def viewport_height(self) -> int:
        """Rows available for entries; the last row is reserved for status."""
        return max(1, self.size().lines - 1)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

