"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching. Handoffs to external
programs leave TUI mode and re-enter it through the same pair of calls.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self.active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen buffer and cooked mode."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.active = False

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
