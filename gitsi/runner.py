"""Interactive process handoff.

Leaves raw/alternate-screen TUI mode, runs a program in the repository root,
and restores the TUI once it exits. Exit status is ignored; launch failures are
returned as message strings for the status bar instead of raising.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PAGER = "less -RSX -+F"


class ProcessRunner:
    def __init__(
        self,
        cwd: Path,
        disable_tui_mode: Callable[[], None],
        enable_tui_mode: Callable[[], None],
    ) -> None:
        self.cwd = cwd
        self._disable_tui_mode = disable_tui_mode
        self._enable_tui_mode = enable_tui_mode

    def run_interactive(self, argv: list[str], input_text: str | None = None) -> str | None:
        """Run ``argv`` with the terminal handed over, blocking until it exits."""
        if not argv:
            return "Nothing to run."
        logger.debug("handoff: %s", shlex.join(argv))
        self._disable_tui_mode()
        try:
            subprocess.run(
                argv,
                cwd=self.cwd,
                input=input_text,
                text=input_text is not None,
                check=False,
            )
        except OSError as exc:
            return f"Failed to launch {argv[0]}: {exc}"
        finally:
            self._enable_tui_mode()
        return None

    def run_external_command(self, text: str, base_command: str = "git") -> str | None:
        """Run ``base_command`` followed by the shell-split ``text``."""
        try:
            args = shlex.split(text)
        except ValueError as exc:
            return f"Cannot run command: {exc}"
        return self.run_interactive([base_command, *args])

    def page(self, text: str, pager: str = DEFAULT_PAGER) -> str | None:
        """Show ``text`` through ``pager``."""
        try:
            argv = shlex.split(pager)
        except ValueError as exc:
            return f"Invalid pager command: {exc}"
        if not argv:
            argv = shlex.split(DEFAULT_PAGER)
        return self.run_interactive(argv, input_text=text)
