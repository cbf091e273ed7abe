"""Main interactive event loop for the terminal UI.

Renders when state is dirty, decodes one key at a time, and hands it to the
modal dispatcher. Feature logic lives in callbacks.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[int, int], None]
    handle_key: Callable[[str], bool]


def normalize_enter(state: AppState, key: str) -> str | None:
    """Collapse CR, LF and CRLF into one ``ENTER``; ``None`` means drop the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the main interactive TUI loop until a quit action occurs.

    Each iteration re-renders on resize or state change, then waits briefly
    for a key. Any key dismisses a pending status message.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.dirty = True
            if state.dirty:
                callbacks.render(term.columns, term.lines)
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                logger.debug("interrupted")
                break
            if key == "":
                continue
            normalized = normalize_enter(state, key)
            if normalized is None:
                continue

            if state.status_message:
                state.status_message = ""
                state.dirty = True
            if callbacks.handle_key(normalized):
                break
