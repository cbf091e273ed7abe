"""Runtime composition layer for gitsi.

Builds initial state, wires backend, actions, dialogs and process handoffs
into the key handlers, and starts the loop.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

from ..actions import ActionDispatcher, ActionKind, apply_to_marked
from ..config import save_search_term
from ..dialog import ConfirmDialog
from ..diff import DEFAULT_STYLE, colorize_diff
from ..git_backend import GitBackend, NoEntriesError
from ..input import ModalKeyDispatcher, NormalKeyContext, NormalKeyHandler, read_key
from ..render import build_frame, context_from_state, write_frame
from ..runner import DEFAULT_PAGER, ProcessRunner
from ..state import AppState
from ..ui_theme import DEFAULT_THEME, UITheme
from .loop import RuntimeLoopCallbacks, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class BrowserApp:
    """Owns one session: state, backend, and the callbacks the loop invokes."""

    def __init__(
        self,
        backend: GitBackend,
        state: AppState,
        runner: ProcessRunner,
        read_key: Callable[[], str],
        *,
        theme: UITheme = DEFAULT_THEME,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
        pager: str = DEFAULT_PAGER,
        write: Callable[[str], None] = write_frame,
        terminal_size: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.backend = backend
        self.state = state
        self.runner = runner
        self.theme = theme
        self.style = style
        self.no_color = no_color
        self.pager = pager
        self._write = write
        self._terminal_size = terminal_size or _current_terminal_size
        self.dialog = ConfirmDialog(state, read_key, self.render_current)
        self.actions = ActionDispatcher(backend, self.dialog.ask)
        normal = NormalKeyHandler(
            NormalKeyContext(
                state=state,
                run_action=self.run_action,
                run_batch=self.run_batch,
                show_diff=self.show_diff,
                add_patch=self.add_patch,
                commit=self.commit,
                push=self.push,
                clear_search=self.clear_search,
            )
        )
        self.keys = ModalKeyDispatcher(state, normal, self.commit_search, self.run_command)

    def load(self, stored_term: str = "") -> None:
        """Run the first refresh, then apply a stored search term once."""
        self.refresh()
        if stored_term:
            self.state.status.apply_filter(stored_term)

    def refresh(self, preferred_index: int | None = None) -> None:
        """Reload status from the backend and rebuild the list wholesale."""
        records = self.backend.get_status()
        if not records:
            raise NoEntriesError("No entries found")
        self.state.status.replace_entries(records, preferred_index)
        self.state.dirty = True

    def render(self, width: int, height: int) -> None:
        self._write(build_frame(context_from_state(self.state, width, height, self.theme)))

    def render_current(self) -> None:
        self.render(*self._terminal_size())

    def handle_key(self, key: str) -> bool:
        logger.debug("key %r in %s mode", key, self.state.mode.value)
        return self.keys.handle(key)

    def run_action(self, kind: ActionKind) -> None:
        status = self.state.status
        entry = status.selected()
        if entry is None:
            return
        index = status.selected_index()
        if self.actions.perform(kind, entry):
            self.refresh(index)

    def run_batch(self, kind: ActionKind) -> None:
        status = self.state.status
        if not status.entries.marked():
            return
        apply_to_marked(status, kind, self.actions.perform, self.refresh)

    def _handoff(self, argv: list[str]) -> None:
        """Run an interactive program, then reload whatever it changed."""
        index = self.state.status.selected_index()
        self._report(self.runner.run_interactive(argv))
        self.refresh(index)

    def _report(self, message: str | None) -> None:
        if message:
            logger.debug("status message: %s", message)
            self.state.status_message = message
        self.state.dirty = True

    def show_diff(self) -> None:
        entry = self.state.status.selected()
        if entry is None:
            return
        text = self.backend.diff_text(entry.label, entry.category)
        if not text.strip():
            self._report(f"No diff for {entry.label}")
            return
        self._report(self.runner.page(colorize_diff(text, self.style, self.no_color), self.pager))

    def add_patch(self) -> None:
        entry = self.state.status.selected()
        if entry is None:
            return
        self._handoff(self.backend.add_patch_argv(entry.label))

    def commit(self, amend: bool) -> None:
        self._handoff(self.backend.commit_argv(amend))

    def push(self) -> None:
        self._handoff(self.backend.push_argv())

    def run_command(self, text: str) -> None:
        index = self.state.status.selected_index()
        self._report(self.runner.run_external_command(text))
        self.refresh(index)

    def commit_search(self, term: str) -> None:
        save_search_term(term)

    def clear_search(self) -> None:
        self.state.status.apply_filter("")
        save_search_term("")


def _current_terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def run_browser(
    backend: GitBackend,
    *,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    pager: str = DEFAULT_PAGER,
    stored_term: str = "",
) -> None:
    """Initialize session state, wire subsystems, and run the event loop."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = AppState(repo_root=backend.repo_root)
    runner = ProcessRunner(backend.repo_root, terminal.disable_tui_mode, terminal.enable_tui_mode)
    app = BrowserApp(
        backend,
        state,
        runner,
        lambda: read_key(stdin_fd),
        theme=theme,
        style=style,
        no_color=no_color,
        pager=pager,
    )
    # Fails before the terminal is touched when there is nothing to show.
    app.load(stored_term)
    run_main_loop(
        state,
        terminal,
        stdin_fd,
        RuntimeLoopCallbacks(render=app.render, handle_key=app.handle_key),
    )
