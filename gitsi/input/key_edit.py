"""Line-editing modes: search filter entry and free-form git commands."""

from __future__ import annotations

from collections.abc import Callable

from ..filtering import MAX_SEARCH_CHARS
from ..state import AppState, Mode


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def begin_search(state: AppState) -> None:
    """Enter SearchEdit, seeding the buffer with the committed term."""
    state.search_before_edit = state.status.term
    state.edit_buffer = state.status.term
    state.enter_mode(Mode.SEARCH_EDIT)


def begin_command(state: AppState) -> None:
    state.command_buffer = ""
    state.enter_mode(Mode.COMMAND_EDIT)


def handle_search_key(key: str, state: AppState, commit_search: Callable[[str], None]) -> bool:
    """Edit the search buffer, re-filtering on every change.

    Enter keeps the filter and calls ``commit_search``; Esc restores the term
    that was active before editing began.
    """
    status = state.status
    state.dirty = True
    if key == "ENTER":
        state.enter_mode(Mode.NORMAL)
        if status.selected() is None:
            status.select_first()
        commit_search(status.term)
        return False
    if key == "ESC":
        state.edit_buffer = ""
        status.apply_filter(state.search_before_edit)
        state.enter_mode(Mode.NORMAL)
        return False
    if key == "BACKSPACE":
        if state.edit_buffer:
            state.edit_buffer = state.edit_buffer[:-1]
            status.apply_filter(state.edit_buffer)
        return False
    if is_printable_key(key) and len(state.edit_buffer) < MAX_SEARCH_CHARS:
        state.edit_buffer += key
        status.apply_filter(state.edit_buffer)
    return False


def handle_command_key(key: str, state: AppState, run_command: Callable[[str], None]) -> bool:
    """Edit the command buffer; Enter hands the text to ``run_command``."""
    state.dirty = True
    if key == "ENTER":
        text = state.command_buffer
        state.command_buffer = ""
        state.enter_mode(Mode.NORMAL)
        if text.strip():
            run_command(text)
        return False
    if key == "ESC":
        state.command_buffer = ""
        state.enter_mode(Mode.NORMAL)
        return False
    if key == "BACKSPACE":
        state.command_buffer = state.command_buffer[:-1]
        return False
    if is_printable_key(key) and len(state.command_buffer) < MAX_SEARCH_CHARS:
        state.command_buffer += key
    return False


def handle_help_key(_key: str, state: AppState) -> bool:
    """Any key closes the help overlay."""
    state.enter_mode(Mode.NORMAL)
    return False
