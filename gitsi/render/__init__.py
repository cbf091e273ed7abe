"""Rendering engine for the status list view.

Frames are composed as plain strings by pure functions and written to stdout
in one ``os.write``. Nothing here mutates runtime state.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..actions import action_names
from ..ansi import clip_ansi_line, pad_ansi_line
from ..entries import Entry
from ..pagination import list_height, relative_line_numbers, window_start
from ..state import AppState, Mode
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import build_status_help_line, render_help_page

LABEL_COLUMN = 6
NOTE_WIDTH = 11
SEARCH_HELP = "[Enter: back to list] [Escape: Cancel]"
SEARCH_HELP_SHORT = "[ENTER|ESC]"


@dataclass
class RenderContext:
    view: Sequence[Entry]
    cursor_index: int | None
    width: int
    height: int
    theme: UITheme = DEFAULT_THEME
    mode: Mode = Mode.NORMAL
    visual_mark_active: bool = False
    term: str = ""
    edit_buffer: str = ""
    command_buffer: str = ""
    count_buffer: str = ""
    confirm_prompt: str = ""
    confirm_emphasis: bool = False
    status_message: str = ""
    action_names: tuple[str, str] = field(default=("", ""))


def context_from_state(state: AppState, width: int, height: int, theme: UITheme) -> RenderContext:
    status = state.status
    return RenderContext(
        view=status.view,
        cursor_index=status.selected_index(),
        width=width,
        height=height,
        theme=theme,
        mode=state.mode,
        visual_mark_active=state.visual_mark_active,
        term=status.term,
        edit_buffer=state.edit_buffer,
        command_buffer=state.command_buffer,
        count_buffer=state.count_buffer,
        confirm_prompt=state.confirm_prompt,
        confirm_emphasis=state.confirm_emphasis,
        status_message=state.status_message,
        action_names=action_names(status.selected()),
    )


def format_entry_row(entry: Entry, number: int | None) -> str:
    """Return the unstyled text of one list row.

    Entry rows are ``"%3d "`` + mark at column 6 + note right-aligned in 11
    columns + label, separated by tab stops. Headers show only their title
    at column 6.
    """
    if entry.is_header:
        return " " * LABEL_COLUMN + entry.label
    prefix = f"{number if number is not None else 0:3d} ".ljust(LABEL_COLUMN)
    mark = "*" if entry.marked else " "
    return f"{prefix}{mark}\t{entry.note:>{NOTE_WIDTH}}\t{entry.label}".expandtabs()


def _row_style(context: RenderContext, entry: Entry, selected: bool) -> str:
    theme = context.theme
    if context.visual_mark_active and (selected or entry.marked):
        style = theme.visual_select
    elif selected:
        style = ""
    else:
        style = theme.category_color(entry.category)
    if selected:
        style = theme.reverse + style
    return style


def build_list_rows(context: RenderContext) -> list[str]:
    """Return exactly ``list_height`` styled rows for the visible window."""
    height = list_height(context.height)
    width = max(1, context.width - 1)
    theme = context.theme
    start = window_start(context.cursor_index, len(context.view), height)
    numbers = relative_line_numbers(context.view, start, height, context.cursor_index)

    rows: list[str] = []
    for offset, number in enumerate(numbers):
        idx = start + offset
        entry = context.view[idx]
        text = format_entry_row(entry, number)
        style = _row_style(context, entry, idx == context.cursor_index)
        row_width = width
        if offset == 0 and context.count_buffer:
            row_width = max(0, width - len(context.count_buffer))
        padded = pad_ansi_line(text, row_width)
        rows.append(f"{style}{padded}{theme.reset}" if style else padded)
    while len(rows) < height:
        rows.append("")

    if context.count_buffer and rows:
        if not numbers:
            rows[0] = " " * max(0, width - len(context.count_buffer))
        rows[0] = rows[0] + context.count_buffer[-width:]
    return rows


def _search_bar(query_prefix: str, query: str, width: int) -> str:
    left = f" {query_prefix}{query}"
    if width - (len(query) + 4) > len(SEARCH_HELP):
        hint = SEARCH_HELP
    else:
        hint = SEARCH_HELP_SHORT
    hint_col = max(0, width - (len(hint) + 1))
    if len(left) >= hint_col:
        return left
    return left.ljust(hint_col) + hint


def build_status_bar(context: RenderContext) -> str:
    """Return the styled bottom row for the current mode."""
    width = max(1, context.width - 1)
    theme = context.theme
    if context.mode is Mode.CONFIRM:
        emphasis = "PLEASE ENTER " if context.confirm_emphasis else ""
        text = f"    {emphasis}{context.confirm_prompt} [Y]es or [N]o"
    elif context.status_message:
        text = f" {context.status_message}"
    elif context.mode is Mode.SEARCH_EDIT:
        text = _search_bar("/", context.edit_buffer, width)
    elif context.mode is Mode.COMMAND_EDIT:
        text = _search_bar(":git ", context.command_buffer, width)
    elif context.term:
        text = _search_bar("/", context.term, width)
    else:
        text = build_status_help_line(width, *context.action_names)
    return f"{theme.status_bar}{pad_ansi_line(text, width)}{theme.reset}"


def build_frame(context: RenderContext) -> str:
    """Compose the complete screen for ``context``."""
    if context.mode is Mode.HELP:
        return render_help_page(context.width, context.height, context.theme)

    rows = build_list_rows(context)
    rows.append("")
    rows.append(build_status_bar(context))
    rows = rows[-max(1, context.height):]

    out: list[str] = ["\033[H\033[J"]
    out.append("\r\n".join(clip_ansi_line(row, context.width) + "\033[K" if row else "\033[K" for row in rows))
    return "".join(out)


def write_frame(frame: str) -> None:
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_frame",
    "build_list_rows",
    "build_status_bar",
    "context_from_state",
    "format_entry_row",
    "write_frame",
]
