"""Per-entry, section-wide, and visual-mode marking."""

from __future__ import annotations

from .entries import Entry
from .status_list import StatusList


def toggle_mark(entry: Entry | None) -> None:
    if entry is None or entry.is_header:
        return
    entry.marked = not entry.marked


def toggle_section(status: StatusList, entry: Entry | None) -> None:
    """Set every entry in ``entry``'s category to the negation of its own mark.

    This unifies the section rather than flipping each entry individually.
    """
    if entry is None or entry.is_header:
        return
    target = not entry.marked
    for candidate in status.entries.in_category(entry.category):
        candidate.marked = target


def enter_visual_mode(status: StatusList) -> None:
    """Mark the current selection as the first row of a visual drag."""
    entry = status.selected()
    if entry is not None:
        entry.marked = True


def cancel_visual_mode(status: StatusList) -> None:
    """Unmark every entry in the full collection, not only the visual session's."""
    status.entries.clear_marks()


def fallback_cursor_index(status: StatusList) -> int | None:
    """Find the first unmarked selectable view index at or after the cursor.

    Computed before a batch mutates anything; the index is re-applied to the
    rebuilt view afterwards.
    """
    start = status.selected_index()
    if start is None:
        start = 0
    for idx in range(start, len(status.view)):
        entry = status.view[idx]
        if entry.is_header or entry.marked:
            continue
        return idx
    return None
