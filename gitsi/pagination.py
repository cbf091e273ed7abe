"""Scroll-window and relative line-number computation for the entry list."""

from __future__ import annotations

from collections.abc import Sequence

from .entries import Entry

STATUS_BAR_ROWS = 2


def list_height(terminal_rows: int) -> int:
    """Rows available for list entries once the status bar is reserved."""
    return max(1, terminal_rows - STATUS_BAR_ROWS)


def window_start(cursor_index: int | None, count: int, height: int) -> int:
    """Return the first view index to render so the cursor stays centered.

    The start is ``clamp(cursor - height // 2, 0, max(0, count - height))``
    and is forced to 0 when every entry fits.
    """
    if count < height or cursor_index is None:
        return 0
    upper = max(0, count - height)
    return max(0, min(cursor_index - height // 2, upper))


def relative_line_numbers(
    view: Sequence[Entry],
    start: int,
    height: int,
    cursor_index: int | None,
) -> list[int | None]:
    """Return vi-style relative numbers for ``view[start:start + height]``.

    Each selectable row gets its distance, counted in selectable rows only,
    from the selected row. Headers get ``None``. When the cursor is outside
    the window, distances are measured from the last selectable row.
    """
    rows = list(range(start, min(len(view), start + height)))
    middle = 0
    for idx in rows:
        if view[idx].is_header:
            continue
        middle += 1
        if idx == cursor_index:
            break

    numbers: list[int | None] = []
    ordinal = 0
    for idx in rows:
        if view[idx].is_header:
            numbers.append(None)
            continue
        ordinal += 1
        numbers.append(abs(middle - ordinal))
    return numbers
