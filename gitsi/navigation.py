"""Cursor movement over a filtered view.

Positions are view indices; headers are skipped and never selected.
Movement wraps in selectable-row space, one step per selectable row.
"""

from __future__ import annotations

from collections.abc import Sequence

from .entries import Category, Entry


def selectable_indices(view: Sequence[Entry]) -> list[int]:
    return [idx for idx, entry in enumerate(view) if not entry.is_header]


def first_selectable_index(view: Sequence[Entry]) -> int | None:
    for idx, entry in enumerate(view):
        if not entry.is_header:
            return idx
    return None


def last_selectable_index(view: Sequence[Entry]) -> int | None:
    for idx in range(len(view) - 1, -1, -1):
        if not view[idx].is_header:
            return idx
    return None


def category_index(view: Sequence[Entry], category: Category) -> int | None:
    """Return the first view index whose entry has ``category``."""
    if category is Category.HEADER:
        return None
    for idx, entry in enumerate(view):
        if entry.category is category:
            return idx
    return None


def step_indices(view: Sequence[Entry], start: int, delta: int) -> list[int]:
    """Return every view index landed on while moving ``delta`` rows from ``start``.

    ``start`` must be a selectable index. Stepping past the last selectable
    row lands on the first one (and vice versa); each wrap counts as a single
    step, so moving by the number of selectable rows returns to ``start``.
    """
    selectable = selectable_indices(view)
    if not selectable or delta == 0:
        return []
    try:
        position = selectable.index(start)
    except ValueError:
        return []
    direction = 1 if delta > 0 else -1
    steps = abs(delta)
    count = len(selectable)
    if steps > count:
        # Only the final lap can land on distinct rows.
        position = (position + direction * (steps - count)) % count
        steps = count
    visited: list[int] = []
    for _ in range(steps):
        position = (position + direction) % len(selectable)
        visited.append(selectable[position])
    return visited


def nearest_selectable_index(view: Sequence[Entry], index: int) -> int | None:
    """Resolve a remembered view index to a selectable row.

    Indices past the end clamp to the last row. A header at ``index`` yields
    the next selectable row below it, or the last selectable row when only
    headers follow.
    """
    if not view:
        return None
    index = max(0, min(index, len(view) - 1))
    for idx in range(index, len(view)):
        if not view[idx].is_header:
            return idx
    return last_selectable_index(view)
