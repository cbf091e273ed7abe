"""Owned list state: entry collection, filtered view, and cursor identity.

The cursor is stored as an entry identity and resolved through the
collection's lookup table; it is never a raw position or object reference.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .entries import Category, Entry, EntryCollection, StatusRecord
from .filtering import apply_filter
from .navigation import (
    category_index,
    first_selectable_index,
    last_selectable_index,
    nearest_selectable_index,
    step_indices,
)

logger = logging.getLogger(__name__)


@dataclass
class StatusList:
    entries: EntryCollection = field(default_factory=EntryCollection)
    view: list[Entry] = field(default_factory=list)
    term: str = ""
    cursor: int | None = None

    def replace_entries(self, records: Iterable[StatusRecord], preferred_index: int | None = None) -> None:
        """Rebuild the collection wholesale and re-filter with the active term.

        Identities of the previous collection are gone after this call, so the
        cursor is re-resolved from ``preferred_index`` (a pre-refresh view
        index) or falls back to the first selectable entry.
        """
        self.entries = EntryCollection.from_records(records)
        self.view = apply_filter(self.entries, self.term)
        logger.debug("refreshed %d entries, %d visible", len(self.entries), len(self.view))
        if preferred_index is not None:
            self.select_index(preferred_index)
        else:
            self.resolve_cursor()

    def apply_filter(self, term: str) -> None:
        self.term = term
        self.view = apply_filter(self.entries, term)
        self.resolve_cursor()

    def resolve_cursor(self) -> None:
        """Keep the cursor when its entry is visible, else select the first entry."""
        if not self.view:
            self.cursor = None
            return
        if self.selected_index() is None:
            self.select_first()

    def selected(self) -> Entry | None:
        """Return the selected entry when it is part of the current view."""
        idx = self.selected_index()
        return None if idx is None else self.view[idx]

    def selected_index(self) -> int | None:
        entry = self.entries.lookup(self.cursor)
        if entry is None:
            return None
        for idx, candidate in enumerate(self.view):
            if candidate is entry:
                return idx
        return None

    def _select_view_index(self, idx: int | None) -> None:
        if idx is not None:
            self.cursor = self.view[idx].identity

    def select_first(self) -> None:
        self._select_view_index(first_selectable_index(self.view))

    def select_last(self) -> None:
        self._select_view_index(last_selectable_index(self.view))

    def select_category(self, category: Category) -> None:
        self._select_view_index(category_index(self.view, category))

    def select_index(self, index: int) -> None:
        """Select whatever entry occupies view ``index`` (headers resolve downward)."""
        if not self.view:
            self.cursor = None
            return
        self._select_view_index(nearest_selectable_index(self.view, index))

    def move(self, delta: int, mark_visited: bool = False) -> list[Entry]:
        """Move the cursor ``delta`` selectable rows and return the entries landed on.

        When the cursor is not in the view, the first selectable entry is
        selected instead and ``delta`` is ignored. ``mark_visited`` marks
        every landed-on entry, including the fallback target.
        """
        start = self.selected_index()
        if start is None:
            self.select_first()
            landed = [entry for entry in [self.selected()] if entry is not None]
        else:
            landed = [self.view[idx] for idx in step_indices(self.view, start, delta)]
            if landed:
                self.cursor = landed[-1].identity
        if mark_visited:
            for entry in landed:
                entry.marked = True
        return landed
