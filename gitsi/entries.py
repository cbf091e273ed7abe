"""Categorized status entries and their synthetic section headers.

Entries are minted with a process-unique integer identity so selection can be
re-located after the collection is rebuilt. Headers are inserted here, never
by the backend.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Section an entry belongs to."""

    INDEX = "Index"
    WORKSPACE = "Workspace"
    UNTRACKED = "Untracked"
    HEADER = "Header"


CATEGORY_ORDER: tuple[Category, ...] = (Category.INDEX, Category.WORKSPACE, Category.UNTRACKED)

_IDENTITIES = itertools.count(1)


@dataclass(frozen=True)
class StatusRecord:
    """One backend-supplied ``(label, note, category)`` tuple."""

    label: str
    note: str
    category: Category


@dataclass(eq=False)
class Entry:
    identity: int
    label: str
    note: str
    category: Category
    # Only meaningful for non-header entries.
    marked: bool = False

    @property
    def is_header(self) -> bool:
        return self.category is Category.HEADER


def new_entry(label: str, note: str, category: Category) -> Entry:
    """Create an entry with a freshly minted identity."""
    return Entry(identity=next(_IDENTITIES), label=label, note=note, category=category)


def new_header(section: Category) -> Entry:
    return new_entry(section.value, "", Category.HEADER)


def _category_rank(record: StatusRecord) -> int:
    return CATEGORY_ORDER.index(record.category)


def build_entries(records: Iterable[StatusRecord]) -> list[Entry]:
    """Build the ordered entry list, inserting one header per non-empty category.

    Records are stably grouped in Index, Workspace, Untracked order, so a
    backend that already delivers grouped records keeps its own ordering.
    """
    ordered = sorted(
        (record for record in records if record.category is not Category.HEADER),
        key=_category_rank,
    )
    out: list[Entry] = []
    current: Category | None = None
    for record in ordered:
        if record.category is not current:
            current = record.category
            out.append(new_header(current))
        out.append(new_entry(record.label, record.note, record.category))
    return out


class EntryCollection:
    """Full ordered entry sequence with an identity lookup table."""

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: list[Entry] = list(entries)
        self._by_identity: dict[int, Entry] = {entry.identity: entry for entry in self._entries}

    @classmethod
    def from_records(cls, records: Iterable[StatusRecord]) -> EntryCollection:
        return cls(build_entries(records))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def lookup(self, identity: int | None) -> Entry | None:
        if identity is None:
            return None
        return self._by_identity.get(identity)

    def marked(self) -> list[Entry]:
        """Return marked non-header entries in collection order."""
        return [entry for entry in self._entries if entry.marked and not entry.is_header]

    def clear_marks(self) -> None:
        for entry in self._entries:
            entry.marked = False

    def in_category(self, category: Category) -> list[Entry]:
        return [entry for entry in self._entries if entry.category is category]
