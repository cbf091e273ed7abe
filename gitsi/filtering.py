"""Search-term filtering over an entry collection.

The filtered view references the collection's own ``Entry`` objects, so marks
and selection made through the view mutate the underlying entries.
"""

from __future__ import annotations

from collections.abc import Iterable

from .entries import Entry

MAX_SEARCH_CHARS = 256


def entry_matches(entry: Entry, term: str) -> bool:
    """Return whether ``entry`` belongs in the view for ``term``.

    Headers always match so section banners stay visible under a filter.
    Matching is a case-sensitive substring test against the label only.
    """
    if not term or entry.is_header:
        return True
    return term in entry.label


def apply_filter(entries: Iterable[Entry], term: str) -> list[Entry]:
    """Return the ordered subsequence of ``entries`` visible for ``term``."""
    return [entry for entry in entries if entry_matches(entry, term)]
