"""Closed set of entry actions and the batch-apply protocol.

Single-entry and batch actions share one dispatcher. Batches locate the
post-action cursor target before mutating anything, because every action is
followed by a wholesale refresh that invalidates entry identities.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .entries import Category, Entry
from .git_backend import GitBackend
from .marks import fallback_cursor_index
from .status_list import StatusList

logger = logging.getLogger(__name__)

CHECKOUT_PROMPT = "Do you really want to reset all changes to this file?"
# Index notes whose path has no HEAD content to restore.
_NOT_IN_HEAD = frozenset({"new file", "renamed", "copied"})


class ActionKind(Enum):
    STAGE = "stage"
    UNSTAGE = "unstage"
    CHECKOUT = "checkout"
    DELETE = "delete"


def resolve_action(kind: ActionKind, entry: Entry) -> ActionKind | None:
    """Specialize ``kind`` for ``entry``'s category; ``None`` means no-op."""
    if entry.is_header:
        return None
    if kind is ActionKind.STAGE and entry.category is Category.INDEX:
        return None
    if kind is ActionKind.UNSTAGE and entry.category is Category.UNTRACKED:
        return ActionKind.DELETE
    if kind is ActionKind.CHECKOUT and entry.category is Category.UNTRACKED:
        return None
    if kind is ActionKind.DELETE and entry.category is not Category.UNTRACKED:
        return None
    return kind


def action_names(entry: Entry | None) -> tuple[str, str]:
    """Return status-bar names for the ``s`` and ``u`` keys on ``entry``."""
    if entry is None or entry.is_header:
        return "", ""
    if entry.category is Category.INDEX:
        return "", "unstage"
    if entry.category is Category.WORKSPACE:
        return "stage", "stage delete"
    return "stage", "delete file"


@dataclass
class ActionDispatcher:
    """Route resolved actions to backend calls, asking for confirmation first."""

    backend: GitBackend
    confirm: Callable[[str], bool]

    def perform(self, kind: ActionKind, entry: Entry) -> bool:
        """Apply ``kind`` to ``entry``; return ``False`` when skipped or declined."""
        resolved = resolve_action(kind, entry)
        if resolved is None:
            return False
        logger.debug("%s %s (%s)", resolved.value, entry.label, entry.category.value)
        if resolved is ActionKind.STAGE:
            self.backend.stage(entry.label)
        elif resolved is ActionKind.UNSTAGE:
            if entry.category is Category.INDEX:
                self.backend.unstage_from_index(entry.label)
            else:
                self.backend.unstage_from_workspace(entry.label)
        elif resolved is ActionKind.DELETE:
            if not self.confirm(f"Delete File '{entry.label}'?"):
                return False
            self.backend.delete_untracked(entry.label)
        elif resolved is ActionKind.CHECKOUT:
            if not self.confirm(CHECKOUT_PROMPT):
                return False
            if entry.category is Category.WORKSPACE and entry.note == "deleted":
                self.backend.discard_workspace_deletion(entry.label)
            elif entry.category is Category.INDEX and entry.note in _NOT_IN_HEAD:
                self.backend.unstage_from_index(entry.label)
            else:
                self.backend.checkout(entry.label)
        return True


def apply_to_marked(
    status: StatusList,
    kind: ActionKind,
    perform: Callable[[ActionKind, Entry], bool],
    refresh: Callable[[int | None], None],
) -> int:
    """Apply ``kind`` to every marked entry, then refresh and re-place the cursor.

    The fallback index is the first unmarked selectable row at or after the
    cursor in the current view. Each entry is unmarked right after its action
    returns; an exception stops the batch with earlier entries already applied
    and unmarked. Returns the number of entries processed.
    """
    fallback = fallback_cursor_index(status)
    processed = 0
    for entry in status.entries.marked():
        perform(kind, entry)
        entry.marked = False
        processed += 1
    logger.debug("batch %s over %d entries, cursor target %s", kind.value, processed, fallback)
    refresh(fallback)
    return processed
