"""Shared builders for status-list fixtures."""

from __future__ import annotations

from pathlib import Path

from gitsi.entries import Category, StatusRecord
from gitsi.state import AppState
from gitsi.status_list import StatusList

I = Category.INDEX
W = Category.WORKSPACE
U = Category.UNTRACKED


def records(*rows: tuple[str, str, Category]) -> list[StatusRecord]:
    return [StatusRecord(label, note, category) for label, note, category in rows]


def make_status(*rows: tuple[str, str, Category], term: str = "") -> StatusList:
    status = StatusList(term=term)
    status.replace_entries(records(*rows))
    return status


def make_state(*rows: tuple[str, str, Category]) -> AppState:
    return AppState(repo_root=Path("/tmp"), status=make_status(*rows))


def labels(entries) -> list[str]:
    return [entry.label for entry in entries]


def selected_label(status: StatusList) -> str | None:
    entry = status.selected()
    return None if entry is None else entry.label
