"""Process-wide UI state owned by a single ``AppState`` instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .status_list import StatusList

MAX_COUNT_DIGITS = 7


class Mode(Enum):
    NORMAL = "normal"
    SEARCH_EDIT = "search"
    COMMAND_EDIT = "command"
    HELP = "help"
    CONFIRM = "confirm"


@dataclass
class AppState:
    repo_root: Path
    status: StatusList = field(default_factory=StatusList)
    mode: Mode = Mode.NORMAL
    visual_mark_active: bool = False
    count_buffer: str = ""
    edit_buffer: str = ""
    # Committed term restored when a search edit is cancelled.
    search_before_edit: str = ""
    command_buffer: str = ""
    confirm_prompt: str = ""
    confirm_emphasis: bool = False
    status_message: str = ""
    dirty: bool = True
    skip_next_lf: bool = False

    def enter_mode(self, mode: Mode) -> None:
        self.mode = mode
        if mode is not Mode.NORMAL:
            self.visual_mark_active = False
        self.dirty = True
