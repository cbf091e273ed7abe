"""Input-layer public API: key decoding and modal dispatch.

``read_key`` turns raw terminal bytes into tokens; ``ModalKeyDispatcher``
routes each token to the handler for the current ``Mode``.
"""

from __future__ import annotations

from collections.abc import Callable

from ..state import AppState, Mode
from .key_edit import (
    begin_command,
    begin_search,
    handle_command_key,
    handle_help_key,
    handle_search_key,
)
from .key_normal import NormalKeyContext, NormalKeyHandler
from .key_registry import KeyBinding, KeyBindings
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key


class ModalKeyDispatcher:
    """One handler per mode; returns ``True`` from ``handle`` to request quit."""

    def __init__(
        self,
        state: AppState,
        normal: NormalKeyHandler,
        commit_search: Callable[[str], None],
        run_command: Callable[[str], None],
    ) -> None:
        self.state = state
        self._handlers: dict[Mode, Callable[[str], bool]] = {
            Mode.NORMAL: normal.handle,
            Mode.SEARCH_EDIT: lambda key: handle_search_key(key, state, commit_search),
            Mode.COMMAND_EDIT: lambda key: handle_command_key(key, state, run_command),
            Mode.HELP: lambda key: handle_help_key(key, state),
        }

    def handle(self, key: str) -> bool:
        handler = self._handlers.get(self.state.mode)
        if handler is None:
            return False
        return handler(key)


__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyBindings",
    "ModalKeyDispatcher",
    "NormalKeyContext",
    "NormalKeyHandler",
    "begin_command",
    "begin_search",
    "handle_command_key",
    "handle_help_key",
    "handle_search_key",
]
