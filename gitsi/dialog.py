"""Blocking yes/no confirmation prompt.

This is the only nested read loop: it keeps reading keys until the user
answers, re-rendering the prompt with emphasis after any other key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .state import AppState, Mode

logger = logging.getLogger(__name__)

YES_KEYS = frozenset({"y", "Y"})
NO_KEYS = frozenset({"n", "N"})


class ConfirmDialog:
    def __init__(
        self,
        state: AppState,
        read_key: Callable[[], str],
        render: Callable[[], None],
    ) -> None:
        self.state = state
        self._read_key = read_key
        self._render = render

    def ask(self, prompt: str) -> bool:
        """Show ``prompt`` and block until a yes/no key arrives."""
        state = self.state
        previous_mode = state.mode
        previous_visual = state.visual_mark_active
        state.mode = Mode.CONFIRM
        state.confirm_prompt = prompt
        state.confirm_emphasis = False
        try:
            while True:
                self._render()
                key = self._read_key()
                if key in YES_KEYS:
                    answer = True
                    break
                if key in NO_KEYS:
                    answer = False
                    break
                state.confirm_emphasis = True
        finally:
            state.mode = previous_mode
            state.visual_mark_active = previous_visual
            state.confirm_prompt = ""
            state.confirm_emphasis = False
            state.dirty = True
        logger.debug("confirm %r -> %s", prompt, answer)
        return answer
