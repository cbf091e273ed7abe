"""Normal-mode keyboard handling: movement, marks, actions, and mode switches."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..actions import ActionKind
from ..entries import Category
from ..marks import cancel_visual_mode, enter_visual_mode, toggle_mark, toggle_section
from ..state import MAX_COUNT_DIGITS, AppState, Mode
from .key_edit import begin_command, begin_search
from .key_registry import KeyBinding, KeyBindings

HALF_PAGE_STEP = 10


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: AppState
    run_action: Callable[[ActionKind], None]
    run_batch: Callable[[ActionKind], None]
    show_diff: Callable[[], None]
    add_patch: Callable[[], None]
    commit: Callable[[bool], None]
    push: Callable[[], None]
    clear_search: Callable[[], None]


class NormalKeyHandler:
    """Normal-mode dispatcher with RepeatCount accumulation."""

    def __init__(self, context: NormalKeyContext) -> None:
        self.context = context
        self.bindings = self._build_bindings()

    def handle(self, key: str) -> bool:
        """Handle one key and return ``True`` when the app should quit."""
        state = self.context.state
        state.dirty = True
        if len(key) == 1 and key.isdigit():
            # A leading zero is not a count.
            if key == "0" and not state.count_buffer:
                return False
            if len(state.count_buffer) < MAX_COUNT_DIGITS:
                state.count_buffer += key
            return False

        count = int(state.count_buffer) if state.count_buffer else 1
        state.count_buffer = ""
        return bool(self.bindings.dispatch(key, count))

    def _move(self, delta: int) -> Callable[[int], None]:
        def move(count: int) -> None:
            state = self.context.state
            mark = state.visual_mark_active
            state.status.move(delta, mark_visited=mark)
            if count > 1:
                state.status.move(delta * (count - 1), mark_visited=mark)

        return move

    def _select_category(self, category: Category) -> Callable[[int], None]:
        return lambda _count: self.context.state.status.select_category(category)

    def _action(self, kind: ActionKind, batch: bool = False) -> Callable[[int], None]:
        run = self.context.run_batch if batch else self.context.run_action
        return lambda _count: run(kind)

    def _toggle_mark(self, _count: int) -> None:
        state = self.context.state
        toggle_mark(state.status.selected())

    def _toggle_section(self, _count: int) -> None:
        state = self.context.state
        toggle_section(state.status, state.status.selected())

    def _toggle_visual(self, _count: int) -> None:
        state = self.context.state
        if state.visual_mark_active:
            state.visual_mark_active = False
            return
        state.visual_mark_active = True
        enter_visual_mode(state.status)

    def _cancel(self, _count: int) -> None:
        state = self.context.state
        if state.status.term:
            self.context.clear_search()
        elif state.visual_mark_active:
            cancel_visual_mode(state.status)
            state.visual_mark_active = False

    def _build_bindings(self) -> KeyBindings:
        context = self.context
        state = context.state
        return KeyBindings().bind(
            KeyBinding(("j", "DOWN"), self._move(1), repeatable=True),
            KeyBinding(("k", "UP"), self._move(-1), repeatable=True),
            KeyBinding(("CTRL_D",), self._move(HALF_PAGE_STEP), repeatable=True),
            KeyBinding(("CTRL_U",), self._move(-HALF_PAGE_STEP), repeatable=True),
            KeyBinding(("g", "HOME"), lambda _count: state.status.select_first()),
            KeyBinding(("G", "END"), lambda _count: state.status.select_last()),
            KeyBinding(("!",), self._select_category(Category.INDEX)),
            KeyBinding(("@",), self._select_category(Category.WORKSPACE)),
            KeyBinding(("#",), self._select_category(Category.UNTRACKED)),
            KeyBinding(("s",), self._action(ActionKind.STAGE)),
            KeyBinding(("u",), self._action(ActionKind.UNSTAGE)),
            KeyBinding(("S",), self._action(ActionKind.STAGE, batch=True)),
            KeyBinding(("U",), self._action(ActionKind.UNSTAGE, batch=True)),
            KeyBinding(("x",), self._action(ActionKind.CHECKOUT)),
            KeyBinding(("d",), lambda _count: context.show_diff()),
            KeyBinding(("i",), lambda _count: context.add_patch()),
            KeyBinding(("c",), lambda _count: context.commit(False)),
            KeyBinding(("C",), lambda _count: context.commit(True)),
            KeyBinding(("p",), lambda _count: context.push()),
            KeyBinding(("m",), self._toggle_mark),
            KeyBinding(("M",), self._toggle_section),
            KeyBinding(("V",), self._toggle_visual),
            KeyBinding(("/",), lambda _count: begin_search(state)),
            KeyBinding((":",), lambda _count: begin_command(state)),
            KeyBinding(("h", "?"), lambda _count: state.enter_mode(Mode.HELP)),
            KeyBinding(("ESC",), self._cancel),
            KeyBinding(("q", "CTRL_C"), lambda _count: True),
        )
