"""Per-mode key binding tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """Key tokens bound to one command.

    ``handler`` receives the repeat count. Only ``repeatable`` bindings see the
    typed count; all others are called with 1.
    """

    keys: tuple[str, ...]
    handler: Callable[[int], bool | None]
    repeatable: bool = False


class KeyBindings:
    def __init__(self) -> None:
        self._bindings: dict[str, KeyBinding] = {}

    def bind(self, *bindings: KeyBinding) -> KeyBindings:
        """Register bindings, later ones overriding earlier keys; returns ``self``."""
        for binding in bindings:
            for key in binding.keys:
                self._bindings[key] = binding
        return self

    def dispatch(self, key: str, count: int = 1) -> bool | None:
        """Run the command bound to ``key``.

        Returns ``None`` when ``key`` is unbound, otherwise the handler's result
        (``True`` requests quit).
        """
        binding = self._bindings.get(key)
        if binding is None:
            return None
        return bool(binding.handler(count if binding.repeatable else 1))
