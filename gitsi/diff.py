"""Diff text sanitization and Pygments colorizing for the pager handoff."""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style or style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_diff(diff_text: str, style: str | None = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return pager-ready diff text, highlighted unless ``no_color`` is set."""
    text = sanitize_terminal_text(diff_text)
    if no_color or not text:
        return text
    return highlight(text, DiffLexer(), _formatter_for_style(normalize_style(style)))
