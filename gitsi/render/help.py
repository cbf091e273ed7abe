"""Keybinding table and the full-screen help page.

``HELP_ENTRIES`` drives both the status-bar hints and the help page. The
``s``/``u`` names are placeholders resolved from the selected entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_ansi_line
from ..ui_theme import UITheme

ACTION_A = "ACTION_A"
ACTION_B = "ACTION_B"
REPEAT_HINT = "Use 1-9 before j/k/C-d/C-u to repeat the action [like vi]"
HELP_TITLE = "Help [Press any key to go back]"
STATUS_HELP_ITEM = "[h: HELP]"


@dataclass(frozen=True)
class HelpEntry:
    key: str
    name: str
    desc: str


HELP_ENTRIES: tuple[HelpEntry, ...] = (
    HelpEntry("j", "down", "Go to the next line"),
    HelpEntry("k", "up", "Go to the previous line"),
    HelpEntry("s", ACTION_A, "Add file or stage changes"),
    HelpEntry("u", ACTION_B, "Unstage changes or delete file"),
    HelpEntry("/", "filter", "Filter the list of files"),
    HelpEntry("q", "quit", "Quit the program"),
    HelpEntry("d", "diff", "Run `git diff` on the selected file"),
    HelpEntry("i", "add -p", "Run git interactive add on the selected file"),
    HelpEntry("c", "commit", "Run `git commit`"),
    HelpEntry("p", "push", "Run `git push`"),
    HelpEntry(":", "git", "Run any git command, e.g. `:log --oneline`"),
    HelpEntry("C-d", "jump down", "Jump half a screen down"),
    HelpEntry("C-u", "jump up", "Jump half a screen up"),
    HelpEntry("!", "go index", "Jump to the index [Shift 1]"),
    HelpEntry("@", "go workspace", "Jump to the workspace [Shift 2]"),
    HelpEntry("#", "go untracked", "Jump to the untracked [Shift 3]"),
    HelpEntry("G", "bottom", "Jump to the bottom of the list"),
    HelpEntry("g", "top", "Jump to the top of the list"),
    HelpEntry("m", "mark", "Mark / Unmark the selected file"),
    HelpEntry("M", "mark section", "Mark / Unmark all files in section"),
    HelpEntry("V", "visual mark mode", "Toggle Visual Mark mode to mark files by moving. ESC cancels"),
    HelpEntry("C", "amend", "Run `git commit --amend`"),
    HelpEntry("S", "s action on marked", "Perform the add/stage action on all marked files"),
    HelpEntry("U", "u action on marked", "Perform the unstage/delete action on all marked files"),
    HelpEntry("x", "Reset", "Remove / Reset all changes this file has. Like `git checkout -- file`"),
    HelpEntry("ESC", "cancel", "Clear the filter, or leave Visual Mark mode and unmark everything"),
)


def status_help_items(action_a: str, action_b: str) -> list[str]:
    """Return ``[key: name]`` items with placeholder names resolved.

    Entries whose resolved name is empty are omitted.
    """
    items: list[str] = []
    for entry in HELP_ENTRIES:
        name = entry.name
        if name == ACTION_A:
            name = action_a
        elif name == ACTION_B:
            name = action_b
        if not name:
            continue
        items.append(f"[{entry.key}: {name}]")
    return items


def build_status_help_line(width: int, action_a: str, action_b: str) -> str:
    """Fit as many help items as possible, with ``[h: HELP]`` right-aligned."""
    help_position = max(0, width - (1 + len(STATUS_HELP_ITEM)))
    remaining = help_position - 1
    parts: list[str] = [" "]
    for item in status_help_items(action_a, action_b):
        remaining -= len(item) + 1
        if remaining < 0:
            break
        parts.append(item + " ")
    left = "".join(parts)
    if len(left) > help_position:
        left = left[:help_position]
    return left.ljust(help_position) + STATUS_HELP_ITEM


def help_page_lines(theme: UITheme) -> list[str]:
    """Return the full help page rows, top to bottom."""
    key_width = max(len(entry.key) for entry in HELP_ENTRIES) + 2
    lines = [
        "",
        f"  {theme.help_heading}{HELP_TITLE}{theme.reset}",
        "",
    ]
    for entry in HELP_ENTRIES:
        key = f"[{entry.key}]".ljust(key_width)
        lines.append(f"  {theme.help_key}{key}{theme.reset}  {entry.desc}")
    lines.append("")
    lines.append(f"  {REPEAT_HINT}")
    return lines


def render_help_page(width: int, height: int, theme: UITheme) -> str:
    """Compose the help page as a full-screen frame string."""
    out: list[str] = ["\033[H\033[J"]
    lines = help_page_lines(theme)
    for row in range(max(0, height)):
        if row < len(lines):
            out.append(clip_ansi_line(lines[row], max(1, width - 1)))
            out.append(theme.reset)
        out.append("\033[K")
        if row + 1 < height:
            out.append("\r\n")
    return "".join(out)
