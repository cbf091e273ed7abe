"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the category sections and status chrome. Diff
highlighting style is a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .entries import Category


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    index: str
    workspace: str
    untracked: str
    title: str
    visual_select: str
    status_bar: str
    help_heading: str
    help_key: str

    def category_color(self, category: Category) -> str:
        if category is Category.INDEX:
            return self.index
        if category is Category.WORKSPACE:
            return self.workspace
        if category is Category.UNTRACKED:
            return self.untracked
        return self.title


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    index="\033[32m",
    workspace="\033[33m",
    untracked="\033[31m",
    title="\033[36m",
    visual_select="\033[30;46m",
    status_bar="\033[1;7m",
    help_heading="\033[1;36m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    index="\033[38;5;84m",
    workspace="\033[38;5;215m",
    untracked="\033[38;5;203m",
    title="\033[1;38;5;45m",
    visual_select="\033[38;5;16;48;5;39m",
    status_bar="\033[1;7;38;5;39m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

# Reverse video stays on so the cursor row and status bar remain visible.
PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    index="",
    workspace="",
    untracked="",
    title="",
    visual_select="",
    status_bar="\033[7m",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
