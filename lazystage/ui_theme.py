"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the tree pane and chrome. Diff coloring uses a
separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    badge_new: str
    badge_modified: str
    badge_deleted: str
    badge_renamed: str
    badge_conflicted: str
    badge_untracked: str
    status_line: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    badge_new="\033[38;5;42m",
    badge_modified="\033[38;5;214m",
    badge_deleted="\033[38;5;203m",
    badge_renamed="\033[38;5;81m",
    badge_conflicted="\033[1;38;5;196m",
    badge_untracked="\033[38;5;109m",
    status_line="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    badge_new="\033[38;5;84m",
    badge_modified="\033[38;5;215m",
    badge_deleted="\033[38;5;210m",
    badge_renamed="\033[38;5;117m",
    badge_conflicted="\033[1;38;5;203m",
    badge_untracked="\033[38;5;73m",
    status_line="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    badge_new="",
    badge_modified="",
    badge_deleted="",
    badge_renamed="",
    badge_conflicted="",
    badge_untracked="",
    status_line="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
