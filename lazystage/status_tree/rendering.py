"""Formatting helpers for status-tree rows."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme
from .tree import StatusTree
from .types import FileTreeItem, StatusItemType

STATUS_BADGES: dict[StatusItemType, str] = {
    StatusItemType.NEW: "+",
    StatusItemType.MODIFIED: "M",
    StatusItemType.DELETED: "-",
    StatusItemType.RENAMED: "R",
    StatusItemType.TYPECHANGE: "T",
    StatusItemType.CONFLICTED: "!",
    StatusItemType.UNTRACKED: "?",
}


def _badge_color(status: StatusItemType, theme: UITheme) -> str:
    if status is StatusItemType.NEW:
        return theme.badge_new
    if status is StatusItemType.DELETED:
        return theme.badge_deleted
    if status is StatusItemType.RENAMED:
        return theme.badge_renamed
    if status is StatusItemType.CONFLICTED:
        return theme.badge_conflicted
    if status is StatusItemType.UNTRACKED:
        return theme.badge_untracked
    return theme.badge_modified


def format_status_badge(status: StatusItemType | None, theme: UITheme | None = None) -> str:
    """Return the ``[X]`` badge for a file status, or ``""`` without one."""
    if status is None:
        return ""
    active_theme = theme or DEFAULT_THEME
    return f"{_badge_color(status, active_theme)}[{STATUS_BADGES[status]}]{active_theme.reset} "


def format_tree_item(
    item: FileTreeItem,
    selected: bool = False,
    theme: UITheme | None = None,
    show_badges: bool = True,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * item.indent
    if item.is_dir:
        marker = "▸ " if item.collapsed else "▾ "
        row = f"{indent}{active_theme.tree_marker}{marker}{reset}{active_theme.tree_dir}{item.name}/{reset}"
    else:
        badge = format_status_badge(item.status, active_theme) if show_badges else ""
        row = f"{indent}  {badge}{active_theme.tree_file}{item.name}{reset}"
    if selected and active_theme.reverse:
        return f"{active_theme.reverse}{row.replace(reset, reset + active_theme.reverse)}{reset}"
    if selected:
        # Plain theme has no reverse video; mark the cursor with a caret.
        return ">" + row[1:] if row.startswith(" ") else ">" + row
    return row


def tree_scroll_start(visible_position: int, current_start: int, height: int) -> int:
    """Return the first visible row so ``visible_position`` stays on screen."""
    if height <= 0:
        return 0
    if visible_position < current_start:
        return visible_position
    if visible_position >= current_start + height:
        return visible_position - height + 1
    return max(0, current_start)


def render_tree_rows(
    status_tree: StatusTree,
    height: int,
    start: int = 0,
    theme: UITheme | None = None,
    show_badges: bool = True,
) -> tuple[list[str], int]:
    """Render visible rows of ``status_tree`` into at most ``height`` lines.

    Returns ``(rows, start)`` where ``start`` is the adjusted scroll offset
    (in visible-row units) keeping the selection in view.
    """
    visible = list(status_tree.visible_items())
    selected_position = 0
    for position, (idx, _item) in enumerate(visible):
        if idx == status_tree.selection:
            selected_position = position
            break

    start = tree_scroll_start(selected_position, start, height)
    rows = [
        format_tree_item(item, idx == status_tree.selection, theme, show_badges)
        for idx, item in visible[start : start + max(0, height)]
    ]
    return rows, start
