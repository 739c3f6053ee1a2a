"""Interactive status view: polling, key dispatch, and frame rendering.

The loop is single-threaded. Git status is re-collected between key reads
whenever the refresh interval has elapsed, and every refresh rebuilds the
status tree wholesale. ``c`` opens a commit-message popup over the panes.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .ansi import clip_ansi_line, display_width
from .diff_preview import render_diff, sanitize_terminal_text
from .git_status import CommitResult, Diff, collect_status_items, commit, get_diff
from .input import read_key
from .layout import Rect, centered_rect, split_columns
from .status_tree import MoveSelection, StatusItem, StatusItemType, StatusTree, render_tree_rows
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

KEY_MOVES: dict[str, MoveSelection] = {
    "UP": MoveSelection.UP,
    "k": MoveSelection.UP,
    "DOWN": MoveSelection.DOWN,
    "j": MoveSelection.DOWN,
    "LEFT": MoveSelection.LEFT,
    "h": MoveSelection.LEFT,
    "RIGHT": MoveSelection.RIGHT,
    "l": MoveSelection.RIGHT,
}
QUIT_KEYS = {"q", "ESC", "CTRL_C"}
COMMIT_KEY = "c"
BADGES_KEY = "b"
COMMIT_POPUP_PERCENT = (60, 20)
COMMIT_POPUP_MIN_HEIGHT = 4
RESET = "\x1b[0m"


@dataclass
class StatusViewSettings:
    style: str = "monokai"
    no_color: bool = False
    refresh_seconds: float = 2.0
    show_badges: bool = True
    theme: UITheme = DEFAULT_THEME


@dataclass
class StatusViewState:
    root: Path
    tree: StatusTree = field(default_factory=StatusTree)
    tree_start: int = 0
    diff_path: str | None = None
    diff_rows: list[str] = field(default_factory=list)
    last_refresh: float = 0.0
    dirty: bool = True
    # ``None`` while the commit popup is closed.
    commit_message: str | None = None
    commit_error: str = ""
    notice: str = ""


def _first_line(text: str) -> str:
    return sanitize_terminal_text(text.strip().splitlines()[0]) if text.strip() else ""


class StatusView:
    """Owns one ``StatusTree`` and wires it to git, keys, and rendering."""

    def __init__(
        self,
        root: Path,
        settings: StatusViewSettings | None = None,
        *,
        collect_status: Callable[[Path], list[StatusItem]] = collect_status_items,
        load_diff: Callable[[Path, str, bool], Diff] = get_diff,
        commit_changes: Callable[[Path, str], CommitResult] = commit,
        save_show_badges: Callable[[bool], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or StatusViewSettings()
        self.state = StatusViewState(root=root)
        self._collect_status = collect_status
        self._load_diff = load_diff
        self._commit_changes = commit_changes
        self._save_show_badges = save_show_badges
        self._clock = clock

    def refresh(self) -> None:
        """Re-collect git status and rebuild the tree."""
        self.state.tree.update(self._collect_status(self.state.root))
        self.state.last_refresh = self._clock()
        self.state.diff_path = None
        self.state.dirty = True

    def maybe_refresh(self) -> None:
        if self._clock() - self.state.last_refresh >= self.settings.refresh_seconds:
            self.refresh()

    def collapse_paths(self, paths: list[str]) -> None:
        """Collapse the named directories (unknown paths are ignored)."""
        tree = self.state.tree.tree
        for path in paths:
            idx = tree.index_of(path.strip("/"))
            if idx is not None and tree[idx].is_dir:
                self.state.tree.collapse(tree[idx].full_path, idx)
        self.state.dirty = True

    @property
    def commit_popup_open(self) -> bool:
        return self.state.commit_message is not None

    def handle_key(self, key: str) -> bool:
        """Dispatch one key; return ``False`` when the view should close."""
        if self.commit_popup_open:
            self._handle_commit_key(key)
            return True
        if self.state.notice:
            self.state.notice = ""
            self.state.dirty = True
        if key in QUIT_KEYS:
            return False
        if key == "r":
            self.refresh()
            return True
        if key == COMMIT_KEY:
            self.state.commit_message = ""
            self.state.commit_error = ""
            self.state.dirty = True
            return True
        if key == BADGES_KEY:
            self.settings.show_badges = not self.settings.show_badges
            if self._save_show_badges is not None:
                self._save_show_badges(self.settings.show_badges)
            self.state.dirty = True
            return True
        move = KEY_MOVES.get(key)
        if move is not None and self.state.tree.move_selection(move):
            self.state.dirty = True
        return True

    def _handle_commit_key(self, key: str) -> None:
        message = self.state.commit_message or ""
        if key in {"ESC", "CTRL_C"}:
            self.state.commit_message = None
        elif key == "ENTER":
            self._submit_commit(message)
        elif key == "BACKSPACE":
            self.state.commit_message = message[:-1]
        elif len(key) == 1 and key.isprintable():
            self.state.commit_message = message + key
        else:
            return
        self.state.dirty = True

    def _submit_commit(self, message: str) -> None:
        result = self._commit_changes(self.state.root, message)
        if not result.ok:
            logger.debug("commit failed: %s", result.output)
            self.state.commit_error = _first_line(result.output) or "commit failed"
            return
        self.state.commit_message = None
        self.state.commit_error = ""
        self.state.notice = _first_line(result.output) or "committed"
        self.refresh()

    def selected_diff_rows(self) -> list[str]:
        """Return rendered diff rows for the selected file, cached per path."""
        item = self.state.tree.selected_item()
        if item is None or item.is_dir:
            self.state.diff_path = None
            self.state.diff_rows = []
            return []
        if item.full_path != self.state.diff_path:
            untracked = item.status is StatusItemType.UNTRACKED
            diff = self._load_diff(self.state.root, item.full_path, untracked)
            self.state.diff_rows = render_diff(diff, self.settings.style, self.settings.no_color)
            self.state.diff_path = item.full_path
        return self.state.diff_rows

    def render_frame(self, columns: int, rows: int) -> str:
        """Return one full-screen frame as ANSI text.

        Every pane row is clipped to its pane width. While the commit popup is
        open the frame ends with the cursor at the end of the message.
        """
        theme = self.settings.theme
        columns = max(1, columns)
        body = Rect(0, 0, columns, max(1, rows - 1))
        tree_rect, diff_rect = split_columns(body)

        tree_rows, self.state.tree_start = render_tree_rows(
            self.state.tree,
            tree_rect.height,
            self.state.tree_start,
            theme,
            self.settings.show_badges,
        )
        diff_rows = self.selected_diff_rows()

        out = ["\x1b[H\x1b[2J"]
        for row in range(body.height):
            if row > 0:
                out.append("\r\n")
            if row < len(tree_rows):
                out.append(clip_ansi_line(tree_rows[row], tree_rect.width) + RESET)
            out.append(f"\x1b[{row + 1};{diff_rect.x}H{theme.divider}│{theme.reset}")
            if row < len(diff_rows):
                out.append(clip_ansi_line(diff_rows[row], diff_rect.width) + RESET)
            out.append("\x1b[K")
        out.append("\r\n")
        out.append(f"{theme.status_line}{clip_ansi_line(self.status_line(), columns)}{theme.reset}")
        if self.commit_popup_open:
            out.append(self._render_commit_popup(Rect(0, 0, columns, max(1, rows))))
        return "".join(out)

    def commit_popup_rect(self, screen: Rect) -> Rect:
        """Return the popup box centered in ``screen``, at least four rows tall."""
        popup = centered_rect(*COMMIT_POPUP_PERCENT, screen)
        if popup.height >= COMMIT_POPUP_MIN_HEIGHT:
            return popup
        height = min(COMMIT_POPUP_MIN_HEIGHT, screen.height)
        return Rect(popup.x, screen.y + (screen.height - height) // 2, popup.width, height)

    def _render_commit_popup(self, screen: Rect) -> str:
        theme = self.settings.theme
        popup = self.commit_popup_rect(screen)
        inner = max(0, popup.width - 2)
        if inner == 0 or popup.height < 2:
            return ""

        message = self.state.commit_message or ""
        # Keep the end of a long message in view, leaving a cell for the cursor.
        shown = message
        while shown and display_width(shown) > inner - 1:
            shown = shown[1:]
        title = clip_ansi_line(" Commit message (Enter commit, Esc cancel) ", inner)
        error = clip_ansi_line(self.state.commit_error, inner)

        lines = [f"┌{title}{'─' * (inner - display_width(title))}┐"]
        for body_row in range(popup.height - 2):
            text = shown if body_row == 0 else error if body_row == 1 else ""
            lines.append(f"│{text}{' ' * (inner - display_width(text))}│")
        lines.append(f"└{'─' * inner}┘")

        out = []
        for offset, line in enumerate(lines):
            out.append(f"\x1b[{popup.y + offset + 1};{popup.x + 1}H{theme.divider}{line}{theme.reset}")
        cursor_col = popup.x + 2 + display_width(shown)
        out.append(f"\x1b[{popup.y + 2};{cursor_col}H")
        return "".join(out)

    def status_line(self) -> str:
        hint = self.state.notice or "arrows/hjkl move, c commit, b badges, r refresh, q quit"
        if self.state.tree.is_empty():
            return f"{self.state.root}: working tree clean  ({hint})"
        item = self.state.tree.selected_item()
        selected = item.full_path if item is not None else ""
        return f"{self.state.root}: {selected}  ({hint})"


def run_status_view(view: StatusView, stdin_fd: int | None = None, stdout_fd: int | None = None) -> None:
    """Run the interactive loop until a quit key is pressed."""
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)
    poll_ms = max(50, int(view.settings.refresh_seconds * 1000))

    with terminal.raw_mode():
        last_size: os.terminal_size | None = None
        while True:
            size = shutil.get_terminal_size((80, 24))
            if size != last_size:
                last_size = size
                view.state.dirty = True
            if view.state.dirty:
                terminal.write(view.render_frame(size.columns, size.lines))
                terminal.set_cursor_visible(view.commit_popup_open)
                view.state.dirty = False

            key = read_key(stdin_fd, timeout_ms=poll_ms)
            if key and not view.handle_key(key):
                logger.debug("status view closed by %r", key)
                return
            if not view.commit_popup_open:
                view.maybe_refresh()
