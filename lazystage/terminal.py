"""Terminal control helpers for the status view session.

Owns raw-mode lifecycle, the alternate screen, and cursor visibility (the
cursor is hidden except while a text prompt is open).
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ALT_SCREEN_ON = b"\x1b[?1049h"
ALT_SCREEN_OFF = b"\x1b[?1049l"
CURSOR_SHOW = b"\x1b[?25h"
CURSOR_HIDE = b"\x1b[?25l"


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.cursor_visible = True

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ALT_SCREEN_ON)
        self.set_cursor_visible(False)

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state."""
        self.set_cursor_visible(True)
        os.write(self.stdout_fd, ALT_SCREEN_OFF)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def set_cursor_visible(self, visible: bool) -> None:
        """Show or hide the cursor; repeated calls with the same value write nothing."""
        if visible == self.cursor_visible:
            return
        os.write(self.stdout_fd, CURSOR_SHOW if visible else CURSOR_HIDE)
        self.cursor_visible = visible

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the session with TUI enter/exit, restoring on errors."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
