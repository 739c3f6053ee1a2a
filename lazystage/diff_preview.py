"""Diff-pane rendering with Pygments.

Turns a parsed ``Diff`` into terminal rows. Each row is colored from the
line classification done by ``git_status.parse_diff``, mapped onto Pygments
diff tokens so any Pygments style can drive the palette.
Terminal control bytes in diff content are escaped before formatting.
"""

from __future__ import annotations

import re

from pygments import format as format_tokens
from pygments.formatters import Terminal256Formatter
from pygments.styles import get_style_by_name
from pygments.token import Generic, Text
from pygments.util import ClassNotFound

from .git_status import Diff, DiffLineType

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_LINE_TOKENS = {
    DiffLineType.ADD: Generic.Inserted,
    DiffLineType.DELETE: Generic.Deleted,
    DiffLineType.HEADER: Generic.Subheading,
    DiffLineType.NONE: Text,
}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


def normalize_style(style: str | None) -> str:
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def render_diff(diff: Diff, style: str | None = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return display rows for ``diff`` (one per diff line)."""
    contents = [sanitize_terminal_text(line.content.rstrip("\n")) for line in diff.lines]
    if not contents:
        return []
    if no_color:
        return contents

    formatter = _formatter_for_style(normalize_style(style))
    rows: list[str] = []
    for line, content in zip(diff.lines, contents):
        if not content:
            rows.append("")
            continue
        rendered = format_tokens([(_LINE_TOKENS[line.line_type], content)], formatter)
        rows.append(rendered.rstrip("\n"))
    return rows
