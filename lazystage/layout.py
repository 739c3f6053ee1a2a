"""Screen-geometry helpers for the tree/diff split and popups."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


def _split(total: int, percents: tuple[int, int, int]) -> tuple[int, int, int]:
    """Split ``total`` cells by percentages; the middle part absorbs rounding."""
    first = total * percents[0] // 100
    last = total * percents[2] // 100
    middle = max(0, total - first - last)
    return first, middle, last


def centered_rect(percent_x: int, percent_y: int, area: Rect) -> Rect:
    """Return a rect centered in ``area`` sized ``percent_x``/``percent_y`` of it."""
    percent_x = max(0, min(100, percent_x))
    percent_y = max(0, min(100, percent_y))
    margin_x = (100 - percent_x) // 2
    margin_y = (100 - percent_y) // 2
    top, height, _bottom = _split(area.height, (margin_y, percent_y, margin_y))
    left, width, _right = _split(area.width, (margin_x, percent_x, margin_x))
    return Rect(area.x + left, area.y + top, width, height)


def compute_left_width(total_width: int) -> int:
    """Choose default tree-pane width from total terminal width."""
    if total_width <= 60:
        return max(16, total_width // 2)
    return max(20, min(40, total_width // 3))


def split_columns(area: Rect, left_width: int | None = None) -> tuple[Rect, Rect]:
    """Split ``area`` into tree and diff panes separated by a one-column divider."""
    if left_width is None:
        left_width = compute_left_width(area.width)
    left_width = max(1, min(left_width, max(1, area.width - 2)))
    right_width = max(0, area.width - left_width - 1)
    return (
        Rect(area.x, area.y, left_width, area.height),
        Rect(area.x + left_width + 1, area.y, right_width, area.height),
    )
