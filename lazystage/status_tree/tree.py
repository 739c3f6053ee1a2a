"""Selection and visibility state for the changed-files tree.

``StatusTree`` owns the flattened entries and a single cursor. Every refresh
replaces the entries wholesale; the selected path and the set of collapsed
directories are carried across by value and restored by path lookup.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .build import SEPARATOR, FileTreeItems
from .types import FileTreeItem, MoveSelection, StatusItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionChange:
    new_index: int
    changes: bool = False


class StatusTree:
    def __init__(self) -> None:
        self.tree = FileTreeItems()
        self.selection: int | None = None

    def update(self, status_items: Iterable[StatusItem]) -> None:
        """Rebuild from a fresh list, keeping selection and collapse state."""
        last_collapsed = self.all_collapsed()
        last_selected = self.selected_item()
        last_selection_index = self.selection if self.selection is not None else 0

        self.tree = FileTreeItems.build(status_items, last_collapsed)

        if self.is_empty():
            self.selection = None
        elif last_selected is not None:
            self.selection = self._find_last_selection(last_selected.full_path, last_selection_index)
        else:
            self.selection = 0

        self._update_visibility(None, 0, True)
        logger.debug(
            "status tree rebuilt: %d entries, %d collapsed, selection=%s",
            len(self.tree),
            len(last_collapsed),
            self.selection,
        )

    def move_selection(self, direction: MoveSelection) -> bool:
        """Move the cursor; return whether a redraw is needed."""
        selection = self.selection
        if selection is None:
            return False

        if direction is MoveSelection.UP:
            change = self._selection_updown(selection, up=True)
        elif direction is MoveSelection.DOWN:
            change = self._selection_updown(selection, up=False)
        elif direction is MoveSelection.LEFT:
            change = self._selection_left(selection)
        else:
            change = self._selection_right(selection)

        self.selection = change.new_index
        return change.new_index != selection or change.changes

    def selected_item(self) -> FileTreeItem | None:
        if self.selection is None:
            return None
        return dataclasses.replace(self.tree[self.selection])

    def is_empty(self) -> bool:
        return len(self.tree) == 0

    def all_collapsed(self) -> set[str]:
        return {item.full_path for item in self.tree if item.is_collapsed_dir}

    def visible_items(self) -> Iterator[tuple[int, FileTreeItem]]:
        """Yield ``(index, item)`` for visible rows in display order."""
        for idx, item in enumerate(self.tree):
            if item.visible:
                yield idx, item

    def _find_last_selection(self, last_path: str, last_index: int) -> int:
        found = self.tree.index_of(last_path)
        if found is not None:
            return found
        fallback = min(last_index, len(self.tree) - 1)
        logger.debug("selected path %r disappeared; keeping index %d", last_path, fallback)
        return fallback

    def _selection_updown(self, current_index: int, up: bool) -> SelectionChange:
        items_max = max(0, len(self.tree) - 1)
        new_index = current_index

        while True:
            new_index = max(0, new_index - 1) if up else min(items_max, new_index + 1)

            if self.tree[new_index].visible:
                break

            if new_index == 0 or new_index == items_max:
                # Hit the boundary without finding a visible row.
                new_index = current_index
                break

        return SelectionChange(new_index)

    def _selection_left(self, current_index: int) -> SelectionChange:
        item = self.tree[current_index]

        if item.is_expanded_dir:
            self.collapse(item.full_path, current_index)
            return SelectionChange(current_index, True)

        return SelectionChange(self.tree.find_parent_index(item.full_path, current_index))

    def _selection_right(self, current_index: int) -> SelectionChange:
        item = self.tree[current_index]

        if item.is_collapsed_dir:
            self.expand(item.full_path, current_index)
            return SelectionChange(current_index, True)

        return SelectionChange(current_index)

    def collapse(self, path: str, index: int) -> None:
        """Collapse the directory at ``index`` and hide its subtree."""
        item = self.tree[index]
        if item.is_dir:
            item.collapsed = True

        prefix = path + SEPARATOR
        for idx in range(index + 1, len(self.tree)):
            child = self.tree[idx]
            if not child.full_path.startswith(prefix):
                return
            child.visible = False

    def expand(self, path: str, index: int) -> None:
        """Expand the directory at ``index``.

        Nested directories that are collapsed themselves stay collapsed.
        """
        item = self.tree[index]
        if item.is_dir:
            item.collapsed = False

        self._update_visibility(path + SEPARATOR, index + 1, False)

    def _update_visibility(self, prefix: str | None, start_index: int, set_defaults: bool) -> None:
        # Prefix of the innermost still-collapsed directory being skipped.
        inner_collapsed: str | None = None

        for idx in range(start_index, len(self.tree)):
            item = self.tree[idx]

            if inner_collapsed is not None:
                if item.full_path.startswith(inner_collapsed):
                    item.visible = False
                    continue
                inner_collapsed = None

            in_scope = prefix is None or item.full_path.startswith(prefix)
            if not in_scope:
                if not set_defaults:
                    return
                item.visible = False
                continue

            if item.is_collapsed_dir:
                inner_collapsed = item.full_path + SEPARATOR
            item.visible = True
