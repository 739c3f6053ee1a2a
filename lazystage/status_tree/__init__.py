"""Changed-file tree: building, selection, collapse state, and row formatting.

Defines ``StatusTree`` (cursor and visibility over a flattened path list),
``FileTreeItems`` (the ordered entry list), and their datatypes.
"""

from __future__ import annotations

from .build import FileTreeItems, parent_path, path_sort_key, split_path
from .rendering import format_status_badge, format_tree_item, render_tree_rows
from .tree import StatusTree
from .types import FileTreeItem, MoveSelection, StatusItem, StatusItemType

__all__ = [
    "FileTreeItem",
    "FileTreeItems",
    "MoveSelection",
    "StatusItem",
    "StatusItemType",
    "StatusTree",
    "format_status_badge",
    "format_tree_item",
    "parent_path",
    "path_sort_key",
    "render_tree_rows",
    "split_path",
]
