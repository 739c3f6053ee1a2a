"""Flattened status-tree construction from a list of changed paths.

The result is a single list ordered by path, with one entry per distinct
directory followed by its descendants. No parent/child links are stored;
hierarchy is derived from path prefixes on demand.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator

from .types import FileTreeItem, StatusItem, StatusItemType

SEPARATOR = "/"


def split_path(path: str) -> list[str]:
    """Return non-empty ``/``-separated components of ``path``."""
    return [part for part in path.split(SEPARATOR) if part]


def path_sort_key(path: str) -> tuple[str, ...]:
    """Order key keeping every directory's descendants contiguous.

    Plain string order would put ``a-b`` between ``a`` and ``a/b`` because
    ``-`` sorts before ``/``; comparing components avoids that.
    """
    return tuple(path.split(SEPARATOR))


def parent_path(path: str) -> str | None:
    head, sep, _tail = path.rpartition(SEPARATOR)
    if not sep:
        return None
    return head


def _item_key(item: FileTreeItem) -> tuple[str, ...]:
    return path_sort_key(item.full_path)


class FileTreeItems:
    """Ordered, index-addressed sequence of ``FileTreeItem`` rows."""

    def __init__(self, items: list[FileTreeItem] | None = None) -> None:
        self._items: list[FileTreeItem] = items if items is not None else []

    @classmethod
    def build(cls, status_items: Iterable[StatusItem], collapsed: Iterable[str] = ()) -> FileTreeItems:
        """Build the flattened tree for ``status_items``.

        Directories listed in ``collapsed`` start collapsed and their
        descendants start invisible.
        """
        collapsed_paths = set(collapsed)
        files: dict[str, StatusItemType | None] = {}
        for status_item in status_items:
            parts = split_path(status_item.path)
            if not parts:
                continue
            files[SEPARATOR.join(parts)] = status_item.status

        directories: set[str] = set()
        for file_path in files:
            parent = parent_path(file_path)
            while parent is not None and parent not in directories:
                directories.add(parent)
                parent = parent_path(parent)

        items: list[FileTreeItem] = []
        for full_path in sorted(directories | files.keys(), key=path_sort_key):
            is_dir = full_path in directories
            parts = full_path.split(SEPARATOR)
            items.append(
                FileTreeItem(
                    full_path=full_path,
                    name=parts[-1],
                    indent=len(parts) - 1,
                    is_dir=is_dir,
                    collapsed=is_dir and full_path in collapsed_paths,
                    status=None if is_dir else files.get(full_path),
                )
            )

        hidden_under: str | None = None
        for item in items:
            if hidden_under is not None and item.full_path.startswith(hidden_under):
                item.visible = False
                continue
            hidden_under = item.full_path + SEPARATOR if item.is_collapsed_dir else None
        return cls(items)

    def items(self) -> list[FileTreeItem]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> FileTreeItem:
        return self._items[index]

    def __iter__(self) -> Iterator[FileTreeItem]:
        return iter(self._items)

    def index_of(self, full_path: str) -> int | None:
        """Binary-search for the entry whose ``full_path`` equals ``full_path``."""
        idx = bisect_left(self._items, path_sort_key(full_path), key=_item_key)
        if idx < len(self._items) and self._items[idx].full_path == full_path:
            return idx
        return None

    def find_parent_index(self, path: str, index: int) -> int:
        """Return the index of the parent directory of ``path``.

        Searches backwards from ``index``. Top-level paths (and parents that
        cannot be found) resolve to ``0``.
        """
        parent = parent_path(path)
        if parent is None:
            return 0
        for idx in range(min(index, len(self._items) - 1), -1, -1):
            if self._items[idx].full_path == parent:
                return idx
        return 0
