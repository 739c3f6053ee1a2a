"""Status-tree datatypes shared by the builder, the core, and renderers."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class StatusItemType(enum.Enum):
    """Kind of change git reports for one path."""

    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPECHANGE = "typechange"
    CONFLICTED = "conflicted"
    UNTRACKED = "untracked"


@dataclass(frozen=True)
class StatusItem:
    """One changed path as reported by git, relative to the repository root."""

    path: str
    status: StatusItemType | None = None


class MoveSelection(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class FileTreeItem:
    """One row of the flattened status tree (a directory or a changed file).

    ``collapsed`` is only meaningful for directories. ``visible`` is derived
    from the collapse flags of the ancestors and is owned by ``StatusTree``.
    """

    full_path: str
    name: str
    indent: int
    is_dir: bool
    collapsed: bool = False
    status: StatusItemType | None = None
    visible: bool = True

    @property
    def is_collapsed_dir(self) -> bool:
        return self.is_dir and self.collapsed

    @property
    def is_expanded_dir(self) -> bool:
        return self.is_dir and not self.collapsed
