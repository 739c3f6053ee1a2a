"""Public package surface for lazystage.

Exports ``main`` for programmatic CLI invocation and the status-tree core.
Most implementation lives in submodules under ``lazystage``.
"""

from __future__ import annotations

from .status_tree import MoveSelection, StatusItem, StatusItemType, StatusTree


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main", "MoveSelection", "StatusItem", "StatusItemType", "StatusTree"]
