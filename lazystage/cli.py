"""Command-line front door for lazystage.

Parses CLI options, resolves the repository, and applies config defaults.
Then either prints the changed-files tree, creates a commit, or starts the
interactive status view.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import config
from .git_status import collect_status_items, commit, resolve_repo_root
from .logging_setup import configure_logging
from .runtime import StatusView, StatusViewSettings, run_status_view
from .status_tree import format_tree_item
from .ui_theme import available_theme_names, resolve_theme


def _positive_float(value: str) -> float:
    """argparse type for positive float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazystage",
        description="Browse changed files of a git repository as a collapsible tree.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside the repository. Defaults to cwd.")
    parser.add_argument("--style", default=None, help="Pygments style for the diff pane.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--print", dest="print_tree", action="store_true", help="Print the tree and exit.")
    parser.add_argument(
        "--collapse",
        action="append",
        default=[],
        metavar="DIR",
        help="Collapse directory DIR initially (repeatable).",
    )
    parser.add_argument("--commit", metavar="MESSAGE", help="Commit the index with MESSAGE and exit.")
    parser.add_argument(
        "--refresh",
        type=_positive_float,
        default=None,
        metavar="SECONDS",
        help="Git status poll interval.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def print_tree(view: StatusView) -> str:
    """Return the visible rows of ``view``'s tree as plain lines."""
    status_tree = view.state.tree
    lines = [
        format_tree_item(item, False, view.settings.theme, view.settings.show_badges)
        for _idx, item in status_tree.visible_items()
    ]
    if not lines:
        return "nothing to commit, working tree clean\n"
    return "\n".join(lines) + "\n"


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and run lazystage for the selected repository.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    root = resolve_repo_root(path.resolve())
    if root is None:
        raise SystemExit(f"Not a git repository: {path}")

    if args.commit is not None:
        result = commit(root, args.commit)
        if result.output:
            print(result.output)
        if not result.ok:
            raise SystemExit(1)
        return

    no_color = args.no_color or (args.print_tree and not sys.stdout.isatty())
    settings = StatusViewSettings(
        style=args.style or config.load_style(),
        no_color=no_color,
        refresh_seconds=args.refresh or config.load_refresh_seconds(),
        show_badges=config.load_show_status_badges(),
        theme=resolve_theme(args.theme or config.load_theme_name(), no_color=no_color),
    )
    view = StatusView(
        root,
        settings,
        collect_status=collect_status_items,
        save_show_badges=config.save_show_status_badges,
    )
    view.refresh()
    view.collapse_paths(args.collapse)

    if args.print_tree or not sys.stdin.isatty():
        sys.stdout.write(print_tree(view))
        return

    run_status_view(view)


if __name__ == "__main__":
    main()
