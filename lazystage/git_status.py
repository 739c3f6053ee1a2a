"""Git status, diff, and commit helpers.

Collects changed paths for the status tree from ``git status --porcelain``.
Loads the worktree diff of one path and creates commits from the index.
All git calls degrade to empty results when git is missing or fails.
"""

from __future__ import annotations

import enum
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .status_tree.types import StatusItem, StatusItemType

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 1.0
_CONFLICT_CODES = {"DD", "AA", "AU", "UA", "DU", "UD", "UU"}


class DiffLineType(enum.Enum):
    NONE = "none"
    HEADER = "header"
    ADD = "add"
    DELETE = "delete"


@dataclass(frozen=True)
class DiffLine:
    content: str
    line_type: DiffLineType = DiffLineType.NONE


@dataclass(frozen=True)
class Diff:
    lines: list[DiffLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class CommitResult:
    ok: bool
    output: str


def _run_git(
    repo_root: Path,
    args: list[str],
    timeout_seconds: float,
) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(repo_root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the worktree root containing ``path``, or ``None`` outside a repo."""
    start = path if path.is_dir() else path.parent
    proc = _run_git(start, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = proc.stdout.strip()
    if not top:
        return None
    return Path(top).resolve()


def status_type_for_code(code: str) -> StatusItemType | None:
    """Map a two-letter porcelain code to a ``StatusItemType``.

    The worktree column wins over the index column, matching a view of
    unstaged changes.
    """
    if code == "??":
        return StatusItemType.UNTRACKED
    if code in _CONFLICT_CODES:
        return StatusItemType.CONFLICTED
    index_code, worktree_code = code[0], code[1]
    for letter in (worktree_code, index_code):
        if letter == "M":
            return StatusItemType.MODIFIED
        if letter == "A":
            return StatusItemType.NEW
        if letter == "D":
            return StatusItemType.DELETED
        if letter in {"R", "C"}:
            return StatusItemType.RENAMED
        if letter == "T":
            return StatusItemType.TYPECHANGE
    return None


def parse_porcelain_status(output: str) -> list[StatusItem]:
    """Parse ``git status --porcelain=v1 -z`` output into status items."""
    items: list[StatusItem] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        path_text = token[3:]

        # Renames and copies carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1

        if code == "!!" or not path_text:
            continue
        items.append(StatusItem(path_text, status_type_for_code(code)))

    return items


def collect_status_items(root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> list[StatusItem]:
    """Return changed paths of the repository at ``root``."""
    proc = _run_git(
        root,
        ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        timeout_seconds,
    )
    if proc is None or proc.returncode != 0:
        if proc is not None:
            logger.debug("git status exited with %d: %s", proc.returncode, proc.stderr.strip())
        return []
    return parse_porcelain_status(proc.stdout)


def _line_type_for(line: str) -> DiffLineType:
    """Classify a line inside a hunk by its origin character."""
    origin = line[:1]
    if origin == "+":
        return DiffLineType.ADD
    if origin == "-":
        return DiffLineType.DELETE
    if line.startswith("@@"):
        return DiffLineType.HEADER
    return DiffLineType.NONE


def parse_diff(diff_text: str) -> Diff:
    """Classify unified-diff lines, starting at the first hunk.

    File headers (``diff --git``, ``index``, ``---``/``+++``) are dropped and a
    blank separator row precedes every hunk header except the first. Inside a
    hunk, ``---``/``+++`` lines are content (a removed ``-- comment``).
    """
    lines: list[DiffLine] = []
    in_hunks = False
    for raw_line in diff_text.splitlines():
        if raw_line.startswith("diff --git"):
            in_hunks = False
            continue
        if raw_line.startswith("@@"):
            in_hunks = True
            if lines:
                lines.append(DiffLine(""))
            lines.append(DiffLine(raw_line, DiffLineType.HEADER))
            continue
        if not in_hunks:
            continue
        lines.append(DiffLine(raw_line, _line_type_for(raw_line)))
    return Diff(lines)


def get_diff(
    root: Path,
    path: str,
    untracked: bool = False,
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> Diff:
    """Return the index-to-worktree diff for ``path`` (relative to ``root``)."""
    if untracked:
        args = ["diff", "--no-color", "--no-ext-diff", "--no-index", "--", "/dev/null", path]
    else:
        args = ["diff", "--no-color", "--no-ext-diff", "--", path]
    proc = _run_git(root, args, timeout_seconds)
    # ``--no-index`` exits with 1 when the files differ.
    if proc is None or proc.returncode not in (0, 1):
        return Diff()
    return parse_diff(proc.stdout)


def commit(root: Path, message: str, timeout_seconds: float = 10.0) -> CommitResult:
    """Create a commit from the current index."""
    if not message.strip():
        return CommitResult(False, "empty commit message")
    proc = _run_git(root, ["commit", "-q", "-m", message], timeout_seconds)
    if proc is None:
        return CommitResult(False, "git is not available")
    output = (proc.stdout + proc.stderr).strip()
    if proc.returncode != 0:
        logger.debug("git commit exited with %d", proc.returncode)
        return CommitResult(False, output)
    return CommitResult(True, output)
