"""Working-tree queries: read-only checks, modified files and path normalization."""

import os
import stat
from pathlib import Path
from typing import List, Optional, Union

from lfslock.command_runner import CommandRunner, run_command
from lfslock.errors import InvalidTargetError


def file_is_read_only(path: Union[str, Path]) -> bool:
    """Return True when ``path`` exists and its owner write bit is cleared.

    git lfs keeps lockable files read-only until they are locked, so this
    doubles as a cheap "not locked by us" check. Missing files are writable.
    """
    try:
        mode = os.stat(path).st_mode
    except FileNotFoundError:
        return False
    return not mode & stat.S_IWUSR


def modified_paths(
    cwd: Optional[Union[str, Path]] = None,
    runner: CommandRunner = run_command,
    git_program: str = "git",
) -> List[str]:
    """List repository paths with uncommitted changes.

    Uses ``git status --porcelain -z`` so paths with spaces or unicode come
    back unquoted. For renames and copies only the destination is reported.

    Returns:
        Repository-relative POSIX paths; empty if git status fails.
    """
    result = runner(git_program, ["status", "--porcelain", "-z"], cwd=cwd)
    if not result.ok:
        return []

    paths: List[str] = []
    entries = iter(result.stdout.split('\0'))
    for entry in entries:
        if len(entry) < 4:
            continue
        status, path = entry[:2], entry[3:]
        if 'R' in status or 'C' in status:
            next(entries, None)  # Skip the rename/copy source
        paths.append(path)
    return paths


def find_repo_root(start: Optional[Path] = None) -> Path:
    """Find the repository root by walking up from ``start`` (default: cwd).

    Falls back to ``start`` itself when no ``.git`` entry is found.
    """
    origin = (start or Path.cwd()).resolve()
    current = origin
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return origin


def to_repo_path(path: Union[str, Path], repo_root: Path) -> str:
    """Normalize user input into a repository-relative POSIX lock target.

    Raises:
        InvalidTargetError: If the path lies outside ``repo_root``.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    candidate = candidate.resolve()
    try:
        relative = candidate.relative_to(repo_root.resolve())
    except ValueError:
        raise InvalidTargetError(f"{path} is outside the repository at {repo_root}")
    target = relative.as_posix()
    if target in ("", "."):
        raise InvalidTargetError(f"{path} is the repository root, not a file")
    return target
