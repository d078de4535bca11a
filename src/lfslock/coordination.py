"""Cross-process file locks for lfslock's own state files.

Serializes read-modify-write cycles on files that several lfslock processes
may touch at once (the preference store). Locks auto-release on process
crash since they are backed by filelock.FileLock.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from filelock import FileLock


def lock_path_for(path: Path) -> Path:
    """Return the sidecar lock file guarding ``path``."""
    return path.with_name(path.name + ".lock")


@contextmanager
def acquire_lock(
    path: Path,
    timeout: float = 10,
) -> Generator[FileLock, None, None]:
    """Blocking context manager that locks the sidecar of ``path``.

    Args:
        path: The file being protected; its parent directory is created.
        timeout: Seconds to wait. ``-1`` means wait forever.

    Yields:
        The acquired :class:`filelock.FileLock` instance.

    Raises:
        filelock.Timeout: If *timeout* expires before the lock is acquired.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(lock_path_for(path))
    lock.acquire(timeout=timeout)
    try:
        yield lock
    finally:
        lock.release()

