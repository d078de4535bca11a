"""Git LFS lock backend - translates lock intents into git lfs invocations."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from lfslock.command_runner import CommandRunner, run_command
from lfslock.types import CommandResult, LockRecord, LockState

logger = logging.getLogger(__name__)


def _parse_lfs_json(output: str) -> Any:
    """Parse JSON from git lfs output, skipping any leading non-JSON lines.

    Returns:
        Parsed JSON data, or None if no valid JSON was found.
    """
    lines = [line for line in output.split('\n') if line.strip()]
    json_start = next(
        (i for i, line in enumerate(lines)
         if line.lstrip().startswith(('[', '{'))),
        None
    )
    if json_start is None:
        return None
    try:
        return json.loads('\n'.join(lines[json_start:]))
    except json.JSONDecodeError:
        return None


def _owner_name(record: Any) -> Optional[str]:
    """Extract ``owner.name`` from a lock record, None if absent or malformed."""
    if not isinstance(record, dict):
        return None
    owner = record.get("owner")
    if not isinstance(owner, dict):
        return None
    name = owner.get("name")
    if isinstance(name, str) and name:
        return name
    return None


class LfsLockBackend:
    """Adapter around ``git lfs lock``/``unlock``/``locks``.

    Lock and unlock report success as a bool (exit code 0). Queries never
    raise on bad output; they degrade to "unknown". Only a failure to
    launch git at all propagates, as BackendUnavailableError.
    """

    def __init__(
        self,
        runner: CommandRunner = run_command,
        git_program: str = "git",
        timeout: Optional[float] = None,
        show_progress: bool = False,
        cwd: Optional[Union[str, Path]] = None,
    ):
        self.runner = runner
        self.git_program = git_program
        self.timeout = timeout
        self.show_progress = show_progress
        self.cwd = cwd

    def _run(self, args: List[str], progress: bool) -> CommandResult:
        return self.runner(
            self.git_program,
            ["lfs", *args],
            timeout=self.timeout,
            show_progress=progress and self.show_progress,
            cwd=self.cwd,
        )

    def lock(self, path: str) -> bool:
        """Lock ``path``. True iff git lfs exited with 0."""
        result = self._run(["lock", path], progress=True)
        if not result.ok:
            logger.debug("git lfs lock %s failed: %s", path, result.stderr.strip())
        return result.ok

    def unlock(self, path: str) -> bool:
        """Unlock ``path``. True iff git lfs exited with 0."""
        result = self._run(["unlock", path], progress=True)
        if not result.ok:
            logger.debug("git lfs unlock %s failed: %s", path, result.stderr.strip())
        return result.ok

    def force_unlock_then_lock(self, path: str) -> bool:
        """Break someone else's lock on ``path`` and take it.

        The force-unlock runs to completion before the lock is issued; its
        own result is ignored since only the final lock decides ownership.
        """
        forced = self._run(["unlock", path, "--force"], progress=True)
        if not forced.ok:
            logger.debug("Force unlock of %s exited with %d", path, forced.exit_code)
        return self.lock(path)

    def query_owner(self, path: str) -> Optional[str]:
        """Return the name of whoever holds the lock on ``path``.

        Returns:
            Owner name, or None if nobody holds it or the answer could not
            be parsed.
        """
        result = self._run(["locks", "--path", path, "--json"], progress=False)
        if not result.ok:
            return None
        data = _parse_lfs_json(result.stdout)
        if not isinstance(data, list) or not data:
            return None
        return _owner_name(data[0])

    def query_state(self, path: str) -> LockState:
        """Derive the LockState of ``path`` using ``git lfs locks --verify``.

        Falls back to an owner-only query when verification output is not
        usable (e.g. the server does not support lock verification). A lock
        found that way is returned with ``verified=False`` since it may be ours.
        """
        result = self._run(["locks", "--path", path, "--verify", "--json"], progress=False)
        data = _parse_lfs_json(result.stdout) if result.ok else None
        if isinstance(data, dict):
            ours = data.get("ours") or []
            theirs = data.get("theirs") or []
            if ours:
                return LockState.locked_by_self()
            if theirs:
                return LockState.locked_by_other(_owner_name(theirs[0]))
            return LockState.unlocked()

        # Without verification the owner may be us; report it unverified
        owner = self.query_owner(path)
        if owner is None:
            return LockState.unlocked()
        return LockState.locked_by_other(owner, verified=False)

    def list_locks(self) -> List[LockRecord]:
        """List all locks known to the server."""
        result = self._run(["locks", "--json"], progress=True)
        if not result.ok:
            return []
        data = _parse_lfs_json(result.stdout)
        if not isinstance(data, list):
            return []
        records = []
        for item in data:
            if not isinstance(item, dict) or "path" not in item:
                continue
            records.append(LockRecord(
                id=str(item.get("id", "")),
                path=str(item["path"]),
                owner=_owner_name(item),
                locked_at=item.get("locked_at"),
            ))
        return records
