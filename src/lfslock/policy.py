"""Write policy - decides whether edits to lockable files may go ahead.

The host application (an editor, a save hook, the ``lfslock watch`` loop)
asks the policy about each candidate write. User interaction is injected
as callbacks so the same flow works behind a terminal prompt, a GUI dialog
or a scripted test.
"""

import logging
from pathlib import Path
from typing import AbstractSet, Callable, Iterable, List, Optional, Set

from lfslock.coordinator import LockCoordinator
from lfslock.types import Decision, LockOutcome, UserChoice
from lfslock.workspace import file_is_read_only

logger = logging.getLogger(__name__)

ChooseCallback = Callable[[str], UserChoice]
ConfirmForceCallback = Callable[[str, str], bool]
ConfirmCallback = Callable[[], bool]
NotifyCallback = Callable[[str], None]
ReadOnlyCheck = Callable[[str], bool]
ModifiedQuery = Callable[[str], bool]


class LockPolicy:
    """Per-session write policy around a LockCoordinator.

    Args:
        coordinator: Performs the actual lock operations
        choose: Asks the user what to do about an unlocked modified file
        confirm_force: Asks whether to break ``owner``'s lock on a target
        confirm_disable: Asks whether to really disable locking
        notify: Shows an informational message to the user
        is_read_only: Reports the on-disk read-only flag of a target
        root: Directory that targets are relative to when checking files
    """

    def __init__(
        self,
        coordinator: LockCoordinator,
        choose: ChooseCallback,
        confirm_force: ConfirmForceCallback,
        confirm_disable: ConfirmCallback,
        notify: NotifyCallback,
        is_read_only: Optional[ReadOnlyCheck] = None,
        root: Optional[Path] = None,
    ):
        self.coordinator = coordinator
        self.choose = choose
        self.confirm_force = confirm_force
        self.confirm_disable = confirm_disable
        self.notify = notify
        self.root = root
        self._is_read_only = is_read_only or self._file_read_only
        self._ignored: Set[str] = set()

    def _file_read_only(self, target: str) -> bool:
        path = self.root / target if self.root is not None else Path(target)
        return file_is_read_only(path)

    @property
    def ignored(self) -> AbstractSet[str]:
        """Targets the user asked not to be warned about this session."""
        return frozenset(self._ignored)

    def decide(self, target: str, is_read_only: bool) -> Decision:
        """Decide what to do with a write to ``target``."""
        if self.coordinator.is_disabled():
            return Decision.PROCEED
        # Writable means we hold the lock or the file is not lockable
        if not is_read_only:
            return Decision.PROCEED
        if target in self._ignored:
            return Decision.BLOCK
        return Decision.ESCALATE

    def escalate(self, target: str) -> bool:
        """Run the interactive lock flow for an unlocked modified target.

        Returns:
            True if the target should be ignored for the rest of the session.
        """
        choice = self.choose(target)
        logger.debug("User chose %s for %s", choice.value, target)

        if choice is UserChoice.LOCK_NOW:
            return self._lock_flow(target)
        if choice is UserChoice.IGNORE_SESSION:
            return True
        if choice is UserChoice.DISABLE_SYSTEM:
            if self.confirm_disable():
                self.coordinator.disable_system()
                self.notify("Git locking disabled. Run 'lfslock enable' to turn it back on.")
            return False
        return False  # IGNORE_ONCE

    def _lock_flow(self, target: str) -> bool:
        result = self.coordinator.try_lock(target)
        if result.outcome is LockOutcome.LOCKED:
            self.notify("Locking successful! Enjoy exclusive control over this file.")
            return False
        if result.outcome is LockOutcome.DISABLED:
            return False

        owner = result.owner_display
        if not self.confirm_force(target, owner):
            # User keeps working on the file without being able to save it
            return True

        if self.coordinator.force_acquire(target):
            self.notify(f"Force acquire lock successful! Make sure {owner} knows about this!")
        else:
            self.notify("Force acquire failed. Something must have gone wrong, check the lock manually.")
        return False

    def filter_saves(self, paths: Iterable[str]) -> List[str]:
        """Return the subset of ``paths`` that may be written.

        Read-only paths go through the lock flow and are kept only if they
        became writable (i.e. got locked) or locking got disabled as a result.
        """
        allowed: List[str] = []
        for path in paths:
            # Toggle is re-read per path; the user may disable locking mid-loop
            if self.coordinator.is_disabled() or not self._is_read_only(path):
                allowed.append(path)
                continue
            self.escalate(path)
            if self.coordinator.is_disabled() or not self._is_read_only(path):
                allowed.append(path)
            else:
                logger.info("Not saving %s: file is not locked", path)
        return allowed

    def check_modified(self, targets: Iterable[str], is_modified: ModifiedQuery) -> List[str]:
        """Run one watcher pass over ``targets``.

        Returns:
            Targets for which the lock flow was triggered during this pass.
        """
        if self.coordinator.is_disabled():
            return []

        escalated: List[str] = []
        for target in targets:
            if not target:
                continue  # never saved, nothing to lock yet
            if not is_modified(target):
                self._ignored.discard(target)
                continue
            if self.decide(target, self._is_read_only(target)) is not Decision.ESCALATE:
                continue
            escalated.append(target)
            if self.escalate(target):
                self._ignored.add(target)
        return escalated
