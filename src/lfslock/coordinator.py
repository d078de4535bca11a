"""Lock coordinator - lock, unlock and force-acquire with a system kill switch."""

import logging
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional

from lfslock.errors import InvalidTargetError
from lfslock.lfs_backend import LfsLockBackend
from lfslock.preferences import SYSTEM_DISABLED_KEY, PreferenceStore
from lfslock.types import LockOutcome, LockResult, LockState

logger = logging.getLogger(__name__)


def validate_target(target: str) -> str:
    """Return ``target`` unchanged if it is a relative repository path.

    Raises:
        InvalidTargetError: If the target is empty or absolute.
    """
    if not target or not target.strip():
        raise InvalidTargetError("Lock target must not be empty")
    if PurePosixPath(target).is_absolute() or PureWindowsPath(target).is_absolute():
        raise InvalidTargetError(f"Lock target must be a relative repository path: {target}")
    return target


class LockCoordinator:
    """Entry point for lock operations on repository files.

    Holds no lock state of its own: every answer comes from the backend.
    The system-disabled toggle is re-read from the preference store on
    each call.
    """

    def __init__(self, backend: LfsLockBackend, store: PreferenceStore):
        self.backend = backend
        self.store = store

    def is_disabled(self) -> bool:
        return self.store.get_bool(SYSTEM_DISABLED_KEY, False)

    def disable_system(self) -> None:
        """Turn off lock enforcement for every process sharing the store."""
        self.store.set_bool(SYSTEM_DISABLED_KEY, True)
        logger.warning("Git locking disabled")

    def enable_system(self) -> None:
        """Turn lock enforcement back on."""
        self.store.set_bool(SYSTEM_DISABLED_KEY, False)
        logger.info("Git locking enabled")

    def try_lock(self, target: str) -> LockResult:
        """Attempt to lock ``target``.

        Returns:
            DISABLED without touching the backend when locking is turned off,
            LOCKED on success, otherwise ALREADY_HELD_BY_OTHER with the owner
            reported by the backend (None when unknown).
        """
        validate_target(target)
        if self.is_disabled():
            logger.debug("Locking disabled, skipping lock of %s", target)
            return LockResult(LockOutcome.DISABLED)

        if self.backend.lock(target):
            logger.info("Locked %s", target)
            return LockResult(LockOutcome.LOCKED)

        owner = self.backend.query_owner(target)
        result = LockResult(LockOutcome.ALREADY_HELD_BY_OTHER, owner)
        logger.warning("Locking failed! %s has %s currently locked", result.owner_display, target)
        return result

    def force_acquire(self, target: str) -> bool:
        """Break the current lock on ``target`` and take it.

        Only call this after the user explicitly confirmed the escalation.
        """
        validate_target(target)
        if self.backend.force_unlock_then_lock(target):
            logger.info("Force acquired lock on %s", target)
            return True
        logger.error("Force acquire of %s failed", target)
        return False

    def unlock(self, target: str) -> bool:
        validate_target(target)
        ok = self.backend.unlock(target)
        if ok:
            logger.info("Unlocked %s", target)
        else:
            logger.warning("Unlock of %s failed", target)
        return ok

    def who_holds(self, target: str) -> Optional[str]:
        validate_target(target)
        return self.backend.query_owner(target)

    def lock_state(self, target: str) -> LockState:
        validate_target(target)
        return self.backend.query_state(target)
