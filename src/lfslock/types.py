"""Type definitions for lfslock."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LockStatus(Enum):
    """Advisory status of a single target as reported by the backend."""
    UNLOCKED = "unlocked"
    LOCKED_BY_SELF = "locked_by_self"
    LOCKED_BY_OTHER = "locked_by_other"


@dataclass(frozen=True)
class LockState:
    """Lock status of a target, derived fresh from the backend on every query.

    ``verified`` is False when the server could not tell whose lock it is;
    the status is then LOCKED_BY_OTHER even though the owner may be us.
    """
    status: LockStatus
    owner: Optional[str] = None  # Only set for LOCKED_BY_OTHER
    verified: bool = True

    @staticmethod
    def unlocked() -> 'LockState':
        return LockState(LockStatus.UNLOCKED)

    @staticmethod
    def locked_by_self() -> 'LockState':
        return LockState(LockStatus.LOCKED_BY_SELF)

    @staticmethod
    def locked_by_other(owner: Optional[str], verified: bool = True) -> 'LockState':
        return LockState(LockStatus.LOCKED_BY_OTHER, owner, verified)


class LockOutcome(Enum):
    """Outcome of a lock attempt."""
    LOCKED = "locked"
    ALREADY_HELD_BY_OTHER = "already_held_by_other"
    DISABLED = "disabled"


@dataclass(frozen=True)
class LockResult:
    """Result of LockCoordinator.try_lock.

    ``owner`` is only meaningful for ALREADY_HELD_BY_OTHER and is None when
    the backend could not tell us who holds the lock.
    """
    outcome: LockOutcome
    owner: Optional[str] = None

    @property
    def owner_display(self) -> str:
        """Owner name for display, "unknown" when not reported."""
        return self.owner or "unknown"


class Decision(Enum):
    """What the policy says to do with a candidate write."""
    PROCEED = "proceed"
    BLOCK = "block"
    ESCALATE = "escalate"


class UserChoice(Enum):
    """Answer to the "modified without locking" prompt."""
    LOCK_NOW = "lock"
    IGNORE_ONCE = "ignore-once"
    IGNORE_SESSION = "ignore-session"
    DISABLE_SYSTEM = "disable"


@dataclass
class CommandResult:
    """Captured output of an external command."""
    stdout: str
    exit_code: int
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


@dataclass
class LockRecord:
    """A single lock from git lfs locks --json."""
    id: str
    path: str
    owner: Optional[str] = None
    locked_at: Optional[str] = None
