"""Exception types raised by lfslock.

Contention, unparseable query output and failed force-acquires are reported
as return values, not exceptions. Only conditions the caller cannot treat
as a normal lock outcome live here.
"""


class LfsLockError(Exception):
    """Base class for lfslock errors."""


class BackendUnavailableError(LfsLockError):
    """The lock backend program could not be launched."""

    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason
        super().__init__(f"Could not run '{program}': {reason}")


class InvalidTargetError(LfsLockError, ValueError):
    """A lock target is not a relative repository path."""


class ConfigError(LfsLockError):
    """Configuration file could not be loaded."""
