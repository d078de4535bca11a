# lfslock - Cooperative file locking on top of git lfs locks

from .coordinator import LockCoordinator
from .errors import BackendUnavailableError, InvalidTargetError, LfsLockError
from .lfs_backend import LfsLockBackend
from .policy import LockPolicy
from .preferences import JsonPreferenceStore, MemoryPreferenceStore
from .types import Decision, LockOutcome, LockResult, LockState, LockStatus, UserChoice

__all__ = [
    'LockCoordinator',
    'LfsLockBackend',
    'LockPolicy',
    'JsonPreferenceStore',
    'MemoryPreferenceStore',
    'BackendUnavailableError',
    'InvalidTargetError',
    'LfsLockError',
    'Decision',
    'LockOutcome',
    'LockResult',
    'LockState',
    'LockStatus',
    'UserChoice',
]
