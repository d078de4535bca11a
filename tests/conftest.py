"""Test configuration for lfslock tests."""
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from lfslock.config import reset_config  # noqa: E402
from lfslock.preferences import DISABLED_ENV_VAR  # noqa: E402
from lfslock.types import CommandResult  # noqa: E402


class FakeRunner:
    """Stands in for run_command, recording every call.

    ``responder`` maps the argument list to a CommandResult; by default
    every command succeeds with empty output.
    """

    def __init__(self, responder: Optional[Callable[[List[str]], CommandResult]] = None):
        self.calls: List[Tuple[str, List[str]]] = []
        self.responder = responder or (lambda args: CommandResult(stdout="", exit_code=0))

    def __call__(self, program: str, args: Sequence[str], timeout=None,
                 show_progress=False, cwd=None) -> CommandResult:
        self.calls.append((program, list(args)))
        return self.responder(list(args))

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def arg_lists(self) -> List[List[str]]:
        return [args for _, args in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset config cache, the disable override and log handlers around each test."""
    monkeypatch.delenv(DISABLED_ENV_VAR, raising=False)
    reset_config()
    yield
    reset_config()
    lfslock_logger = logging.getLogger("lfslock")
    for handler in list(lfslock_logger.handlers):
        lfslock_logger.removeHandler(handler)
        handler.close()
    lfslock_logger.propagate = True
