"""Blocking external command execution."""

import logging
import subprocess
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from rich.console import Console

from lfslock.errors import BackendUnavailableError
from lfslock.types import CommandResult

logger = logging.getLogger(__name__)

_console = Console(stderr=True)


class CommandRunner(Protocol):
    """Callable that runs a program and returns its captured output."""

    def __call__(
        self,
        program: str,
        args: Sequence[str],
        timeout: Optional[float] = None,
        show_progress: bool = False,
        cwd: Optional[Union[str, Path]] = None,
    ) -> CommandResult: ...


def run_command(
    program: str,
    args: Sequence[str],
    timeout: Optional[float] = None,
    show_progress: bool = False,
    cwd: Optional[Union[str, Path]] = None,
) -> CommandResult:
    """Run ``program`` with ``args`` and wait for it to exit.

    A non-zero exit code is returned, never raised. A timeout kills the
    process and comes back as a failed result with ``timed_out`` set.

    Args:
        program: Executable name or path (e.g. ``"git"``)
        args: Arguments passed verbatim, without shell interpretation
        timeout: Seconds to wait before giving up, None waits forever
        show_progress: Show a spinner on stderr while the command runs
        cwd: Working directory for the child process

    Returns:
        CommandResult with stdout, stderr and exit code

    Raises:
        BackendUnavailableError: If the program is missing or cannot be launched
    """
    argv: List[str] = [program, *args]
    logger.debug("Running: %s", " ".join(argv))

    status = (
        _console.status(f"Running {' '.join(argv)}...")
        if show_progress else nullcontext()
    )
    try:
        with status:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=timeout,
                cwd=str(cwd) if cwd is not None else None,
            )
    except subprocess.TimeoutExpired as e:
        logger.warning("Command timed out after %s seconds: %s", e.timeout, " ".join(argv))
        partial = e.stdout or ""
        if isinstance(partial, bytes):
            partial = partial.decode('utf-8', errors='replace')
        return CommandResult(stdout=partial, exit_code=-1, timed_out=True)
    except FileNotFoundError as e:
        raise BackendUnavailableError(program, "program not found") from e
    except OSError as e:
        raise BackendUnavailableError(program, str(e)) from e

    logger.debug("Exit code %d from: %s", result.returncode, " ".join(argv))
    return CommandResult(
        stdout=result.stdout or "",
        exit_code=result.returncode,
        stderr=result.stderr or "",
    )
