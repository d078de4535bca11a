"""Logging utilities for lfslock - console output plus a per-run log file."""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed by configure_logging, so a second call replaces them
_installed: list[logging.Handler] = []


def generate_run_id() -> str:
    """Generate a unique run ID with timestamp and short UUID.

    Returns:
        Run ID in format: YYYYMMDD_HHMMSS_<short-uuid>
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{timestamp}_{short_uuid}"


def configure_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    console: Optional[Console] = None,
) -> Optional[Path]:
    """Configure the ``lfslock`` logger hierarchy.

    Console output goes through rich; when ``log_dir`` is given every run
    also gets its own log file with DEBUG detail (including every git
    command that was executed).

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ...)
        log_dir: Directory for run log files, None to disable file logging
        console: Console to render to (default: stderr)

    Returns:
        Path of the run log file, or None if file logging is disabled.
    """
    root = logging.getLogger("lfslock")
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    root.setLevel(logging.DEBUG)
    root.propagate = False

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(console_handler)
    _installed.append(console_handler)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{generate_run_id()}.log"
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    root.addHandler(file_handler)
    _installed.append(file_handler)
    return log_path
