"""Command-line interface for lfslock."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from lfslock.config import ProjectConfig, load_config
from lfslock.coordinator import LockCoordinator
from lfslock.errors import BackendUnavailableError, ConfigError, InvalidTargetError
from lfslock.lfs_backend import LfsLockBackend
from lfslock.logging_utils import configure_logging
from lfslock.policy import LockPolicy
from lfslock.preferences import JsonPreferenceStore
from lfslock.prompts import TerminalPrompter
from lfslock.types import LockOutcome, LockStatus
from lfslock.workspace import modified_paths, to_repo_path

logger = logging.getLogger(__name__)

console = Console()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BACKEND_UNAVAILABLE = 2


def build_coordinator(config: ProjectConfig) -> LockCoordinator:
    """Wire a LockCoordinator from project configuration."""
    backend = LfsLockBackend(
        git_program=config.git.program,
        timeout=config.git.timeout,
        show_progress=config.git.show_progress,
        cwd=config.repo_root,
    )
    store = JsonPreferenceStore(config.preferences_path())
    return LockCoordinator(backend, store)


def build_policy(coordinator: LockCoordinator, config: ProjectConfig) -> LockPolicy:
    """Wire a LockPolicy that asks questions on the terminal."""
    prompter = TerminalPrompter(console)
    return LockPolicy(
        coordinator,
        choose=prompter.choose,
        confirm_force=prompter.confirm_force,
        confirm_disable=prompter.confirm_disable,
        notify=prompter.notify,
        root=config.repo_root,
    )


def _targets(args: argparse.Namespace, config: ProjectConfig) -> List[str]:
    return [to_repo_path(p, config.repo_root) for p in args.paths]


def cmd_lock(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    exit_code = EXIT_OK
    for target in _targets(args, config):
        result = coordinator.try_lock(target)
        if result.outcome is LockOutcome.LOCKED:
            console.print(f"🔒 Locked {escape(target)}")
        elif result.outcome is LockOutcome.DISABLED:
            console.print(f"ℹ️  Git locking is disabled, {escape(target)} was not locked")
        else:
            console.print(f"❌ Locking failed! {escape(result.owner_display)} has {escape(target)} currently locked")
            exit_code = EXIT_FAILED
    return exit_code


def cmd_unlock(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    exit_code = EXIT_OK
    for target in _targets(args, config):
        if coordinator.unlock(target):
            console.print(f"🔓 Unlocked {escape(target)}")
        else:
            console.print(f"❌ Unlock of {escape(target)} failed")
            exit_code = EXIT_FAILED
    return exit_code


def cmd_force(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    target = to_repo_path(args.path, config.repo_root)
    owner = coordinator.who_holds(target) or "unknown"
    if not args.yes and not Confirm.ask(
        f"Force acquire the lock on {escape(target)} from {escape(owner)}?", default=False, console=console
    ):
        console.print("Cancelled")
        return EXIT_FAILED
    if coordinator.force_acquire(target):
        console.print(f"🔒 Force acquire lock successful! Make sure {escape(owner)} knows about this!")
        return EXIT_OK
    console.print("❌ Force acquire failed. Something must have gone wrong, check the lock manually.")
    return EXIT_FAILED


def cmd_who(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    target = to_repo_path(args.path, config.repo_root)
    owner = coordinator.who_holds(target)
    if owner is None:
        console.print(f"No owner reported for {escape(target)}")
    else:
        console.print(escape(owner))
    return EXIT_OK


def cmd_status(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    table = Table(title="Lock status")
    table.add_column("Path")
    table.add_column("Status")
    table.add_column("Owner")
    for target in _targets(args, config):
        state = coordinator.lock_state(target)
        owner = ""
        status = state.status.value
        if state.status is LockStatus.LOCKED_BY_SELF:
            owner = "you"
        elif state.status is LockStatus.LOCKED_BY_OTHER:
            owner = state.owner or "unknown"
            if not state.verified:
                # Server cannot verify ownership, the holder may be you
                status = "locked (unverified)"
        table.add_row(escape(target), status, escape(owner))
    console.print(table)
    if coordinator.is_disabled():
        console.print("ℹ️  Git locking is currently disabled")
    return EXIT_OK


def cmd_locks(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    records = coordinator.backend.list_locks()
    if not records:
        console.print("No locks")
        return EXIT_OK
    table = Table(title="Locks")
    table.add_column("ID")
    table.add_column("Path")
    table.add_column("Owner")
    table.add_column("Locked at")
    for record in records:
        table.add_row(
            escape(record.id), escape(record.path), escape(record.owner or "unknown"), record.locked_at or ""
        )
    console.print(table)
    return EXIT_OK


def cmd_disable(args: argparse.Namespace, config: ProjectConfig) -> int:
    coordinator = build_coordinator(config)
    if not args.yes and not TerminalPrompter(console).confirm_disable():
        console.print("Cancelled")
        return EXIT_FAILED
    coordinator.disable_system()
    console.print("⚠️  Git locking disabled. Run 'lfslock enable' to turn it back on.")
    return EXIT_OK


def cmd_enable(args: argparse.Namespace, config: ProjectConfig) -> int:
    build_coordinator(config).enable_system()
    console.print("✅ Git locking enabled")
    return EXIT_OK


def cmd_check(args: argparse.Namespace, config: ProjectConfig) -> int:
    policy = build_policy(build_coordinator(config), config)
    targets = _targets(args, config)
    allowed = policy.filter_saves(targets)
    blocked = [t for t in targets if t not in allowed]
    for target in allowed:
        console.print(f"✅ {escape(target)}")
    for target in blocked:
        console.print(f"⛔ {escape(target)} is not locked, do not save it")
    return EXIT_FAILED if blocked else EXIT_OK


def cmd_watch(args: argparse.Namespace, config: ProjectConfig) -> int:
    policy = build_policy(build_coordinator(config), config)
    interval = args.interval if args.interval is not None else config.watch.interval

    def run_pass() -> None:
        current = set(modified_paths(
            cwd=config.repo_root, git_program=config.git.program,
        ))
        # Include ignored targets so they drop out once no longer modified
        policy.check_modified(sorted(current | policy.ignored), lambda t: t in current)

    if args.once:
        run_pass()
        return EXIT_OK

    console.print(f"👀 Watching for modified unlocked files every {interval:g}s (Ctrl+C to stop)")
    try:
        while True:
            run_pass()
            time.sleep(interval)
    except KeyboardInterrupt:
        console.print("\nStopped watching")
    return EXIT_OK


def cmd_init(args: argparse.Namespace, config: ProjectConfig) -> int:
    from lfslock.init import init_project
    return EXIT_OK if init_project(target_dir=config.repo_root, force=args.force) else EXIT_FAILED


Command = Callable[[argparse.Namespace, ProjectConfig], int]

COMMANDS: Dict[str, Command] = {
    "lock": cmd_lock,
    "unlock": cmd_unlock,
    "force": cmd_force,
    "who": cmd_who,
    "status": cmd_status,
    "locks": cmd_locks,
    "disable": cmd_disable,
    "enable": cmd_enable,
    "check": cmd_check,
    "watch": cmd_watch,
    "init": cmd_init,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lfslock",
        description="Cooperative file locking on top of git lfs locks",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: .lfslock/config.yaml in the repo root)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output, including every git command run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("lock", help="Lock files")
    p.add_argument("paths", nargs="+")
    p = sub.add_parser("unlock", help="Unlock files")
    p.add_argument("paths", nargs="+")
    p = sub.add_parser("force", help="Break someone else's lock and take it")
    p.add_argument("path")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    p = sub.add_parser("who", help="Show who holds the lock on a file")
    p.add_argument("path")
    p = sub.add_parser("status", help="Show lock status of files")
    p.add_argument("paths", nargs="+")
    sub.add_parser("locks", help="List all locks")
    p = sub.add_parser("disable", help="Disable lock enforcement for this repository")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    sub.add_parser("enable", help="Re-enable lock enforcement")
    p = sub.add_parser("check", help="Check files before saving; offer to lock read-only ones")
    p.add_argument("paths", nargs="+")
    p = sub.add_parser("watch", help="Warn about modified files that are not locked")
    p.add_argument("--interval", type=float, default=None, help="Seconds between passes")
    p.add_argument("--once", action="store_true", help="Run a single pass and exit")
    p = sub.add_parser("init", help="Create .lfslock/ with a sample config")
    p.add_argument("--force", action="store_true", help="Overwrite existing config files")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 success, 1 lock failure, 2 backend unavailable)
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        console.print(f"❌ {e}", markup=False)
        return EXIT_FAILED

    level = "DEBUG" if args.verbose else config.logging.level
    configure_logging(level, config.log_dir())

    try:
        return COMMANDS[args.command](args, config)
    except InvalidTargetError as e:
        console.print(f"❌ {e}", markup=False)
        return EXIT_FAILED
    except BackendUnavailableError as e:
        logger.error("%s", e)
        console.print("❌ git lfs is not available. Install Git LFS and make sure git is on PATH.")
        return EXIT_BACKEND_UNAVAILABLE


if __name__ == "__main__":
    sys.exit(main())
