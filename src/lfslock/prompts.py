"""Terminal prompts for the interactive lock flow."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from lfslock.types import UserChoice

_CHOICE_KEYS = {
    "l": UserChoice.LOCK_NOW,
    "o": UserChoice.IGNORE_ONCE,
    "s": UserChoice.IGNORE_SESSION,
    "d": UserChoice.DISABLE_SYSTEM,
}


class TerminalPrompter:
    """Asks the lock-flow questions on a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def choose(self, target: str) -> UserChoice:
        self.console.print(Panel(
            f"You have modified [bold]{escape(target)}[/bold] without locking it.\n"
            "You will not be able to save this file without locking it.\n\n"
            "  [bold]l[/bold]  Lock it now\n"
            "  [bold]o[/bold]  Ignore for now (ask again next time)\n"
            "  [bold]s[/bold]  I am ok with not being able to save this file (stop asking)\n"
            "  [bold]d[/bold]  Disable git locking",
            title="Git Lock",
            border_style="yellow",
        ))
        key = Prompt.ask(
            "What would you like to do?",
            choices=list(_CHOICE_KEYS),
            default="l",
            console=self.console,
        )
        return _CHOICE_KEYS[key]

    def confirm_force(self, target: str, owner: str) -> bool:
        self.console.print(f"❌ Locking failed! [bold]{escape(owner)}[/bold] has {escape(target)} currently locked.")
        return Confirm.ask(
            f"Force acquire the lock from {escape(owner)}? "
            "(No = keep working on the file without saving it)",
            default=False,
            console=self.console,
        )

    def confirm_disable(self) -> bool:
        self.console.print(
            "⚠️  Disabling git locking affects every lfslock session on this repository. "
            "Only do this if you know what you are doing."
        )
        return Confirm.ask(
            "Are you sure you want to disable git locking?",
            default=False,
            console=self.console,
        )

    def notify(self, message: str) -> None:
        self.console.print(message, markup=False)
