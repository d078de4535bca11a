"""Tests for terminal prompts."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from lfslock.prompts import TerminalPrompter
from lfslock.types import UserChoice


@pytest.fixture
def prompter() -> TerminalPrompter:
    return TerminalPrompter(Console(file=io.StringIO()))


@pytest.mark.parametrize("key,choice", [
    ("l", UserChoice.LOCK_NOW),
    ("o", UserChoice.IGNORE_ONCE),
    ("s", UserChoice.IGNORE_SESSION),
    ("d", UserChoice.DISABLE_SYSTEM),
])
def test_choose_maps_keys(prompter: TerminalPrompter, key: str, choice: UserChoice) -> None:
    with patch('lfslock.prompts.Prompt.ask', return_value=key):
        assert prompter.choose("Assets/Main.unity") is choice


def test_confirm_force_shows_owner(prompter: TerminalPrompter) -> None:
    with patch('lfslock.prompts.Confirm.ask', return_value=True):
        assert prompter.confirm_force("Assets/Main.unity", "Alice") is True
    assert "Alice" in prompter.console.file.getvalue()


def test_markup_in_names_is_printed_literally(prompter: TerminalPrompter) -> None:
    with patch('lfslock.prompts.Prompt.ask', return_value="o"):
        prompter.choose("Assets/[old]/Main.unity")
    prompter.notify("Make sure [bob] knows about this!")

    output = prompter.console.file.getvalue()
    assert "[old]" in output
    assert "[bob]" in output


def test_confirm_disable(prompter: TerminalPrompter) -> None:
    with patch('lfslock.prompts.Confirm.ask', return_value=False):
        assert prompter.confirm_disable() is False
