"""Operator prompts.

The release workflow asks before committing changes it did not make. Prompts
go through a Prompter so runs can be scripted (--yes) and tested without a
terminal.
"""

from __future__ import annotations

from typing import Protocol

import click


class Prompter(Protocol):
    def confirm(self, prompt: str) -> bool: ...

    def ask(self, prompt: str) -> str: ...


class TerminalPrompter:
    """Prompts the operator on the controlling terminal via click."""

    def confirm(self, prompt: str) -> bool:
        try:
            return click.confirm(prompt, default=False)
        except click.Abort:
            # EOF or Ctrl-C at the prompt counts as "no"
            print()
            return False

    def ask(self, prompt: str) -> str:
        return click.prompt(prompt, type=str)


class NonInteractivePrompter:
    """Answers every prompt with fixed values.

    Args:
        answer: Value returned by confirm().
        message: Value returned by ask(), used as the commit message.
    """

    def __init__(self, answer: bool = True, message: str = "commit changed files"):
        self.answer = answer
        self.message = message

    def confirm(self, prompt: str) -> bool:
        print(f"{prompt} {'y' if self.answer else 'n'}")
        return self.answer

    def ask(self, prompt: str) -> str:
        print(f"{prompt}: {self.message}")
        return self.message
