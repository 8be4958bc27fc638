"""Terminal implementation of the ``Prompter`` port."""
from __future__ import annotations

from collections.abc import Iterable

import click


class ClickPrompter:
    """Asks questions on the terminal with ``click.prompt``.

    ``confirm`` keeps asking until the answer is one of the positive or
    negative tokens (compared case-insensitively).
    """

    def confirm(self, question: str, positive: Iterable[str], negative: Iterable[str]) -> bool:
        positive = [p.lower() for p in positive]
        negative = [n.lower() for n in negative]
        while True:
            answer = click.prompt(
                f"{question} [{positive[-1]}/{negative[-1]}]",
                default="",
                show_default=False,
            )
            answer = answer.strip().lower()
            if answer in positive:
                return True
            if answer in negative:
                return False
            click.echo(f"Please type {positive[0]} or {negative[0]}.")

    def ask(self, prompt: str) -> str:
        return click.prompt(prompt, prompt_suffix="", default="", show_default=False).strip()
