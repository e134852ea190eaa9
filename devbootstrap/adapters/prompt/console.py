"""
Console prompter — the interaction provider for a real terminal.

Answers are read with click so the CLI's CliRunner can drive them in
tests. A yes/no answer counts as "yes" for ``y``, ``yes`` and (when the
default is yes) empty input, case-insensitive; anything else is "no".
"""

from __future__ import annotations

import click

from devbootstrap.adapters.base import MessageStyle, Prompter

_STYLES: dict[str, dict] = {
    "info": {"fg": "cyan"},
    "success": {"fg": "green"},
    "warning": {"fg": "yellow"},
    "error": {"fg": "red"},
    "plain": {},
}

_YES = {"y", "yes"}


def parse_yes_no(answer: str, default: bool = True) -> bool:
    """Interpret a yes/no answer.

    Empty input returns the default; otherwise only ``y``/``yes`` is yes.
    """
    normalized = answer.strip().lower()
    if not normalized:
        return default
    return normalized in _YES


class ConsolePrompter(Prompter):
    """Ask questions on stdin and print to stdout via click."""

    def ask_yes_no(self, question: str, default: bool = True) -> bool:
        suffix = "(Y/n)" if default else "(y/N)"
        answer = click.prompt(
            f"{question} {suffix}",
            default="",
            show_default=False,
            prompt_suffix=": ",
        )
        return parse_yes_no(answer, default)

    def ask_text(self, prompt: str, default: str = "") -> str:
        label = f"{prompt} (default: {default})" if default else prompt
        answer = click.prompt(label, default="", show_default=False, prompt_suffix=": ")
        return answer.strip() or default

    def wait_for_enter(self, message: str) -> None:
        click.prompt(message, default="", show_default=False, prompt_suffix=" ")

    def show(self, message: str, style: MessageStyle = "info") -> None:
        click.secho(message, **_STYLES.get(style, {}))
