"""
Terminal presentation for gitcm.

:class:`Console` owns every line the tool prints and every question it
asks: status lines, boxed panels and the single-choice prompts. It holds
no business logic; the workflow decides what to show and when.
"""

from __future__ import annotations

import unicodedata
from typing import List, Optional, Sequence

import click

from gitcm.models import SelectionOption, UserDecision


class PromptAborted(Exception):
    """Raised when the user interrupts a prompt (Ctrl-C or end of input)."""

    pass


def display_width(text: str) -> int:
    """Terminal columns taken by ``text``; wide characters such as emoji count twice."""
    width = 0
    for char in text:
        if unicodedata.combining(char) or char == "\ufe0f":
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def format_commit_type_option(option: SelectionOption) -> str:
    return f"{option.emoji} {option.value.ljust(8)} - {option.description}"


def format_language_option(option: SelectionOption) -> str:
    return f"{option.emoji} {option.name}"


def format_option(option: SelectionOption) -> str:
    """Menu label for an option: commit types carry a description, languages do not."""
    if option.description:
        return format_commit_type_option(option)
    return format_language_option(option)


_DECISIONS = {
    "u": UserDecision.USE,
    "e": UserDecision.EDIT,
    "c": UserDecision.CANCEL,
}


class Console:
    """Status output and prompts, rendered with click."""

    BOX_MAX_WIDTH = 76

    def header(self, text: str) -> None:
        click.echo("")
        click.echo(click.style(text, fg="blue", bold=True))

    def info(self, message: str, indent: int = 0) -> None:
        prefix = "  " * indent
        click.echo(click.style(f"{prefix}ℹ {message}", fg="blue"))

    def success(self, message: str, indent: int = 0) -> None:
        prefix = "  " * indent
        click.echo(click.style(f"{prefix}✓ {message}", fg="green"))

    def warning(self, message: str, indent: int = 0) -> None:
        prefix = "  " * indent
        click.echo(click.style(f"{prefix}⚠ {message}", fg="yellow"))

    def error(self, label: str, detail: Optional[object] = None) -> None:
        """Print ``label`` and the underlying error detail to stderr."""
        text = f"✗ {label}"
        if detail is not None and str(detail):
            text += f": {detail}"
        click.echo(click.style(text, fg="red"), err=True)

    def delimiter(self) -> None:
        click.echo(click.style("─" * 12, fg="cyan"))

    def box(self, title: str, content: str, fg: str = "green") -> None:
        """Print ``content`` inside a titled box.

        Long lines are kept whole; the box widens up to
        :attr:`BOX_MAX_WIDTH` and the right border is only drawn for
        lines that fit.
        """
        lines = content.splitlines() or [""]
        title_width = display_width(title)
        inner = max(title_width + 2, max(display_width(line) for line in lines))
        inner = min(inner, self.BOX_MAX_WIDTH)

        def echo(text: str) -> None:
            click.echo(click.style(text, fg=fg))

        echo(f"┌─ {title} {'─' * max(inner - title_width - 1, 1)}┐")
        for line in lines:
            width = display_width(line)
            if width <= inner:
                echo(f"│ {line}{' ' * (inner - width)} │")
            else:
                echo(f"│ {line}")
        echo(f"└{'─' * (inner + 2)}┘")

    def select(self, message: str, options: Sequence[SelectionOption]) -> str:
        """Ask for one of ``options`` and return its value.

        The first option is the default.
        """
        click.echo("")
        for idx, option in enumerate(options, start=1):
            click.echo(f"   {idx:>2}. {format_option(option)}")
        try:
            choice = click.prompt(
                f"   {message}",
                type=click.IntRange(1, len(options)),
                default=1,
                show_default=True,
            )
        except click.Abort as exc:
            raise PromptAborted() from exc
        return options[choice - 1].value

    def decide(self) -> UserDecision:
        """Ask what to do with the drafted commit message."""
        choices: List[str] = [
            "U = Use as is - commit with this message and description",
            "E = Edit - open in editor to modify before committing",
            "C = Cancel - I'll craft my own message manually",
        ]
        click.echo("")
        click.echo("   What would you like to do with this commit message?")
        for line in choices:
            click.echo(f"     {line}")
        try:
            choice = click.prompt(
                "   Choose action",
                type=click.Choice(["U", "E", "C"], case_sensitive=False),
                default="U",
                show_choices=True,
                show_default=True,
            )
        except click.Abort as exc:
            raise PromptAborted() from exc
        return _DECISIONS[choice.strip().lower()]
