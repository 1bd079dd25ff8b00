"""Numbered selection menus."""

from dataclasses import dataclass
from typing import Generic, Optional, TextIO, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

T = TypeVar("T")

QUIT_KEY = "q"


@dataclass(frozen=True)
class Choice(Generic[T]):
    """A menu entry. Disabled entries are shown but cannot be picked."""

    label: str
    value: T
    disabled: Optional[str] = None


def select_one(
    title: str,
    choices: list[Choice[T]],
    *,
    console: Console,
    stream: Optional[TextIO] = None,
) -> Optional[T]:
    """Ask the user to pick one of the choices.

    Args:
        title: Prompt shown above the entries
        choices: Entries in display order
        console: Console to render to and read from
        stream: Optional input stream, stdin is used when omitted

    Returns:
        The selected value, or None if the user quit or aborted the prompt.
        An empty answer counts as quit.
    """
    console.print(f"[bold]{escape(title)}[/bold]")
    selectable = []
    for number, choice in enumerate(choices, start=1):
        label = escape(choice.label)
        if choice.disabled is not None:
            console.print(f"[dim]{number:>3}) {label} ({escape(choice.disabled)})[/dim]", highlight=False)
        else:
            console.print(f"{number:>3}) {label}", highlight=False)
            selectable.append(str(number))
    console.print(f"{QUIT_KEY:>3}) Quit", highlight=False)

    try:
        answer = Prompt.ask(
            "Select",
            console=console,
            choices=[*selectable, QUIT_KEY],
            show_choices=False,
            default=QUIT_KEY,
            show_default=False,
            stream=stream,
        )
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Aborted[/yellow]")
        return None

    if answer == QUIT_KEY:
        return None
    return choices[int(answer) - 1].value
