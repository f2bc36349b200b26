"""Output formatting for the history session.

User text is printed with markup and highlighting disabled so brackets
and numbers in recalled lines come out exactly as typed.
"""

from collections.abc import Iterable

from rich.console import Console

from .errors import HistoryError
from .events import Event

console = Console()

# Token in a prompt template replaced by the next event number.
EVENT_NUMBER_TOKEN = "%!"

# The history listing right-aligns "<nr>   " in this many columns.
NUMBER_COLUMN = 8


def render_prompt(template: str, number: int) -> str:
    """Replace the first ``%!`` in ``template`` by ``number``."""
    return template.replace(EVENT_NUMBER_TOKEN, str(number), 1)


def format_history(events: Iterable[Event]) -> list[str]:
    """Format events as listing lines: ``"    3   foo."``."""
    return [
        f"{f'{event.number}   ':>{NUMBER_COLUMN}}{event.text}."
        for event in events
    ]


def print_history(events: Iterable[Event], *, out: Console = console) -> None:
    for line in format_history(events):
        out.print(line, markup=False, highlight=False)


def echo_event(text: str, *, out: Console = console) -> None:
    """Show the expanded line so the user sees what will run."""
    out.print(f"{text}.", markup=False, highlight=False)


def print_error(error: HistoryError, *, out: Console = console) -> None:
    out.print(f"! {error.message}", style="red", markup=False, highlight=False)
