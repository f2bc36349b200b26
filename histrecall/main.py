"""Click CLI entry point for histrecall.

Runs an interactive read loop with history expansion and prints each term
it reads. Piped input is read line by line without prompt_toolkit.
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import (
    DEFAULT_HELP_COMMAND,
    DEFAULT_HISTORY_COMMAND,
    DEFAULT_PROMPT,
    DEPTH_ENV_VAR,
    HistoryConfig,
)
from .events import DEFAULT_DEPTH
from .history import PromptLineSource, StreamLineSource
from .session import HistorySession

console = Console()

# Term that ends the read loop.
HALT = "halt"


@click.command()
@click.option(
    "--depth",
    type=int,
    default=DEFAULT_DEPTH,
    show_default=True,
    envvar=DEPTH_ENV_VAR,
    help="Number of events kept in the history.",
)
@click.option(
    "--prompt",
    default=DEFAULT_PROMPT,
    show_default=True,
    help="Prompt template; '%!' is replaced by the next event number.",
)
@click.option(
    "--history-command",
    default=DEFAULT_HISTORY_COMMAND,
    show_default=True,
    help="Input that lists the history.",
)
@click.option(
    "--help-command",
    default=DEFAULT_HELP_COMMAND,
    show_default=True,
    help="Input that shows the history help.",
)
@click.option(
    "--dont-store",
    multiple=True,
    help="Input that is never recorded (repeatable).",
)
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.version_option(version=__version__, prog_name="histrecall")
def cli(
    depth: int,
    prompt: str,
    history_command: str,
    help_command: str,
    dont_store: tuple[str, ...],
    verbose: bool,
) -> None:
    """Read lines with csh-style history recall.

    Type !h for the history syntax, h to list the history, and halt or
    Ctrl-D to exit.
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        config = HistoryConfig(
            depth=depth,
            prompt=prompt,
            history_command=history_command,
            help_command=help_command,
            dont_store=frozenset(dont_store),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--depth") from None

    session = HistorySession(
        line_source=_line_source(),
        console=console,
        config=config,
    )
    run_loop(session)


def run_loop(session: HistorySession) -> None:
    """Read terms until EOF or ``halt``, printing each one."""
    session.clean_history()
    try:
        while True:
            try:
                term, bindings = session.read_history()
            except EOFError:
                console.print("\nGoodbye")
                break

            if term == HALT:
                console.print("Goodbye")
                break

            console.print(f"[dim]term:[/dim] {escape(str(term))}", highlight=False)
            for name, value in bindings.items():
                console.print(f"  {name} = {value}", markup=False, highlight=False)
    finally:
        session.clean_history()


def _line_source() -> PromptLineSource | StreamLineSource:
    if sys.stdin.isatty():
        return PromptLineSource()
    return StreamLineSource()
