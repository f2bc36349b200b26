"""Help text for history commands."""

from rich.console import Console
from rich.table import Table

from .display import console

HISTORY_HELP: dict[str, str] = {
    "!!": "Repeat last query",
    "!nr": "Repeat query numbered <nr>",
    "!str": "Repeat last query starting with <str>",
    "!?str": "Repeat last query holding <str>",
    "^old^new": "Substitute <old> into <new> of last query",
    "!nr^old^new": "Substitute in query numbered <nr>",
    "!str^old^new": "Substitute in query starting with <str>",
    "!?str^old^new": "Substitute in query holding <str>",
}


def print_help(history_command: str, help_command: str, *, out: Console = console) -> None:
    """Print the history command overview.

    Args:
        history_command: Literal that lists the history.
        help_command: Literal that shows this overview.
        out: Console to write to.
    """
    table = Table(title="History Commands", show_header=True, title_style="bold")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Description")

    for syntax, desc in HISTORY_HELP.items():
        table.add_row(f"{syntax}.", desc)
    table.add_row(f"{history_command}.", "Show history list")
    table.add_row(f"{help_command}.", "Show this list")

    out.print(table)
