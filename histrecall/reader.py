"""Seam between the history session and the downstream term reader.

A term reader turns an expanded line into either a :class:`ReadTerm` (the
term plus its variable bindings) or a :class:`SilentCommand`, a side effect
to run before reading another line as if nothing had been entered.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

FULL_STOP = "."


@dataclass(frozen=True, slots=True)
class ReadTerm:
    """A parsed term and the bindings of its variables."""

    term: Any
    bindings: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SilentCommand:
    """A side effect requested by the input instead of a term.

    Attributes:
        goal: Called once; its return value is ignored.
    """

    goal: Callable[[], object]


TermReader = Callable[[str], ReadTerm | SilentCommand]


def read_plain_term(text: str) -> ReadTerm:
    """Default reader: the line itself is the term, without a final full stop."""
    term = text.strip()
    if term.endswith(FULL_STOP):
        term = term[:-1].rstrip()
    return ReadTerm(term)
