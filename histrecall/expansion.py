"""csh-style history expansion.

Expansions performed on a raw input line:

    ^old^new        substitute <old> by <new> in the last event
    !!              last event
    !nr             event number <nr>
    !str            last event starting with <str>
    !?str           last event containing <str>
    !spec^old^new   substitute <old> by <new> in the event <spec> selects

The line is scanned once, left to right. A ``!`` followed by anything but
a letter, digit, ``_``, ``?`` or ``!`` is ordinary text, as is an
unterminated ``^old`` spec. Any lookup or substitution failure aborts the
whole expansion.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from . import matcher
from .errors import NoSuchEvent
from .events import EventStore
from .substitution import SUBST_SEP, SubstitutionSpec, parse_substitution

logger = logging.getLogger(__name__)

BANG = "!"
SEARCH = "?"

_WORD = re.compile(r"[A-Za-z0-9_]*")


# --- Event references ---


@dataclass(frozen=True, slots=True)
class Last:
    """``!!``: the most recent event."""


@dataclass(frozen=True, slots=True)
class ByNumber:
    """``!nr``: the event with this number."""

    number: int


@dataclass(frozen=True, slots=True)
class ByPrefix:
    """``!str``: the newest event starting with ``prefix``."""

    prefix: str


@dataclass(frozen=True, slots=True)
class BySubstring:
    """``!?str``: the newest event containing ``fragment``."""

    fragment: str


EventReference = Last | ByNumber | ByPrefix | BySubstring


@dataclass(frozen=True, slots=True)
class Expansion:
    """Result of expanding one input line.

    Attributes:
        text: The expanded line.
        changed: True if any reference or substitution was applied.
    """

    text: str
    changed: bool


def is_event_char(char: str) -> bool:
    """Return True if ``char`` after a ``!`` starts an event reference."""
    return char in (BANG, SEARCH, "_") or (char.isascii() and char.isalnum())


def parse_reference(text: str, pos: int) -> tuple[EventReference, int] | None:
    """Parse the event specifier that starts at ``pos`` (just past a ``!``).

    Returns:
        The reference and the index just past it, or None when the
        character at ``pos`` does not start a reference.

    Raises:
        NoSuchEvent: A word starting with a digit is not all digits.
    """
    if pos >= len(text) or not is_event_char(text[pos]):
        return None

    char = text[pos]
    if char == BANG:
        return Last(), pos + 1
    if char == SEARCH:
        match = _WORD.match(text, pos + 1)
        return BySubstring(match.group()), match.end()

    match = _WORD.match(text, pos)
    if char.isdigit():
        # A number runs to the end of the word; "!2abc" names no event.
        if not match.group().isdigit():
            raise NoSuchEvent()
        return ByNumber(int(match.group())), match.end()
    return ByPrefix(match.group()), match.end()


def resolve_reference(ref: EventReference, store: EventStore) -> str:
    """Return the text of the event ``ref`` selects.

    Raises:
        NoSuchEvent: If no stored event matches.
    """
    match ref:
        case Last():
            return matcher.last(store)
        case ByNumber(number=number):
            return matcher.by_number(store, number)
        case ByPrefix(prefix=prefix):
            return matcher.by_prefix(store, prefix)
        case BySubstring(fragment=fragment):
            return matcher.by_substring(store, fragment)
        case _:
            raise TypeError(f"Unknown event reference: {ref!r}")


def expand_history(raw: str, store: EventStore) -> Expansion:
    """Expand every history reference in ``raw`` against ``store``.

    Raises:
        NoSuchEvent: A referenced event does not exist.
        BadSubstitution: The old text of a substitution was not found.
    """
    if raw.startswith(SUBST_SEP):
        expansion = _expand_quick_substitution(raw, store)
        if expansion is not None:
            logger.debug("Expanded %r -> %r", raw, expansion.text)
            return expansion

    parts: list[str] = []
    changed = False
    pos = 0

    while pos < len(raw):
        char = raw[pos]
        if char != BANG:
            parts.append(char)
            pos += 1
            continue

        parsed = parse_reference(raw, pos + 1)
        if parsed is None:
            parts.append(char)
            pos += 1
            continue

        ref, pos = parsed
        event = resolve_reference(ref, store)

        if raw.startswith(SUBST_SEP, pos):
            subst = parse_substitution(raw, pos + 1)
            if subst is not None:
                spec, pos = subst
                event = spec.apply(event)

        parts.append(event)
        changed = True

    expanded = "".join(parts)
    if changed:
        logger.debug("Expanded %r -> %r", raw, expanded)
    return Expansion(expanded, changed)


def _expand_quick_substitution(raw: str, store: EventStore) -> Expansion | None:
    """Handle a line of the form ``^old^new``.

    Returns None when the line holds no second ``^``.
    """
    old_end = raw.find(SUBST_SEP, 1)
    if old_end < 0:
        return None

    event = matcher.last(store)
    new = raw[old_end + 1:]
    if new.endswith(SUBST_SEP):
        new = new[:-1]
    spec = SubstitutionSpec(raw[1:old_end], new)
    return Expansion(spec.apply(event), True)
