"""Event lookups used by history expansion.

Each helper returns the matched event's text or raises :class:`NoSuchEvent`.
Pattern searches run newest-first, so ``!str`` recalls the most recent
matching line.
"""

from .errors import NoSuchEvent
from .events import EventStore


def by_number(store: EventStore, number: int) -> str:
    """Return the text of event ``number``."""
    event = store.get(number)
    if event is None:
        raise NoSuchEvent()
    return event.text


def by_prefix(store: EventStore, prefix: str) -> str:
    """Return the newest event text starting with ``prefix``."""
    event = store.find(lambda e: e.text.startswith(prefix))
    if event is None:
        raise NoSuchEvent()
    return event.text


def by_substring(store: EventStore, fragment: str) -> str:
    """Return the newest event text containing ``fragment``."""
    event = store.find(lambda e: fragment in e.text)
    if event is None:
        raise NoSuchEvent()
    return event.text


def last(store: EventStore) -> str:
    """Return the text of the most recent event."""
    return store.latest().text
