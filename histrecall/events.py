"""Bounded, numbered log of past input lines.

Each stored line becomes an :class:`Event` with a strictly increasing
number. At most ``depth`` events are retained; appending event ``N``
evicts event ``N - depth`` by number, so gaps left by earlier depth
changes are tolerated rather than back-filled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import NoSuchEvent

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 15


@dataclass(frozen=True, slots=True)
class Event:
    """One recorded input line.

    Attributes:
        number: Sequence number assigned when the line was stored.
        text: The (already expanded) line.
    """

    number: int
    text: str


class EventStore:
    """In-memory history log for a single session.

    Usage::

        store = EventStore(depth=15)
        store.append("member(X, [a, b])")
        store.latest().text
    """

    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        _check_depth(depth)
        self._depth = depth
        self._events: dict[int, Event] = {}
        self.last_event_number = 0

    @property
    def depth(self) -> int:
        """Maximum number of events retained at once."""
        return self._depth

    @depth.setter
    def depth(self, value: int) -> None:
        _check_depth(value)
        self._depth = value
        first = self.last_event_number - value
        for number in [n for n in self._events if n <= first]:
            del self._events[number]
            logger.debug("Dropped event %d after depth change to %d", number, value)

    def append(self, text: str) -> int:
        """Store ``text`` as a new event and return its number."""
        number = self.last_event_number + 1
        self.last_event_number = number
        self._events[number] = Event(number, text)
        logger.debug("Stored event %d: %r", number, text)

        # Direct-index eviction: only the event that just fell out of the window.
        stale = number - self._depth
        if stale > 0 and self._events.pop(stale, None) is not None:
            logger.debug("Evicted event %d", stale)
        return number

    def get(self, number: int) -> Event | None:
        """Return the event with the given number, or None."""
        return self._events.get(number)

    def latest(self) -> Event:
        """Return the most recent event.

        Raises:
            NoSuchEvent: If the store is empty.
        """
        if not self._events:
            raise NoSuchEvent()
        return self._events[max(self._events)]

    def find(self, predicate: Callable[[Event], bool]) -> Event | None:
        """Return the newest event satisfying ``predicate``, or None."""
        for number in sorted(self._events, reverse=True):
            event = self._events[number]
            if predicate(event):
                return event
        return None

    def list(self) -> list[Event]:
        """Return retained events in the current window, oldest first."""
        first = self.last_event_number - self._depth + 1
        return [
            self._events[number]
            for number in sorted(self._events)
            if first <= number <= self.last_event_number
        ]

    def clear(self) -> None:
        """Forget every event and restart numbering at 1."""
        self._events.clear()
        self.last_event_number = 0

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, number: object) -> bool:
        return number in self._events


def _check_depth(depth: int) -> None:
    if depth < 1:
        raise ValueError(f"History depth must be at least 1, got {depth}")
