"""Read loop that ties history expansion to the prompt and term reader.

One prompt cycle: render the prompt, read a raw line, then either list the
history, show help, or expand the line, hand it to the term reader and
record it. Expansion errors discard the line and re-prompt.
"""

import logging
from collections.abc import Iterable
from typing import Any

from rich.console import Console

from .config import HistoryConfig
from .display import console as default_console
from .display import echo_event, print_error, print_history, render_prompt
from .errors import HistoryError
from .events import EventStore
from .expansion import expand_history
from .help import print_help
from .history import LineSource, PromptLineSource
from .reader import ReadTerm, SilentCommand, TermReader, read_plain_term

logger = logging.getLogger(__name__)


class HistorySession:
    """A prompt/read/expand loop over one event store.

    Usage::

        session = HistorySession(line_source=PromptLineSource())
        term, bindings = session.read_history()
    """

    def __init__(
        self,
        store: EventStore | None = None,
        line_source: LineSource | None = None,
        read_term: TermReader = read_plain_term,
        console: Console | None = None,
        config: HistoryConfig | None = None,
    ) -> None:
        self.config = config or HistoryConfig.from_env()
        self.store = store if store is not None else EventStore(self.config.depth)
        self.line_source = line_source if line_source is not None else PromptLineSource()
        self.read_term = read_term
        self.console = console or default_console

    def read_history(
        self,
        history_command: str | None = None,
        help_command: str | None = None,
        dont_store: Iterable[str] | None = None,
        prompt: str | None = None,
    ) -> tuple[Any, dict[str, Any]]:
        """Prompt until a line produces a term, and return it.

        Args:
            history_command: Input that lists the history.
            help_command: Input that shows the history help.
            dont_store: Expanded lines that are not recorded.
            prompt: Prompt template; ``%!`` becomes the next event number.

        Returns:
            The term and its variable bindings, as produced by the reader.

        Raises:
            EOFError: The line source is exhausted.
        """
        history_command = history_command if history_command is not None else self.config.history_command
        help_command = help_command if help_command is not None else self.config.help_command
        skip = frozenset(dont_store) if dont_store is not None else self.config.dont_store
        template = prompt if prompt is not None else self.config.prompt

        while True:
            text = render_prompt(template, self.store.last_event_number + 1)
            try:
                raw = self.line_source.read_line(text)
            except KeyboardInterrupt:
                # Ctrl-C: cancel current line
                continue

            result = self._dispatch(raw, history_command, help_command, skip)
            if result is not None:
                return result.term, result.bindings

    def clean_history(self) -> None:
        """Forget all events and restart numbering."""
        self.store.clear()

    def _dispatch(
        self,
        raw: str,
        history_command: str,
        help_command: str,
        dont_store: frozenset[str],
    ) -> ReadTerm | None:
        """Handle one raw line. Returns None when the loop should re-prompt."""
        while True:
            line = raw.strip()
            if not line:
                return None

            if line == history_command:
                print_history(self.store.list(), out=self.console)
                return None

            if line == help_command:
                print_help(history_command, help_command, out=self.console)
                return None

            try:
                expansion = expand_history(line, self.store)
            except HistoryError as exc:
                logger.debug("Discarding %r: %s", line, exc.message)
                print_error(exc, out=self.console)
                return None

            self._add_native_history(expansion.text)

            result = self.read_term(expansion.text)
            if isinstance(result, SilentCommand):
                result.goal()
                # Read on without a prompt, as if the silent line never came.
                try:
                    raw = self.line_source.read_line(None)
                except KeyboardInterrupt:
                    return None
                continue

            if expansion.text not in dont_store:
                self.store.append(expansion.text)
            if expansion.changed:
                echo_event(expansion.text, out=self.console)
            return result

    def _add_native_history(self, line: str) -> None:
        try:
            self.line_source.add_history(line)
        except Exception as exc:
            logger.debug("Line source rejected history entry %r: %s", line, exc)


def read_history(
    history_command: str,
    help_command: str,
    dont_store: Iterable[str],
    prompt: str,
    *,
    session: HistorySession | None = None,
) -> tuple[Any, dict[str, Any]]:
    """Read one term with history expansion.

    Without ``session`` a fresh interactive session (and empty history) is
    used, so callers that want recall across calls should keep a session.
    """
    session = session or HistorySession()
    return session.read_history(history_command, help_command, dont_store, prompt)
