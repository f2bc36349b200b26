"""Raw-line sources for the history session.

``PromptLineSource`` reads through prompt_toolkit with an in-memory
history, so arrow-key recall offers the expanded lines the session
records. ``StreamLineSource`` reads from a plain text stream when input
is piped.
"""

import logging
import sys
from typing import Protocol, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    """Where the session gets raw input lines from."""

    def read_line(self, prompt: str | None) -> str:
        """Read one line, showing ``prompt`` first if given.

        Raises:
            EOFError: At end of input.
        """

    def add_history(self, line: str) -> None:
        """Offer an expanded line to the source's own history."""


class PromptLineSource:
    """Interactive line source backed by a prompt_toolkit PromptSession."""

    def __init__(self, session: PromptSession | None = None) -> None:
        self.session: PromptSession = session or PromptSession(history=InMemoryHistory())

    def read_line(self, prompt: str | None) -> str:
        return self.session.prompt(prompt or "")

    def add_history(self, line: str) -> None:
        history = self.session.history
        # PromptSession already appended the raw line on accept.
        strings = history.get_strings()
        if strings and strings[-1] == line:
            return
        history.append_string(line)


class StreamLineSource:
    """Line source reading from a text stream such as piped stdin."""

    def __init__(self, stream: TextIO | None = None, output: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self.output = output if output is not None else sys.stdout

    def read_line(self, prompt: str | None) -> str:
        if prompt:
            self.output.write(prompt)
            self.output.flush()
        line = self.stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def add_history(self, line: str) -> None:
        logger.debug("Stream source keeps no history; ignoring %r", line)
