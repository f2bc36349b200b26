"""Shared test fixtures for the histrecall test suite."""

import io

import pytest
from rich.console import Console

from histrecall.events import EventStore


class ScriptedLineSource:
    """Line source that replays canned input and records prompts."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []
        self.history = []

    def read_line(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    def add_history(self, line):
        self.history.append(line)


@pytest.fixture
def store():
    """An empty store with the default depth."""
    return EventStore()


@pytest.fixture
def hello_store():
    """Store holding 1: "hello world" and 2: "help me"."""
    store = EventStore()
    store.append("hello world")
    store.append("help me")
    return store


@pytest.fixture
def output():
    """A rich Console writing plain text into a StringIO."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=100, color_system=None, force_terminal=False)
    return console


@pytest.fixture
def scripted():
    return ScriptedLineSource
