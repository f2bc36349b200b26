"""Tests for the prompt/read/expand loop."""

from unittest.mock import MagicMock

import pytest

from histrecall.config import HistoryConfig
from histrecall.events import EventStore
from histrecall.reader import ReadTerm, SilentCommand, read_plain_term
from histrecall.session import HistorySession, read_history


def _session(scripted, lines, output, store=None, read_term=read_plain_term, **config):
    source = scripted(lines)
    session = HistorySession(
        store=store,
        line_source=source,
        read_term=read_term,
        console=output,
        config=HistoryConfig(**config),
    )
    return session, source


class TestPrompt:
    def test_prompt_shows_next_event_number(self, scripted, output):
        store = EventStore()
        for text in ["a", "b", "c", "d"]:
            store.append(text)
        session, source = _session(scripted, ["x."], output, store=store)
        session.read_history(prompt="?- %! ")
        assert source.prompts == ["?- 5 "]

    def test_prompt_without_token(self, scripted, output):
        session, source = _session(scripted, ["x."], output, prompt="> ")
        session.read_history()
        assert source.prompts == ["> "]

    def test_number_advances(self, scripted, output):
        session, source = _session(scripted, ["a.", "b."], output)
        session.read_history()
        session.read_history()
        assert source.prompts == ["1 ?- ", "2 ?- "]


class TestStoreAndEcho:
    def test_plain_line_stored_without_echo(self, scripted, output):
        session, _ = _session(scripted, ["foo(X)"], output)
        assert session.read_history() == ("foo(X)", {})
        assert [e.text for e in session.store.list()] == ["foo(X)"]
        assert output.file.getvalue() == ""

    def test_expanded_line_is_echoed(self, scripted, output):
        session, _ = _session(scripted, ["foo(1)", "!!"], output)
        session.read_history()
        assert session.read_history() == ("foo(1)", {})
        assert output.file.getvalue() == "foo(1).\n"
        assert [e.text for e in session.store.list()] == ["foo(1)", "foo(1)"]

    def test_dont_store(self, scripted, output):
        session, _ = _session(scripted, ["trace", "go"], output)
        assert session.read_history(dont_store={"trace"})[0] == "trace"
        session.read_history(dont_store={"trace"})
        assert [e.text for e in session.store.list()] == ["go"]

    def test_dont_store_from_config(self, scripted, output):
        session, _ = _session(scripted, ["trace"], output, dont_store=frozenset({"trace"}))
        session.read_history()
        assert len(session.store) == 0

    def test_dont_store_checks_expanded_text(self, scripted, output):
        store = EventStore()
        store.append("trace")
        session, _ = _session(scripted, ["!tr"], output, store=store)
        session.read_history(dont_store=["trace"])
        assert len(store) == 1

    def test_expanded_line_offered_to_native_history(self, scripted, output):
        session, source = _session(scripted, ["a", "!!"], output)
        session.read_history()
        session.read_history()
        assert source.history == ["a", "a"]

    def test_native_history_failure_is_ignored(self, scripted, output):
        session, source = _session(scripted, ["a"], output)
        source.add_history = MagicMock(side_effect=RuntimeError("no readline"))
        assert session.read_history()[0] == "a"
        assert len(session.store) == 1


class TestErrors:
    def test_error_discards_line_and_reprompts(self, scripted, output):
        session, source = _session(scripted, ["!!", "ok"], output)
        assert session.read_history()[0] == "ok"
        assert output.file.getvalue() == "! No such event\n"
        assert [e.text for e in session.store.list()] == ["ok"]
        assert source.prompts == ["1 ?- ", "1 ?- "]
        assert source.history == ["ok"]

    def test_bad_substitution_reported(self, scripted, output):
        session, _ = _session(scripted, ["abc", "^x^y", "done"], output)
        session.read_history()
        session.read_history()
        assert "! bad substitution" in output.file.getvalue()
        assert [e.text for e in session.store.list()] == ["abc", "done"]

    def test_empty_line_reprompts(self, scripted, output):
        session, source = _session(scripted, ["", "   ", "x"], output)
        assert session.read_history()[0] == "x"
        assert len(source.prompts) == 3

    def test_keyboard_interrupt_reprompts(self, scripted, output):
        session, source = _session(scripted, [KeyboardInterrupt(), "x"], output)
        assert session.read_history()[0] == "x"
        assert len(source.prompts) == 2

    def test_eof_propagates(self, scripted, output):
        session, _ = _session(scripted, [], output)
        with pytest.raises(EOFError):
            session.read_history()

    def test_reader_errors_propagate(self, scripted, output):
        reader = MagicMock(side_effect=SyntaxError("operator expected"))
        session, _ = _session(scripted, ["foo bar"], output, read_term=reader)
        with pytest.raises(SyntaxError):
            session.read_history()
        assert len(session.store) == 0


class TestCommands:
    def test_history_command_lists_events(self, scripted, output):
        session, source = _session(scripted, ["a", "b", "h", "c"], output)
        session.read_history()
        session.read_history()
        assert session.read_history()[0] == "c"
        assert output.file.getvalue() == "    1   a.\n    2   b.\n"
        # the listing itself is not an event
        assert [e.text for e in session.store.list()] == ["a", "b", "c"]
        assert source.prompts[-2:] == ["3 ?- ", "3 ?- "]

    def test_custom_history_command(self, scripted, output):
        session, _ = _session(scripted, ["a", "history", "b"], output)
        session.read_history(history_command="history")
        session.read_history(history_command="history")
        assert "1   a." in output.file.getvalue()

    def test_help_command(self, scripted, output):
        session, _ = _session(scripted, ["!h", "x"], output)
        assert session.read_history()[0] == "x"
        text = output.file.getvalue()
        assert "History Commands" in text
        assert "!?str^old^new." in text
        assert len(session.store) == 1

    def test_help_command_is_not_expanded(self, scripted, output):
        # "!h" would otherwise be a prefix reference to an empty store
        session, _ = _session(scripted, ["!h", "x"], output)
        session.read_history()
        assert "No such event" not in output.file.getvalue()


class TestSilentCommand:
    def test_silent_command_runs_and_reads_again(self, scripted, output):
        goal = MagicMock(return_value=False)

        def reader(text):
            if text == "$silent":
                return SilentCommand(goal)
            return ReadTerm(text, {"X": 1})

        session, source = _session(scripted, ["$silent", "real"], output, read_term=reader)
        assert session.read_history() == ("real", {"X": 1})
        goal.assert_called_once_with()
        assert source.prompts == ["1 ?- ", None]
        assert [e.text for e in session.store.list()] == ["real"]

    def test_interrupt_after_silent_command_reprompts(self, scripted, output):
        reader = lambda text: SilentCommand(lambda: None) if text == "s" else ReadTerm(text)
        session, source = _session(scripted, ["s", KeyboardInterrupt(), "x"], output, read_term=reader)
        assert session.read_history()[0] == "x"
        assert source.prompts == ["1 ?- ", None, "1 ?- "]
        assert [e.text for e in session.store.list()] == ["x"]

    def test_line_after_silent_command_can_list_history(self, scripted, output):
        reader = lambda text: SilentCommand(lambda: None) if text == "s" else ReadTerm(text)
        session, _ = _session(scripted, ["a", "s", "h", "b"], output, read_term=reader)
        session.read_history()
        assert session.read_history()[0] == "b"
        assert "1   a." in output.file.getvalue()


class TestCleanHistory:
    def test_clean_history(self, scripted, output):
        session, _ = _session(scripted, ["a", "b"], output)
        session.read_history()
        session.clean_history()
        assert session.store.last_event_number == 0
        session.read_history()
        assert session.store.latest().number == 1

    def test_depth_from_config(self, scripted, output):
        session, _ = _session(scripted, [], output, depth=3)
        assert session.store.depth == 3


class TestReadHistoryFunction:
    def test_uses_given_session(self, scripted, output):
        session, _ = _session(scripted, ["!!", "x"], output)
        assert read_history("h", "!h", [], "?- ", session=session) == ("x", {})


class TestDefaultConfig:
    def test_depth_from_environment(self, scripted, output, monkeypatch):
        monkeypatch.setenv("HISTRECALL_DEPTH", "4")
        session = HistorySession(line_source=scripted([]), console=output)
        assert session.store.depth == 4
