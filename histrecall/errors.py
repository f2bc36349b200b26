"""Errors raised while expanding history references.

Every expansion failure is reported to the user as ``! <message>`` and the
whole input line is discarded, so each class carries its display text.
"""


class HistoryError(Exception):
    """Base class for history expansion failures."""

    message = "history error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class NoSuchEvent(HistoryError):
    """Raised when a referenced event, number or pattern is not in the log."""

    message = "No such event"


class BadSubstitution(HistoryError):
    """Raised when the old text of a substitution does not occur."""

    message = "bad substitution"
