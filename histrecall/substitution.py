"""Single-occurrence text substitution for ``^old^new`` specs."""

from dataclasses import dataclass

from .errors import BadSubstitution

SUBST_SEP = "^"


@dataclass(frozen=True, slots=True)
class SubstitutionSpec:
    """An ``old^new`` replacement applied to a recalled event.

    Attributes:
        old: Text to find. Empty matches at the start of the line.
        new: Replacement text, possibly empty.
    """

    old: str
    new: str

    def apply(self, text: str) -> str:
        return substitute(self.old, self.new, text)


def substitute(old: str, new: str, text: str) -> str:
    """Replace the first occurrence of ``old`` in ``text`` by ``new``.

    Raises:
        BadSubstitution: If ``old`` does not occur in ``text``.
    """
    index = text.find(old)
    if index < 0:
        raise BadSubstitution()
    return text[:index] + new + text[index + len(old):]


def parse_substitution(text: str, start: int) -> tuple[SubstitutionSpec, int] | None:
    """Parse an ``old^new`` pair starting at ``start``.

    ``start`` points just past the opening ``^``. ``new`` ends at the next
    ``^`` (which is consumed) or at the end of ``text``.

    Returns:
        The spec and the index just past what was consumed, or None if
        ``old`` has no closing ``^``.
    """
    old_end = text.find(SUBST_SEP, start)
    if old_end < 0:
        return None
    new_end = text.find(SUBST_SEP, old_end + 1)
    if new_end < 0:
        return SubstitutionSpec(text[start:old_end], text[old_end + 1:]), len(text)
    return SubstitutionSpec(text[start:old_end], text[old_end + 1:new_end]), new_end + 1
