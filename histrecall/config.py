"""Session configuration.

Defaults can be overridden by CLI options; the history depth may also
come from the ``HISTRECALL_DEPTH`` environment variable.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .events import DEFAULT_DEPTH

DEPTH_ENV_VAR = "HISTRECALL_DEPTH"

DEFAULT_PROMPT = "%! ?- "
DEFAULT_HISTORY_COMMAND = "h"
DEFAULT_HELP_COMMAND = "!h"


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Settings for a history session.

    Attributes:
        depth: Maximum number of events retained.
        prompt: Prompt template; ``%!`` becomes the next event number.
        history_command: Input that lists the history instead of running.
        help_command: Input that shows the history help.
        dont_store: Expanded lines that are never recorded.
    """

    depth: int = DEFAULT_DEPTH
    prompt: str = DEFAULT_PROMPT
    history_command: str = DEFAULT_HISTORY_COMMAND
    help_command: str = DEFAULT_HELP_COMMAND
    dont_store: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"History depth must be at least 1, got {self.depth}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "HistoryConfig":
        """Build a config, taking the depth from the environment if set.

        Raises:
            ValueError: If the environment depth is not a positive integer.
        """
        env = os.environ if environ is None else environ
        raw = env.get(DEPTH_ENV_VAR)
        if raw is not None and "depth" not in overrides:
            try:
                overrides["depth"] = int(raw)
            except ValueError:
                raise ValueError(f"{DEPTH_ENV_VAR} must be an integer, got {raw!r}") from None
        return cls(**overrides)
