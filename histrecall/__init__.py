"""histrecall — csh-style history recall for interactive read loops.

Records each line entered at a prompt as a numbered event and expands
``!!``, ``!nr``, ``!str``, ``!?str``, ``^old^new`` and ``!spec^old^new``
references before handing the line to a term reader.

Architecture:
    LineSource --raw line--> HistorySession --expand--> expand_history
                                  |                         |
                                  |                   EventStore (matcher,
                                  v                    substitution)
                             TermReader --> (term, bindings)
"""

__version__ = "0.1.0"

from .config import HistoryConfig
from .errors import BadSubstitution, HistoryError, NoSuchEvent
from .events import Event, EventStore
from .expansion import Expansion, expand_history
from .reader import ReadTerm, SilentCommand
from .session import HistorySession, read_history
from .substitution import substitute

__all__ = [
    "BadSubstitution",
    "Event",
    "EventStore",
    "Expansion",
    "HistoryConfig",
    "HistoryError",
    "HistorySession",
    "NoSuchEvent",
    "ReadTerm",
    "SilentCommand",
    "__version__",
    "expand_history",
    "read_history",
    "substitute",
]
