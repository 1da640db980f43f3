from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Phase(Enum):
    """Which half of a node visit is being dispatched."""
    ENTER = "enter"
    LEAVE = "leave"


class EventKey(NamedTuple):
    """Registry key: a traversal phase paired with a node kind."""
    phase: Phase
    kind: str


class Visibility(Enum):
    """Member visibility tracked while walking a class body."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class Violation:
    """One issue found by a check, tied to a file and line."""

    file: str
    line: int
    message: str
    reference_url: str = ""
