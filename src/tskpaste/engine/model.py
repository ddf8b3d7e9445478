# src/tskpaste/engine/model.py

"""
Core domain models.

This module defines the in-memory representations of shorthand lines,
document-wide globals, and parsed tasks.

No I/O should happen here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------

class LineKind(str, Enum):
    """
    What a single shorthand line contributes to the document.

    Classification looks at the first character only, before any
    content is stripped.
    """

    GLOBAL_TAG = "global_tag"
    GLOBAL_DEFER = "global_defer"
    GLOBAL_DUE = "global_due"
    BLANK = "blank"
    TASK = "task"

    @property
    def is_directive(self) -> bool:
        return self in (LineKind.GLOBAL_TAG, LineKind.GLOBAL_DEFER, LineKind.GLOBAL_DUE)


_DIRECTIVE_KINDS = {
    "#": LineKind.GLOBAL_TAG,
    "@": LineKind.GLOBAL_DEFER,
    "!": LineKind.GLOBAL_DUE,
}


def classify_line(line: str) -> LineKind:
    """
    Classify a raw line.

    Whitespace-only lines count as blank; an indented `#` is a task,
    not a directive.
    """
    if not line.strip():
        return LineKind.BLANK

    return _DIRECTIVE_KINDS.get(line[0], LineKind.TASK)


# ---------------------------------------------------------------------
# Globals
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Globals:
    """
    Values applied to every task that lacks its own.

    `tags` keeps first-seen order without duplicates.
    """

    tags: tuple[str, ...] = ()
    defer: Optional[str] = None
    due: Optional[str] = None


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """
    A single task extracted from one shorthand line.

    Notes:
    - title may be empty (a line holding only tags/dates).
    - tags lists local tags first, then inherited globals.
    - defer/due are passed through verbatim, never validated as dates.
    """

    title: str
    tags: tuple[str, ...] = ()
    defer: Optional[str] = None
    due: Optional[str] = None
    note: Optional[str] = None

    # -----------------------------------------------------------------
    # Convenience properties
    # -----------------------------------------------------------------

    @property
    def has_note(self) -> bool:
        return bool(self.note)

    @property
    def is_untitled(self) -> bool:
        return not self.title
