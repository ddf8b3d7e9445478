# src/tskpaste/engine/ops.py

"""
Conversion pipeline.

This module contains:
- reading the shorthand source (file or stdin),
- shorthand -> TaskPaper conversion,
- the single hand-off to a Deliverer.

Parsing and rendering live elsewhere; nothing here inspects lines.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .deliver import Deliverer
from .parse import parse_document
from .render import render_taskpaper

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InputError(Exception):
    """
    Raised when the shorthand source cannot be read.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------

def read_input(source: Optional[str | Path] = None, *, stdin: TextIO | None = None) -> str:
    """
    Read shorthand text from a file, or from stdin when source is None or "-".
    """
    if source is None or str(source) == "-":
        return (stdin or sys.stdin).read()

    p = Path(source)
    if not p.exists():
        raise InputError(str(p), "File does not exist")
    if not p.is_file():
        raise InputError(str(p), "Path is not a file")

    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(str(p), f"Cannot read file: {e}") from e


# ---------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------

def convert_text(text: str) -> str:
    """
    Convert shorthand text to TaskPaper text.
    """
    return render_taskpaper(parse_document(text))


def paste(text: str, deliverer: Deliverer) -> bool:
    """
    Convert `text` and hand the result to `deliverer` exactly once.

    Empty input still delivers (empty content). Returns the deliverer's
    verdict unchanged.
    """
    taskpaper = convert_text(text)

    ok = deliverer.deliver(taskpaper)
    if not ok:
        log.error("Delivery failed")
    else:
        log.info("Delivered %d line(s) of TaskPaper", taskpaper.count("\n"))

    return ok
