# src/tskpaste/engine/render.py

"""
Rendering helpers.

This module is responsible for:
- TaskPaper output (convert / paste),
- a readable task listing (show).

It is presentation-only: no parsing, no delivery.
"""

from __future__ import annotations

import shutil
import textwrap
from typing import Iterable, TextIO

from .model import Task


# ---------------------------------------------------------------------
# TaskPaper
# ---------------------------------------------------------------------

def render_task(task: Task) -> str:
    """
    Render one task as a TaskPaper block.

    Format:
      - <title> @tags(a,b) @defer(x) @due(y) <newline>
      <tab><note><newline>              (only when a note exists)

    Every attribute carries its own trailing space; absent attributes
    are omitted entirely.
    """
    out = f"- {task.title} "

    if task.tags:
        out += f"@tags({','.join(task.tags)}) "

    if task.defer:
        out += f"@defer({task.defer}) "

    if task.due:
        out += f"@due({task.due}) "

    if task.has_note:
        out += f"\n\t{task.note}"

    return out + "\n"


def render_taskpaper(tasks: Iterable[Task]) -> str:
    """
    Concatenate TaskPaper blocks in order. No tasks renders "".
    """
    return "".join(render_task(t) for t in tasks)


# ---------------------------------------------------------------------
# Listing (show)
# ---------------------------------------------------------------------

def render_task_detail(tasks: Iterable[Task], *, stream: TextIO | None = None) -> None:
    """
    Print a readable listing of parsed tasks.

    Width is capped at 80 characters.
    """
    width = min(80, shutil.get_terminal_size(fallback=(80, 24)).columns)

    def emit(s: str = "") -> None:
        print(s, file=stream)

    def field_line(label: str, value: str) -> None:
        wrapped = textwrap.wrap(
            value,
            width=max(20, width - 4 - len(label) - 2),
            break_long_words=False,
            break_on_hyphens=False,
        ) or [""]
        emit(f"    {label}: {wrapped[0]}")
        pad = " " * (4 + len(label) + 2)
        for ln in wrapped[1:]:
            emit(f"{pad}{ln}")

    count = 0
    for i, task in enumerate(tasks, start=1):
        count += 1
        title = "(untitled)" if task.is_untitled else task.title
        emit(f"{i}) {title}")

        if task.tags:
            field_line("tags", ", ".join(task.tags))
        if task.defer:
            field_line("defer", task.defer)
        if task.due:
            field_line("due", task.due)
        if task.has_note:
            field_line("note", task.note)

    sep = "=" * 6
    emit(sep)
    emit(f"{count} task(s)")
