# src/tskpaste/engine/parse.py

"""
Shorthand parser.

Turns a block of shorthand text into Task models:

    Write presentation !Friday #work
    Research gifts @1w !(5/12/2019) --Flowers are boring
    #personal
    @2d

Document passes:
- global tags   (lines starting with `#`),
- global defer  (lines starting with `@`, last match wins),
- global due    (lines starting with `!`, last match wins),
- per-line task extraction for every remaining non-blank line.

Every extraction runs against the original, unmodified line and reports
the span it matched; the title is whatever is left once the union of
those spans is cut out. The parser is total: it never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Final, Iterable, Optional

from .model import Globals, LineKind, Task, classify_line

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------

NOTE_RE: Final[re.Pattern[str]] = re.compile(r"--(.+)$")
TAG_RE: Final[re.Pattern[str]] = re.compile(r"#(\S+)")
DEFER_RE: Final[re.Pattern[str]] = re.compile(r"@\(([^)]+)\)|@(\S+)")
DUE_RE: Final[re.Pattern[str]] = re.compile(r"!\(([^)]+)\)|!(\S+)")

Span = tuple[int, int]


# ---------------------------------------------------------------------
# Match containers
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Extracted:
    """
    A value captured from a line together with the span it occupied.
    """

    value: str
    span: Span


# ---------------------------------------------------------------------
# Global collectors
# ---------------------------------------------------------------------

def collect_global_tags(lines: Iterable[str]) -> tuple[str, ...]:
    """
    Collect tags from every line whose first character is `#`.

    Each whitespace-separated word after the leading `#` is one tag.
    Order of first appearance is kept; repeats are dropped.
    """
    tags: list[str] = []
    for line in lines:
        if classify_line(line) is not LineKind.GLOBAL_TAG:
            continue

        for word in line[1:].split():
            # `#work #home` names two tags, not `work` and `#home`
            tag = word.lstrip("#")
            if tag and tag not in tags:
                tags.append(tag)

    return tuple(tags)


def collect_global_defer(lines: Iterable[str]) -> Optional[str]:
    """Return the defer date of the last `@` directive line, if any."""
    return _last_directive_date(lines, LineKind.GLOBAL_DEFER, DEFER_RE)


def collect_global_due(lines: Iterable[str]) -> Optional[str]:
    """Return the due date of the last `!` directive line, if any."""
    return _last_directive_date(lines, LineKind.GLOBAL_DUE, DUE_RE)


def collect_globals(lines: Iterable[str]) -> Globals:
    lines = list(lines)
    return Globals(
        tags=collect_global_tags(lines),
        defer=collect_global_defer(lines),
        due=collect_global_due(lines),
    )


def _last_directive_date(
    lines: Iterable[str],
    kind: LineKind,
    pattern: re.Pattern[str],
) -> Optional[str]:
    value: Optional[str] = None
    for line in lines:
        if classify_line(line) is not kind:
            continue

        # Anchored: the directive character must be followed directly by
        # the date, `@ tomorrow` is ignored.
        m = pattern.match(line)
        if m:
            value = _date_value(m)

    return value


# ---------------------------------------------------------------------
# Per-line extraction
# ---------------------------------------------------------------------

def extract_note(line: str) -> Optional[Extracted]:
    """
    Find the note: the first `--` followed by anything, to end of line.

    The captured text is trimmed. The span always covers the whole
    `--...` tail, even when the note itself is blank.
    """
    m = NOTE_RE.search(line)
    if not m:
        return None
    return Extracted(value=m.group(1).strip(), span=m.span())


def extract_tags(line: str, end: int) -> list[Extracted]:
    """
    Find every `#tag` in line[:end], in order of appearance.

    Duplicate tags are kept as separate matches so all of them are cut
    from the title; callers deduplicate values.
    """
    return [
        Extracted(value=m.group(1), span=m.span())
        for m in TAG_RE.finditer(line, 0, end)
    ]


def extract_defer(line: str, end: int) -> Optional[Extracted]:
    """Find the first `@(...)` or `@word` in line[:end]."""
    return _extract_date(DEFER_RE, line, end)


def extract_due(line: str, end: int) -> Optional[Extracted]:
    """Find the first `!(...)` or `!word` in line[:end]."""
    return _extract_date(DUE_RE, line, end)


def _extract_date(pattern: re.Pattern[str], line: str, end: int) -> Optional[Extracted]:
    m = pattern.search(line, 0, end)
    if not m:
        return None
    return Extracted(value=_date_value(m), span=m.span())


def _date_value(m: re.Match[str]) -> str:
    # group 1: parenthesised literal, group 2: bare run
    return m.group(1) if m.group(1) is not None else m.group(2)


def parse_line(line: str, globals_: Globals = Globals()) -> Task:
    """
    Parse a single task line into a Task.

    `line` is expected to be a TASK line (see classify_line); directive
    characters elsewhere in the line are treated as inline markers.
    """
    spans: list[Span] = []

    note = extract_note(line)
    end = len(line)
    if note is not None:
        spans.append(note.span)
        end = note.span[0]

    local_tags: list[str] = []
    for tag in extract_tags(line, end):
        spans.append(tag.span)
        if tag.value not in local_tags:
            local_tags.append(tag.value)

    defer = extract_defer(line, end)
    if defer is not None:
        spans.append(defer.span)

    due = extract_due(line, end)
    if due is not None:
        spans.append(due.span)

    tags = local_tags + [t for t in globals_.tags if t not in local_tags]

    return Task(
        title=strip_spans(line, spans),
        tags=tuple(tags),
        defer=defer.value if defer is not None else globals_.defer,
        due=due.value if due is not None else globals_.due,
        note=(note.value or None) if note is not None else None,
    )


# ---------------------------------------------------------------------
# Title cleanup
# ---------------------------------------------------------------------

def merge_spans(spans: Iterable[Span]) -> list[Span]:
    """
    Sort spans by position and merge any that overlap or touch.
    """
    merged: list[Span] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            prev_start, prev_end = merged[-1]
            merged[-1] = (prev_start, max(prev_end, end))
        else:
            merged.append((start, end))
    return merged


def strip_spans(line: str, spans: Iterable[Span]) -> str:
    """
    Remove all spans from line in one pass.

    Remaining fragments are trimmed and joined by a single space, so
    `Call @today Bob` becomes `Call Bob`.
    """
    pieces: list[str] = []
    pos = 0
    for start, end in merge_spans(spans):
        pieces.append(line[pos:start])
        pos = end
    pieces.append(line[pos:])

    return " ".join(p.strip() for p in pieces if p.strip())


# ---------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """
    Split on "\n" only; a trailing "\r" is dropped from each line.

    str.splitlines() would also break at form feeds, \u2028 and friends,
    turning one shorthand line into two tasks.
    """
    return [ln.rstrip("\r") for ln in text.split("\n")]


def parse_document(text: str) -> list[Task]:
    """
    Parse a whole shorthand document into tasks, in document order.
    """
    lines = split_lines(text)
    globals_ = collect_globals(lines)

    tasks: list[Task] = []
    directives = 0
    for line in lines:
        kind = classify_line(line)
        if kind.is_directive:
            directives += 1
            continue
        if kind is LineKind.BLANK:
            continue
        tasks.append(parse_line(line, globals_))

    log.debug(
        "parsed %d task(s) from %d line(s), %d directive line(s)",
        len(tasks),
        len(lines),
        directives,
    )
    log.debug("globals: tags=%s defer=%r due=%r", list(globals_.tags), globals_.defer, globals_.due)

    return tasks
