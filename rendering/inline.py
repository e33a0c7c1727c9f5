"""Inline markup tokenizer: **bold**, *italic* and `code` spans"""

import re
from typing import NamedTuple, Optional

from core.enums import RunStyle
from core.models import StyledRun


# Declaration order doubles as the tie-breaker for spans starting at the same index
MARKER_RULES: tuple[tuple[re.Pattern, RunStyle], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), RunStyle.BOLD),
    (re.compile(r"\*(.+?)\*"), RunStyle.ITALIC),
    (re.compile(r"`(.+?)`"), RunStyle.CODE),
)


class _Span(NamedTuple):
    start: int
    order: int
    length: int
    inner: str
    style: RunStyle


def _span(match: re.Match, order: int, style: RunStyle) -> _Span:
    return _Span(
        start=match.start(),
        order=order,
        length=len(match.group(0)),
        inner=match.group(1),
        style=style,
    )


def _all_spans(text: str) -> list[_Span]:
    """Every match of every rule, sorted by (start, rule order)"""
    spans = []
    for order, (pattern, style) in enumerate(MARKER_RULES):
        for match in pattern.finditer(text):
            spans.append(_span(match, order, style))
    spans.sort(key=lambda s: (s.start, s.order))
    return spans


def _next_span(text: str, pos: int) -> Optional[_Span]:
    """Leftmost match of any rule at or after pos; earlier rules win ties"""
    best = None
    for order, (pattern, style) in enumerate(MARKER_RULES):
        match = pattern.search(text, pos)
        if match and (best is None or match.start() < best.start):
            best = _span(match, order, style)
    return best


def _merged_spans(text: str) -> list[StyledRun]:
    runs = []
    cursor = 0
    for span in _all_spans(text):
        if span.start > cursor:
            runs.append(StyledRun(text=text[cursor:span.start]))
        runs.append(StyledRun(text=span.inner, styles=frozenset({span.style})))
        cursor = span.start + span.length

    if cursor < len(text):
        runs.append(StyledRun(text=text[cursor:]))
    return runs


def _leftmost_spans(text: str) -> list[StyledRun]:
    runs = []
    cursor = 0
    while cursor < len(text):
        span = _next_span(text, cursor)
        if span is None:
            break
        if span.start > cursor:
            runs.append(StyledRun(text=text[cursor:span.start]))
        runs.append(StyledRun(text=span.inner, styles=frozenset({span.style})))
        cursor = span.start + span.length

    if cursor < len(text):
        runs.append(StyledRun(text=text[cursor:]))
    return runs


def tokenize_inline(text: str, resolve_overlaps: bool = True) -> list[StyledRun]:
    """
    Split text into ordered, non-nested styled runs.

    By default spans are taken leftmost first: after each span the rules are
    matched again from the end of that span, ties going to the earlier rule
    (bold, then italic, then code). Markers inside a span are literal text.

    With ``resolve_overlaps=False`` every rule is matched once over the whole
    text and all matches are merged by start position without any overlap
    check. Overlapping markers then produce extra runs that repeat text, e.g.
    "a **b** c" gives "a ", "b", "*b", "* c".

    Args:
        text: Raw text with inline markers
        resolve_overlaps: Use leftmost-first matching instead of the merge

    Returns:
        Runs in text order; a single plain run when nothing matches
    """
    runs = _leftmost_spans(text) if resolve_overlaps else _merged_spans(text)
    if not runs:
        runs.append(StyledRun(text=text))
    return runs


def strip_markers(runs: list[StyledRun]) -> str:
    """Plain text of a run list, markers removed"""
    return "".join(run.text for run in runs)
