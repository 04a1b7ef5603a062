"""Reassembles source bytes from an emission plan."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from .errors import CoverageError
from .formatter import Formatter, ReparseFormatter
from .logging import get_logger
from .models import SourceLayout, Span
from .orderer import EmissionPlan

_IGNORABLE = b";"


class Emitter:
    """Slices units out of the source buffer in plan order and formats the result."""

    def __init__(self, formatter: Optional[Formatter] = None) -> None:
        self.formatter = formatter or ReparseFormatter()
        self.logger = get_logger("emitter")

    def emit(self, layout: SourceLayout, plan: EmissionPlan) -> bytes:
        check_coverage(layout, plan)
        assembled = assemble(plan)
        self.logger.debug(
            "Assembled %d units in %d blocks (%d bytes)",
            len(plan.units()),
            len(plan.blocks),
            len(assembled),
        )
        return self.formatter.format(assembled)


def assemble(plan: EmissionPlan) -> bytes:
    """Concatenate header and blocks; blank lines separate blocks and spaced units.

    Separators use the line ending of the source's first line, so CRLF files
    stay CRLF throughout.
    """
    source = plan.source
    newline = line_ending(source)

    def text(span: Span) -> bytes:
        chunk = span.slice(source)
        # Line comments may end on the carriage return of a CRLF pair.
        return chunk.rstrip(b"\r") if newline == b"\r\n" else chunk

    parts = [text(plan.header)]
    for block in plan.blocks:
        separator = newline if block.packed else newline * 2
        parts.append(separator.join(text(unit) for unit in block.units))
    return (newline * 2).join(parts) + newline


def line_ending(source: bytes) -> bytes:
    first = source.find(b"\n")
    return b"\r\n" if first > 0 and source[first - 1 : first] == b"\r" else b"\n"


def check_coverage(layout: SourceLayout, plan: EmissionPlan) -> None:
    """Raise CoverageError unless the plan emits every region of the file exactly once."""
    source = layout.source
    spans = layout.covered_spans()

    position = 0
    for span in spans:
        if span.start < position:
            raise CoverageError(
                f"overlapping regions at line {_line_of(source, span.start)}"
            )
        _check_gap(source, position, span.start)
        position = span.end
    _check_gap(source, position, len(source))

    expected = Counter(span for span in spans if span != layout.header)
    emitted = Counter(plan.units())
    if plan.header != layout.header or emitted != expected:
        missing = _describe(source, list((expected - emitted).elements()))
        extra = _describe(source, list((emitted - expected).elements()))
        raise CoverageError(f"emission plan does not match source regions (missing: {missing}; duplicated: {extra})")


def _check_gap(source: bytes, start: int, end: int) -> None:
    gap = source[start:end]
    if gap.replace(_IGNORABLE, b"").strip():
        offset = start + len(gap) - len(gap.lstrip())
        raise CoverageError(f"unclassified source at line {_line_of(source, offset)}")


def _describe(source: bytes, spans: List[Span]) -> str:
    if not spans:
        return "none"
    return ", ".join(f"line {_line_of(source, span.start)}" for span in spans)


def _line_of(source: bytes, offset: int) -> int:
    return source.count(b"\n", 0, offset) + 1


__all__ = ["Emitter", "assemble", "check_coverage", "line_ending"]
