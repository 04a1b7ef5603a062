"""Canonical ordering of classified declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import Declaration, Kind, SourceLayout, Span, sort_key


@dataclass
class EmissionBlock:
    """A run of units emitted together; packed blocks skip blank lines between units."""

    name: str
    units: List[Span] = field(default_factory=list)
    packed: bool = False


@dataclass
class EmissionPlan:
    """Header plus the ordered blocks the emitter concatenates."""

    source: bytes
    header: Span
    blocks: List[EmissionBlock] = field(default_factory=list)

    def units(self) -> List[Span]:
        return [unit for block in self.blocks for unit in block.units]


def order(layout: SourceLayout) -> EmissionPlan:
    """Build the canonical emission sequence for one file."""
    by_kind: Dict[Kind, List[Declaration]] = {kind: [] for kind in Kind}
    for decl in layout.declarations:
        by_kind[decl.kind].append(decl)

    type_names = {
        name for decl in by_kind[Kind.TYPE_GROUP] for name in decl.identifiers if name
    }
    methods: Dict[str, List[Declaration]] = {}
    functions: List[Declaration] = []
    for decl in layout.declarations:
        if decl.kind is Kind.METHOD and decl.owner and decl.owner in type_names:
            methods.setdefault(decl.owner, []).append(decl)
        elif decl.kind in (Kind.FUNCTION, Kind.METHOD):
            functions.append(decl)

    type_units: List[Span] = []
    for decl in sort_declarations(by_kind[Kind.TYPE_GROUP]):
        type_units.append(decl.span)
        for name in decl.identifiers:
            type_units.extend(method.span for method in sort_declarations(methods.pop(name, [])))

    blocks = [
        EmissionBlock("imports", [decl.span for decl in by_kind[Kind.IMPORT]]),
        EmissionBlock("comments", [comment.span for comment in layout.free_floating()]),
        EmissionBlock("entry_points", [decl.span for decl in by_kind[Kind.ENTRY_POINT]]),
        EmissionBlock("constants", _spans(sort_declarations(by_kind[Kind.CONST_GROUP])), packed=True),
        EmissionBlock("variables", _spans(sort_declarations(by_kind[Kind.VAR_GROUP])), packed=True),
        EmissionBlock("types", type_units),
        EmissionBlock("functions", _spans(sort_declarations(functions))),
    ]
    return EmissionPlan(
        source=layout.source,
        header=layout.header,
        blocks=[block for block in blocks if block.units],
    )


def sort_declarations(declarations: Iterable[Declaration]) -> List[Declaration]:
    """Stable sort by primary identifier: exported first, then case-insensitive."""
    return sorted(declarations, key=lambda decl: sort_key(decl.name))


def _spans(declarations: Iterable[Declaration]) -> List[Span]:
    return [decl.span for decl in declarations]


__all__ = ["EmissionBlock", "EmissionPlan", "order", "sort_declarations"]
