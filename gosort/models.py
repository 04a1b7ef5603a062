"""Core data models shared across gosort components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Kind(Enum):
    """Category of a top-level declaration."""

    IMPORT = "import"
    CONST_GROUP = "const"
    VAR_GROUP = "var"
    TYPE_GROUP = "type"
    ENTRY_POINT = "entry_point"
    FUNCTION = "function"
    METHOD = "method"


class CommentPlacement(Enum):
    """Where a comment travels when declarations are reordered."""

    HEADER_PRECEDING = "header_preceding"
    ATTACHED = "attached"
    EMBEDDED = "embedded"
    FREE_FLOATING = "free_floating"


@dataclass(frozen=True)
class Span:
    """Half-open byte range into the source buffer."""

    start: int
    end: int

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def slice(self, source: bytes) -> bytes:
        return source[self.start : self.end]


@dataclass
class Declaration:
    """A top-level declaration and the bytes that travel with it."""

    kind: Kind
    identifiers: List[str]
    span: Span
    node_span: Span
    index: int
    owner: Optional[str] = None

    @property
    def name(self) -> str:
        """Primary identifier used for ordering (empty for anonymous groups)."""
        return self.identifiers[0] if self.identifiers else ""


@dataclass
class Comment:
    """A comment group (top level) or a single comment nested in a declaration."""

    span: Span
    placement: CommentPlacement
    declaration: Optional[int] = None


@dataclass
class SourceLayout:
    """Every classified region of one source file."""

    source: bytes
    header: Span
    declarations: List[Declaration] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)

    def free_floating(self) -> List[Comment]:
        return [c for c in self.comments if c.placement is CommentPlacement.FREE_FLOATING]

    def covered_spans(self) -> List[Span]:
        """Header, declaration and free-floating spans in source order."""
        spans = [self.header]
        spans.extend(decl.span for decl in self.declarations)
        spans.extend(comment.span for comment in self.free_floating())
        return sorted(spans, key=lambda span: (span.start, span.end))


SortKey = Tuple[bool, str, str]


def is_exported(name: str) -> bool:
    """Go export rule: the identifier starts with an upper-case letter."""
    return bool(name) and name[0].isupper()


def sort_key(name: str) -> SortKey:
    """Exported names first, then case-insensitive order, then exact order."""
    return (not is_exported(name), name.lower(), name)


__all__ = [
    "Comment",
    "CommentPlacement",
    "Declaration",
    "Kind",
    "SortKey",
    "SourceLayout",
    "Span",
    "is_exported",
    "sort_key",
]
