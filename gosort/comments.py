"""Decides where every comment travels when declarations move."""

from __future__ import annotations

from typing import List, Optional

from .classifier import Classification
from .models import Comment, CommentPlacement, Declaration, SourceLayout, Span


def place_comments(classification: Classification) -> SourceLayout:
    """Classify comments and fold doc and trailing comments into declaration spans.

    Top-level comments are handled in four passes:

    * a comment that starts on the line where the header or a declaration
      ends is a trailing comment and extends that span;
    * the rest are grouped the way Go groups them (no blank line inside a
      group);
    * a group inside the header range precedes the header and never moves;
    * a group separated from the next declaration by at most one newline is
      that declaration's doc comment and travels with it. Anything else is
      free-floating.
    """
    source = classification.source
    declarations = classification.declarations
    header = classification.header
    comments: List[Comment] = []

    loose: List[Span] = []
    for span in classification.top_level_comments:
        owner = _preceding_declaration(declarations, span)
        if owner is None:
            if span.start < header.end or _same_line(source, header.end, span.start):
                header = Span(header.start, max(header.end, span.end))
                comments.append(Comment(span=span, placement=CommentPlacement.HEADER_PRECEDING))
                continue
        elif _same_line(source, owner.span.end, span.start):
            owner.span = Span(owner.span.start, span.end)
            comments.append(
                Comment(span=span, placement=CommentPlacement.EMBEDDED, declaration=owner.index)
            )
            continue
        loose.append(span)

    for group in _group_comments(source, loose):
        target = _following_declaration(declarations, group)
        if target is not None and _is_adjacent(source, group.end, target.span.start):
            target.span = Span(group.start, target.span.end)
            comments.append(
                Comment(span=group, placement=CommentPlacement.ATTACHED, declaration=target.index)
            )
        else:
            comments.append(Comment(span=group, placement=CommentPlacement.FREE_FLOATING))

    for span in classification.nested_comments:
        container = next((decl for decl in declarations if decl.node_span.contains(span)), None)
        comments.append(
            Comment(
                span=span,
                placement=CommentPlacement.EMBEDDED,
                declaration=container.index if container is not None else None,
            )
        )

    comments.sort(key=lambda comment: (comment.span.start, comment.span.end))
    return SourceLayout(
        source=source,
        header=header,
        declarations=declarations,
        comments=comments,
    )


def _preceding_declaration(declarations: List[Declaration], span: Span) -> Optional[Declaration]:
    found: Optional[Declaration] = None
    for decl in declarations:
        if decl.node_span.end > span.start:
            break
        found = decl
    return found


def _following_declaration(declarations: List[Declaration], span: Span) -> Optional[Declaration]:
    for decl in declarations:
        if decl.node_span.start >= span.end:
            return decl
    return None


def _group_comments(source: bytes, spans: List[Span]) -> List[Span]:
    groups: List[Span] = []
    for span in spans:
        if groups and _is_adjacent(source, groups[-1].end, span.start):
            groups[-1] = Span(groups[-1].start, span.end)
        else:
            groups.append(span)
    return groups


def _same_line(source: bytes, end: int, start: int) -> bool:
    if start < end:
        return False
    gap = source[end:start]
    return not gap.strip() and b"\n" not in gap


def _is_adjacent(source: bytes, end: int, start: int) -> bool:
    # No blank line and nothing but whitespace between the two positions.
    if start < end:
        return False
    gap = source[end:start]
    return not gap.strip() and gap.count(b"\n") <= 1


__all__ = ["place_comments"]
