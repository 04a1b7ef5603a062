"""Classifies the top-level declarations of a parsed Go file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional

from tree_sitter import Node, Tree

from .errors import ParseError
from .models import Declaration, Kind, Span
from .parsing import node_text

ENTRY_POINT_NAMES: FrozenSet[str] = frozenset({"main", "init"})

_DECLARATION_KINDS: Dict[str, Kind] = {
    "import_declaration": Kind.IMPORT,
    "const_declaration": Kind.CONST_GROUP,
    "var_declaration": Kind.VAR_GROUP,
    "type_declaration": Kind.TYPE_GROUP,
    "function_declaration": Kind.FUNCTION,
    "method_declaration": Kind.METHOD,
}

_SPEC_TYPES: Dict[Kind, FrozenSet[str]] = {
    Kind.IMPORT: frozenset({"import_spec"}),
    Kind.CONST_GROUP: frozenset({"const_spec"}),
    Kind.VAR_GROUP: frozenset({"var_spec"}),
    Kind.TYPE_GROUP: frozenset({"type_spec", "type_alias"}),
}


@dataclass
class Classification:
    """Top-level structure of one file before comments are placed."""

    source: bytes
    header: Span
    declarations: List[Declaration] = field(default_factory=list)
    top_level_comments: List[Span] = field(default_factory=list)
    nested_comments: List[Span] = field(default_factory=list)


def classify(tree: Tree, source: bytes) -> Classification:
    """Assign a Kind (and an owner for methods) to every top-level declaration."""
    header: Optional[Span] = None
    declarations: List[Declaration] = []
    top_level_comments: List[Span] = []
    nested_comments: List[Span] = []

    for child in tree.root_node.children:
        if not child.is_named:
            continue
        if child.type == "comment":
            top_level_comments.append(Span(child.start_byte, child.end_byte))
            continue
        if child.type == "package_clause":
            if header is not None:
                raise ParseError(f"duplicate package clause at {_position(child)}")
            header = Span(0, child.end_byte)
            continue

        kind = _DECLARATION_KINDS.get(child.type)
        if kind is None:
            raise ParseError(f"unexpected top-level {child.type} at {_position(child)}")
        if header is None:
            raise ParseError(f"{child.type} before package clause at {_position(child)}")
        declarations.append(_build_declaration(child, kind, source, len(declarations)))
        nested_comments.extend(
            Span(node.start_byte, node.end_byte) for node in _iter_comment_nodes(child)
        )

    if header is None:
        raise ParseError("missing package clause")

    return Classification(
        source=source,
        header=header,
        declarations=declarations,
        top_level_comments=top_level_comments,
        nested_comments=nested_comments,
    )


def receiver_owner(node: Node, source: bytes) -> str:
    """Return the bare type a method is bound to, or "" when the shape is unknown."""
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return ""
    params = [
        child
        for child in receiver.named_children
        if child.type in ("parameter_declaration", "variadic_parameter_declaration")
    ]
    if not params:
        return ""
    return base_type_name(params[0].child_by_field_name("type"), source)


def base_type_name(type_node: Optional[Node], source: bytes) -> str:
    """Strip one pointer level and any type arguments: `*A[int, string]` -> `A`."""
    if type_node is not None and type_node.type == "pointer_type":
        type_node = _first_code_child(type_node)
    if type_node is not None and type_node.type == "generic_type":
        type_node = type_node.child_by_field_name("type")
    if type_node is None or type_node.type != "type_identifier":
        return ""
    return node_text(type_node, source)


def _build_declaration(node: Node, kind: Kind, source: bytes, index: int) -> Declaration:
    span = Span(node.start_byte, node.end_byte)
    owner: Optional[str] = None

    if kind in _SPEC_TYPES:
        identifiers = [
            _spec_identifier(spec, kind, source) for spec in _iter_specs(node, _SPEC_TYPES[kind])
        ]
    else:
        name_node = node.child_by_field_name("name")
        name = node_text(name_node, source) if name_node is not None else ""
        identifiers = [name] if name else []
        if kind is Kind.FUNCTION and name in ENTRY_POINT_NAMES:
            kind = Kind.ENTRY_POINT
        elif kind is Kind.METHOD:
            owner = receiver_owner(node, source)

    return Declaration(
        kind=kind,
        identifiers=identifiers,
        span=span,
        node_span=span,
        index=index,
        owner=owner,
    )


def _spec_identifier(spec: Node, kind: Kind, source: bytes) -> str:
    field_name = "path" if kind is Kind.IMPORT else "name"
    name_node = spec.child_by_field_name(field_name)
    return node_text(name_node, source) if name_node is not None else ""


def _iter_specs(node: Node, spec_types: FrozenSet[str]) -> Iterator[Node]:
    for child in node.named_children:
        if child.type in spec_types:
            yield child
        elif child.type.endswith("_spec_list"):
            yield from _iter_specs(child, spec_types)


def _iter_comment_nodes(node: Node) -> Iterator[Node]:
    for child in node.children:
        if child.type == "comment":
            yield child
        else:
            yield from _iter_comment_nodes(child)


def _first_code_child(node: Node) -> Optional[Node]:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _position(node: Node) -> str:
    row, column = node.start_point
    return f"{row + 1}:{column + 1}"


__all__ = [
    "Classification",
    "ENTRY_POINT_NAMES",
    "base_type_name",
    "classify",
    "receiver_owner",
]
