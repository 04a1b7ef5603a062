"""Tree-sitter powered Go parser."""

from __future__ import annotations

from typing import Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError

GO_LANGUAGE = Language(tree_sitter_go.language())


class GoParser:
    """Parses Go source bytes into a tree with exact byte offsets."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def parse(self, source: bytes) -> Tree:
        """Return the syntax tree, raising ParseError on any syntax error."""
        tree = self._get_parser().parse(source)
        root = tree.root_node
        if root.has_error:
            error_node = _first_error(root)
            if error_node is None:
                raise ParseError("source contains syntax errors")
            row, column = error_node.start_point
            what = "missing " + error_node.type if error_node.is_missing else "unexpected input"
            raise ParseError(f"syntax error at {row + 1}:{column + 1}: {what}")
        return tree

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(GO_LANGUAGE)
        return self._parser


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


__all__ = ["GO_LANGUAGE", "GoParser", "node_text"]
