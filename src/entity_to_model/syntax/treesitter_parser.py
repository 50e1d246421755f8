"""Tree-sitter parser wrapper.

Provides the Python grammar to the rest of the package.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes)
    root = tree.root_node
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tree_sitter
import tree_sitter_python

if TYPE_CHECKING:
    # Minimal structural view of the tree-sitter node API used in this package
    class Node:
        text: bytes | None
        type: str
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[Node]
        named_children: list[Node]
        parent: Node | None
        has_error: bool

        def child_by_field_name(self, name: str) -> Node | None: ...

        def children_by_field_name(self, name: str) -> list[Node]: ...

    class Tree:
        root_node: Node


LANGUAGE_NAME = "python"


class TreeSitterParser:
    """Wrapper around tree-sitter for parsing Python source.

    A parser instance is not shared between threads; callers that parse
    concurrently create one parser per call (construction is cheap once the
    grammar is loaded).
    """

    _language: Any = None

    def __init__(self) -> None:
        """Initialize parser with the Python grammar."""
        self._parser = tree_sitter.Parser(self.language())

    @classmethod
    def language(cls) -> Any:
        """Return the loaded Python grammar (loaded once per process)."""
        if cls._language is None:
            # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
            cls._language = tree_sitter.Language(tree_sitter_python.language())
        return cls._language

    def parse(self, code: bytes) -> Tree:
        """Parse code and return syntax tree.

        Tree-sitter always produces a tree; syntax errors show up as ERROR
        nodes and `has_error` flags on the affected subtrees.

        Args:
            code: Source code as UTF-8 bytes

        Returns:
            Tree object
        """
        result: Tree = self._parser.parse(code)
        return result


def node_text(node: Any) -> str:
    """Decode a node's source text."""
    if node is None or node.text is None:
        return ""
    return str(node.text.decode("utf-8", errors="replace"))
