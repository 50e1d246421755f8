"""Canonical rendering of expression subtrees.

Expressions are re-emitted token by token with fixed spacing rules so that
`Optional[ int ]`, `Optional[int]` and `Optional[\n    int,\n]` all render
the same way. Comments are dropped; string literals are kept verbatim.
"""

from __future__ import annotations

import keyword
from typing import Any, Iterator

from .models import Expression
from .treesitter_parser import node_text

# Leaves rendered from their own source text without descending further
_ATOMIC_NODES = frozenset({"string", "integer", "float"})

_OPENERS = frozenset({"(", "[", "{"})
_CLOSERS = frozenset({")", "]", "}"})

_BINARY_OPERATORS = frozenset(
    {"|", "&", "^", "+", "-", "*", "/", "//", "%", "**", "@", "<<", ">>",
     "==", "!=", "<", ">", "<=", ">=", "->"}
)
_OPERATOR_PARENTS = frozenset(
    {"binary_operator", "comparison_operator", "boolean_operator", "union_type"}
)

Token = tuple[str, str]  # (text, parent node type)


def render_expression(node: Any) -> Expression:
    """Render an expression node canonically and collect its root names."""
    tokens = list(_tokens(node))
    parts: list[str] = []
    prev: Token | None = None
    for token in tokens:
        if prev is not None:
            parts.append(_separator(prev, token))
        parts.append(token[0])
        prev = token
    return Expression(text="".join(parts), names=tuple(_root_names(node)))


def _tokens(node: Any) -> Iterator[Token]:
    if node.type == "comment":
        return
    if node.type in _ATOMIC_NODES or not node.children:
        text = node_text(node)
        # Zero-width tokens come from error recovery (missing nodes)
        if text:
            yield text, node.parent.type if node.parent is not None else ""
        return
    for child in node.children:
        yield from _tokens(child)


def _is_word(text: str, at_end: bool) -> bool:
    ch = text[-1] if at_end else text[0]
    return ch.isalnum() or ch in "_'\""


def _separator(prev: Token, cur: Token) -> str:
    ptext, pparent = prev
    text, parent = cur

    if text in _BINARY_OPERATORS and parent in _OPERATOR_PARENTS:
        return " "
    if ptext in _BINARY_OPERATORS and pparent in _OPERATOR_PARENTS:
        return " "
    if text == "=" or ptext == "=":
        return "" if "keyword_argument" in (parent, pparent) else " "
    if ptext == ",":
        return "" if text in _CLOSERS else " "
    if ptext == ":":
        return " " if pparent in ("pair", "lambda") else ""
    if ptext in _OPENERS or ptext == "." or pparent == "unary_operator":
        return ""
    if text in _CLOSERS or text in (",", ".", ":"):
        return ""
    if text in ("(", "["):
        return " " if keyword.iskeyword(ptext) else ""
    if keyword.iskeyword(ptext) or keyword.iskeyword(text):
        return " "
    if _is_word(ptext, at_end=True) and _is_word(text, at_end=False):
        return " "
    return ""


def _root_names(node: Any) -> Iterator[str]:
    """Yield identifiers that are looked up in the module namespace.

    Attribute names (`b` in `a.b`), keyword argument names and identifiers
    inside string literals are not lookups.
    """
    seen: set[str] = set()
    stack = [node]
    ordered: list[Any] = []
    while stack:
        current = stack.pop()
        if current.type in ("string", "comment"):
            continue
        if current.type == "identifier":
            ordered.append(current)
            continue
        stack.extend(reversed(current.children))

    for ident in ordered:
        if not _is_lookup(ident):
            continue
        name = node_text(ident)
        if name not in seen:
            seen.add(name)
            yield name


def _is_lookup(ident: Any) -> bool:
    parent = ident.parent
    if parent is None:
        return True
    if parent.type == "attribute":
        attr = parent.child_by_field_name("attribute")
        return not (attr is not None and attr.start_byte == ident.start_byte)
    if parent.type == "keyword_argument":
        name = parent.child_by_field_name("name")
        return not (name is not None and name.start_byte == ident.start_byte)
    if parent.type == "member_type":
        return parent.children[0].start_byte == ident.start_byte
    return True
