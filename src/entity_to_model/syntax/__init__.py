"""Python source parsing: tree-sitter trees to frozen declaration models."""

from .models import (
    Expression,
    ImportBinding,
    Marker,
    MemberDeclaration,
    MemberKind,
    SourceSpan,
    SourceUnit,
    TypeDeclaration,
)
from .normalizer import TreeSitterNormalizer, is_generated_source
from .rendering import render_expression
from .treesitter_parser import TreeSitterParser


def iter_type_declarations(unit: SourceUnit):
    """Host traversal: every class in the module, outer classes before nested ones."""
    yield from unit.declarations


__all__ = [
    "Expression",
    "ImportBinding",
    "Marker",
    "MemberDeclaration",
    "MemberKind",
    "SourceSpan",
    "SourceUnit",
    "TypeDeclaration",
    "TreeSitterNormalizer",
    "TreeSitterParser",
    "is_generated_source",
    "iter_type_declarations",
    "render_expression",
]
