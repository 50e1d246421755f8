"""Marker predicate: is a class declaration a persistence entity?

A class is an entity when one of its decorators is named exactly "Table".
Names are compared by source text, so `@orm.Table(...)` or an aliased import
(`from orm import Table as T` then `@T(...)`) is not recognized even though
it may refer to the same object. Symbol-based matching would change which
classes are reported and is deliberately not done here.
"""

from __future__ import annotations

from ..syntax.models import TypeDeclaration

TABLE_MARKER = "Table"


def is_entity(decl: TypeDeclaration) -> bool:
    """True if any decorator's name text equals "Table" (case-sensitive)."""
    return any(marker.name == TABLE_MARKER for marker in decl.markers)
