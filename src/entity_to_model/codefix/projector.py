"""Member projection: the data members an entity hands to its model.

Only public annotated attributes are kept, in source order. Each is copied
without its markers: `Annotated[...]` metadata is gone from the type and an
ORM descriptor default (`= Column(...)`) is dropped. Plain defaults stay.
"""

from __future__ import annotations

from dataclasses import replace

from ..syntax.models import MemberDeclaration, MemberKind, TypeDeclaration


def is_projectable(member: MemberDeclaration) -> bool:
    """Public, annotated, instance-level data attribute."""
    return (
        member.kind is MemberKind.ATTRIBUTE
        and member.type is not None
        and member.is_public
        and not member.is_class_var
    )


def strip_markers(member: MemberDeclaration) -> MemberDeclaration:
    return replace(member, markers=())


def project_members(decl: TypeDeclaration) -> tuple[MemberDeclaration, ...]:
    """Eligible members of `decl`, markers removed, source order preserved."""
    return tuple(strip_markers(m) for m in decl.members if is_projectable(m))
