"""Declaration synthesis: build and render the model module.

The rendered module is a pure function of its inputs. Imports are sorted,
expressions were rendered canonically by the syntax layer, indentation is
four spaces and the text ends with exactly one newline, so regenerating a
model from an unchanged entity gives byte-identical output.

Example output for `@Table("customers") class Customer` with `id: int` and
`name: str`:

    # @generated by entity-to-model from Customer (Logic.Models)


    class CustomerModel:
        id: int
        name: str
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..syntax.models import ImportBinding, MemberDeclaration, SourceUnit
from .imports import canonical_imports, render_import_lines, required_imports
from .projector import strip_markers

TARGET_NAMESPACE = "Logic.Models"
MODEL_SUFFIX = "Model"
UNIT_EXTENSION = ".py"
INDENT = "    "

CompilationUnitText = str

_TYPE_CHECKING_IMPORT = ImportBinding(
    bound_name="TYPE_CHECKING", name="TYPE_CHECKING", module="typing"
)


@dataclass(frozen=True)
class SynthesizedDeclaration:
    """A model class ready to be rendered.

    Attributes:
        name: Model class name (`<EntityName>Model`)
        entity_name: Name of the entity it was derived from
        members: Marker-free members, in entity order
        namespace: Destination the model belongs to
        imports: Minimal imports the members need
    """

    name: str
    entity_name: str
    members: tuple[MemberDeclaration, ...]
    namespace: str = TARGET_NAMESPACE
    imports: tuple[ImportBinding, ...] = ()

    @property
    def file_name(self) -> str:
        return f"{self.name}{UNIT_EXTENSION}"


def model_name(entity_name: str, suffix: str = MODEL_SUFFIX) -> str:
    return f"{entity_name}{suffix}"


def synthesize(
    entity_name: str,
    members: Iterable[MemberDeclaration],
    source: SourceUnit | None = None,
    namespace: str = TARGET_NAMESPACE,
    suffix: str = MODEL_SUFFIX,
) -> SynthesizedDeclaration:
    """Assemble the model declaration.

    Args:
        entity_name: Entity class name
        members: Projected members (any remaining markers are removed)
        source: The entity's module, used to resolve imports; without it
            only builtins resolve
        namespace: Destination name recorded in the rendered header
        suffix: Model name suffix
    """
    clean = tuple(strip_markers(m) for m in members)
    return SynthesizedDeclaration(
        name=model_name(entity_name, suffix),
        entity_name=entity_name,
        members=clean,
        namespace=namespace,
        imports=required_imports(clean, source),
    )


def render_member(member: MemberDeclaration) -> str:
    line = f"{member.name}: {member.type}" if member.type is not None else member.name
    if member.default is not None:
        line += f" = {member.default}"
    return line


def render(declaration: SynthesizedDeclaration) -> CompilationUnitText:
    """Render the declaration as a complete module.

    Imports the entity module guards with `if TYPE_CHECKING:` stay guarded;
    the model then postpones annotation evaluation so the guarded names
    never have to exist at runtime.
    """
    lines = [
        f"# @generated by entity-to-model from {declaration.entity_name} ({declaration.namespace})"
    ]

    runtime = [b for b in declaration.imports if not b.type_checking]
    guarded = [b for b in declaration.imports if b.type_checking]
    if guarded:
        lines.extend(["", "from __future__ import annotations"])
        runtime = list(canonical_imports([*runtime, _TYPE_CHECKING_IMPORT]))

    import_lines = render_import_lines(runtime)
    if import_lines:
        lines.append("")
        lines.extend(import_lines)

    if guarded:
        lines.extend(["", "if TYPE_CHECKING:"])
        lines.extend(f"{INDENT}{line}" for line in render_import_lines(guarded))

    lines.extend(["", "", f"class {declaration.name}:"])
    if not declaration.members:
        lines.append(f"{INDENT}pass")
    for member in declaration.members:
        lines.append(f"{INDENT}{render_member(member)}")

    return "\n".join(lines) + "\n"


def synthesize_unit(
    entity_name: str,
    members: Iterable[MemberDeclaration],
    source: SourceUnit | None = None,
    namespace: str = TARGET_NAMESPACE,
    suffix: str = MODEL_SUFFIX,
) -> CompilationUnitText:
    """Synthesize and render in one step."""
    return render(synthesize(entity_name, members, source, namespace, suffix))
