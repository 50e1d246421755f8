"""Declaration models produced from parsed Python source.

SourceUnit is the read-only view the analyzer and the code fix work on:
    - Per-class: name, decorators (markers), members, full source span
    - Per-member: name, declared type, markers, default value, kind
    - Per-module: import bindings and top-level names

All models are frozen. Transformations build new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath


@dataclass(frozen=True)
class SourceSpan:
    """A region of source text.

    Attributes:
        start: Start byte offset (inclusive)
        end: End byte offset (exclusive)
        start_line: Starting line number (1-indexed)
        start_column: Starting column (0-indexed, in bytes)
        end_line: Ending line number (1-indexed)
        end_column: Ending column (0-indexed, in bytes)
    """

    start: int
    end: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Expression:
    """A rendered Python expression.

    Attributes:
        text: Canonical rendering (normalized spacing)
        names: Root identifiers the expression references, in first-use order.
            `typing.Optional[Address]` references ("typing", "Address").
    """

    text: str
    names: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Marker:
    """A name-matched tag attached to a class or member.

    For classes a marker is a decorator; its name is the source text of the
    decorator callee (`Table` for `@Table("customers")`, `orm.Table` for
    `@orm.Table(...)`). For members a marker is an `Annotated[...]` metadata
    entry or a call-valued default such as `Column(primary_key=True)`.
    """

    name: str
    arguments: tuple[str, ...] = ()
    span: SourceSpan | None = None


class MemberKind(Enum):
    """Kinds of statements found in a class body."""

    ATTRIBUTE = "attribute"  # name: T [= value]
    ASSIGNMENT = "assignment"  # name = value (no annotation)
    METHOD = "method"
    CLASS = "class"


@dataclass(frozen=True)
class MemberDeclaration:
    """A statement in a class body that declares a name.

    Attributes:
        name: Declared name
        kind: Statement kind
        type: Declared type with any outer `Annotated[...]` removed
            (None for methods, classes and plain assignments)
        markers: Markers attached to the member
        default: Default value, when it is not itself a marker
        span: Source span of the statement
    """

    name: str
    kind: MemberKind
    type: Expression | None = None
    markers: tuple[Marker, ...] = ()
    default: Expression | None = None
    span: SourceSpan | None = None

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    @property
    def is_class_var(self) -> bool:
        """True for `ClassVar[...]` annotations (class-level, not instance data)."""
        if self.type is None:
            return False
        head = self.type.text.split("[", 1)[0]
        return head in ("ClassVar", "typing.ClassVar")


@dataclass(frozen=True)
class TypeDeclaration:
    """A class statement.

    Attributes:
        name: Class name
        markers: Decorators in source order
        members: Class body members in source order
        span: Full span of the statement, decorators included
        identifier_span: Span of the class name
        path: Path of the owning document
        enclosing: Names of enclosing classes, outermost first
        has_error: True if the class subtree contains syntax errors
    """

    name: str
    markers: tuple[Marker, ...]
    members: tuple[MemberDeclaration, ...]
    span: SourceSpan
    identifier_span: SourceSpan
    path: str = ""
    enclosing: tuple[str, ...] = ()
    has_error: bool = False

    @property
    def qualified_name(self) -> str:
        """Dotted name within its module (`Outer.Inner`)."""
        return ".".join((*self.enclosing, self.name))


@dataclass(frozen=True)
class ImportBinding:
    """One name bound by an import statement.

    `import a.b` binds "a"; `import a.b as c` binds "c";
    `from m import x as y` binds "y".

    Attributes:
        bound_name: Name introduced into the module namespace
        name: Imported module path (plain import) or imported name (from-import)
        module: Source module of a from-import, leading dots kept for
            relative imports; None for plain imports
        alias: `as` alias, if any
        type_checking: True for imports inside an `if TYPE_CHECKING:` block
    """

    bound_name: str
    name: str
    module: str | None = None
    alias: str | None = None
    type_checking: bool = False

    @property
    def is_from_import(self) -> bool:
        return self.module is not None

    @property
    def is_relative(self) -> bool:
        return self.module is not None and self.module.startswith(".")

    def render(self) -> str:
        suffix = f" as {self.alias}" if self.alias else ""
        if self.module is None:
            return f"import {self.name}{suffix}"
        return f"from {self.module} import {self.name}{suffix}"


@dataclass(frozen=True)
class SourceUnit:
    """Complete declaration extraction for one Python module.

    Attributes:
        path: Document path
        module_name: Dotted module name, when known
        declarations: Every class in the module (nested included), source order
        imports: Import bindings at module level
        top_level_names: Names bound by top-level classes, functions and assignments
        is_generated: True if the module carries a generated-code header
        has_error: True if the module contains syntax errors
    """

    path: str
    declarations: tuple[TypeDeclaration, ...] = ()
    imports: tuple[ImportBinding, ...] = ()
    top_level_names: frozenset[str] = field(default_factory=frozenset)
    module_name: str | None = None
    is_generated: bool = False
    has_error: bool = False

    @property
    def is_package(self) -> bool:
        """True for a package `__init__` module, which is its own package for relative imports."""
        return PurePath(self.path).name == "__init__.py"

    def declaration_at(self, offset: int) -> TypeDeclaration | None:
        """Innermost class whose span contains the byte offset."""
        best: TypeDeclaration | None = None
        for decl in self.declarations:
            if decl.span.contains(offset):
                if best is None or decl.span.length <= best.span.length:
                    best = decl
        return best

    def import_for(self, name: str) -> ImportBinding | None:
        """Last import binding for a name (later imports shadow earlier ones)."""
        found: ImportBinding | None = None
        for binding in self.imports:
            if binding.bound_name == name:
                found = binding
        return found
