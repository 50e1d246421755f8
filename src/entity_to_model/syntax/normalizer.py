"""Normalizer: converts tree-sitter parse trees to SourceUnit.

This module takes Python source, parses it with tree-sitter and produces the
frozen declaration models the analyzer and the code fix consume. Nothing
downstream touches tree-sitter nodes directly.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..exceptions import ParsingError
from ..logging_config import get_logger
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
from .rendering import render_expression
from .treesitter_parser import TreeSitterParser, node_text

logger = get_logger(__name__)

ANNOTATED_NAMES = frozenset({"Annotated", "typing.Annotated", "typing_extensions.Annotated"})
TYPE_CHECKING_NAMES = frozenset({"TYPE_CHECKING", "typing.TYPE_CHECKING"})

# Header tokens that mark a module as generated code
GENERATED_MARKERS = ("@generated", "<auto-generated")

# Statements whose blocks may hold module-level imports (version checks, try/except ImportError)
_IMPORT_CONTAINERS = frozenset(
    {"if_statement", "else_clause", "elif_clause", "try_statement", "except_clause",
     "finally_clause", "block"}
)


def is_generated_source(text: str) -> bool:
    """True if the leading comment block carries a generated-code marker."""
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith("#"):
            return False
        if any(marker in stripped for marker in GENERATED_MARKERS):
            return True
    return False


def _span(node: Any) -> SourceSpan:
    return SourceSpan(
        start=node.start_byte,
        end=node.end_byte,
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1],
    )


def _named(node: Any) -> list[Any]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _compact(text: str) -> str:
    return "".join(text.split())


class TreeSitterNormalizer:
    """Converts Python source to SourceUnit.

    Usage:
        normalizer = TreeSitterNormalizer()
        unit = normalizer.parse_source(content, "app/entities.py", "app.entities")
        for decl in unit.declarations:
            ...
    """

    def parse_source(self, content: str, path: str, module_name: str | None = None) -> SourceUnit:
        """Parse file content and return SourceUnit.

        Args:
            content: File content as string
            path: Document path recorded on every declaration
            module_name: Dotted module name, used to resolve relative imports

        Returns:
            SourceUnit for the module

        Raises:
            ParsingError: If the content cannot be encoded for the parser
        """
        try:
            code_bytes = content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParsingError(path, f"encoding error: {e}") from e

        tree = TreeSitterParser().parse(code_bytes)
        root = tree.root_node
        if root.has_error:
            logger.debug(f"{path} contains syntax errors; affected classes are flagged")

        declarations = tuple(self._collect_classes(root, path, ()))
        return SourceUnit(
            path=path,
            declarations=declarations,
            imports=tuple(self._collect_imports(root)),
            top_level_names=frozenset(self._top_level_names(root)),
            module_name=module_name,
            is_generated=is_generated_source(content),
            has_error=bool(root.has_error),
        )

    # ── Classes ────────────────────────────────────────────────────

    def _collect_classes(
        self, node: Any, path: str, enclosing: tuple[str, ...]
    ) -> Iterator[TypeDeclaration]:
        """Walk the tree in source order, yielding every class statement."""
        for child in node.children:
            if child.type == "class_definition":
                decl = self._node_to_declaration(child, path, enclosing)
                yield decl
                yield from self._collect_classes(child, path, (*enclosing, decl.name))
            elif child.type == "function_definition":
                name = node_text(child.child_by_field_name("name"))
                yield from self._collect_classes(child, path, (*enclosing, name, "<locals>"))
            else:
                yield from self._collect_classes(child, path, enclosing)

    def _node_to_declaration(
        self, node: Any, path: str, enclosing: tuple[str, ...]
    ) -> TypeDeclaration:
        """Convert a class_definition node to TypeDeclaration."""
        outer = node
        markers: tuple[Marker, ...] = ()
        if node.parent is not None and node.parent.type == "decorated_definition":
            outer = node.parent
            markers = self._decorators(outer)

        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        members = tuple(self._members(body)) if body is not None else ()

        return TypeDeclaration(
            name=node_text(name_node),
            markers=markers,
            members=members,
            span=_span(outer),
            identifier_span=_span(name_node),
            path=path,
            enclosing=enclosing,
            has_error=bool(outer.has_error),
        )

    def _decorators(self, decorated: Any) -> tuple[Marker, ...]:
        markers = []
        for child in decorated.children:
            if child.type != "decorator":
                continue
            expressions = _named(child)
            if expressions:
                markers.append(self._marker(expressions[0]))
        return tuple(markers)

    def _marker(self, expr: Any) -> Marker:
        """Build a marker from a decorator or metadata expression.

        The name is the callee's source text; no symbol resolution happens.
        """
        if expr.type == "call":
            arguments = expr.child_by_field_name("arguments")
            args = tuple(render_expression(a).text for a in _named(arguments)) if arguments else ()
            return Marker(name=node_text(expr.child_by_field_name("function")), arguments=args, span=_span(expr))
        return Marker(name=node_text(expr), span=_span(expr))

    # ── Members ────────────────────────────────────────────────────

    def _members(self, body: Any) -> Iterator[MemberDeclaration]:
        for stmt in _named(body):
            if stmt.type == "expression_statement":
                inner = _named(stmt)
                if inner and inner[0].type == "assignment":
                    member = self._assignment_member(inner[0], stmt)
                    if member is not None:
                        yield member
            elif stmt.type in ("function_definition", "class_definition"):
                yield self._definition_member(stmt, stmt, ())
            elif stmt.type == "decorated_definition":
                definition = stmt.child_by_field_name("definition")
                if definition is not None:
                    yield self._definition_member(definition, stmt, self._decorators(stmt))

    def _definition_member(
        self, definition: Any, outer: Any, markers: tuple[Marker, ...]
    ) -> MemberDeclaration:
        kind = MemberKind.CLASS if definition.type == "class_definition" else MemberKind.METHOD
        return MemberDeclaration(
            name=node_text(definition.child_by_field_name("name")),
            kind=kind,
            markers=markers,
            span=_span(outer),
        )

    def _assignment_member(self, assignment: Any, stmt: Any) -> MemberDeclaration | None:
        left = assignment.child_by_field_name("left")
        # Tuple targets and attribute targets do not declare a single member
        if left is None or left.type != "identifier":
            return None

        type_node = assignment.child_by_field_name("type")
        right = assignment.child_by_field_name("right")

        markers: list[Marker] = []
        declared: Expression | None = None
        if type_node is not None:
            declared, metadata = self._split_annotated(type_node)
            markers.extend(metadata)

        default: Expression | None = None
        if right is not None:
            if type_node is not None and right.type == "call":
                # Column(...), Field(...), mapped_column(...): ORM descriptors
                markers.append(self._marker(right))
            else:
                default = render_expression(right)

        return MemberDeclaration(
            name=node_text(left),
            kind=MemberKind.ATTRIBUTE if type_node is not None else MemberKind.ASSIGNMENT,
            type=declared,
            markers=tuple(markers),
            default=default,
            span=_span(stmt),
        )

    def _split_annotated(self, type_node: Any) -> tuple[Expression, tuple[Marker, ...]]:
        """Separate `Annotated[T, m1, m2]` into (T, markers).

        Only the outermost Annotated is unwrapped; other annotations render
        unchanged with no markers.
        """
        inner = self._unwrap_type(type_node)
        head, args = self._subscript_parts(inner)
        if head is not None and _compact(node_text(head)) in ANNOTATED_NAMES and args:
            base = self._unwrap_type(args[0])
            markers = tuple(self._marker(self._unwrap_type(arg)) for arg in args[1:])
            return render_expression(base), markers
        return render_expression(inner), ()

    def _unwrap_type(self, node: Any) -> Any:
        while node.type == "type":
            named = _named(node)
            if len(named) != 1:
                break
            node = named[0]
        return node

    def _subscript_parts(self, node: Any) -> tuple[Any | None, list[Any]]:
        """Head and arguments of `X[a, b]`, for both subscript and generic_type forms."""
        if node.type == "subscript":
            return node.child_by_field_name("value"), node.children_by_field_name("subscript")
        if node.type == "generic_type":
            named = _named(node)
            params = [child for child in named if child.type == "type_parameter"]
            if named and params:
                return named[0], _named(params[0])
        return None, []

    # ── Module level ───────────────────────────────────────────────

    def _collect_imports(self, node: Any, guarded: bool = False) -> Iterator[ImportBinding]:
        for child in node.children:
            if child.type == "import_statement":
                yield from self._plain_import(child, guarded)
            elif child.type == "import_from_statement":
                yield from self._from_import(child, guarded)
            elif child.type == "if_statement" and self._is_type_checking(child):
                consequence = child.child_by_field_name("consequence")
                if consequence is not None:
                    yield from self._collect_imports(consequence, True)
                for alternative in child.children_by_field_name("alternative"):
                    yield from self._collect_imports(alternative, guarded)
            elif child.type in _IMPORT_CONTAINERS:
                yield from self._collect_imports(child, guarded)

    def _is_type_checking(self, if_statement: Any) -> bool:
        condition = if_statement.child_by_field_name("condition")
        return condition is not None and _compact(node_text(condition)) in TYPE_CHECKING_NAMES

    def _plain_import(self, node: Any, guarded: bool) -> Iterator[ImportBinding]:
        for name_node in node.children_by_field_name("name"):
            if name_node.type == "aliased_import":
                name = _compact(node_text(name_node.child_by_field_name("name")))
                alias = node_text(name_node.child_by_field_name("alias"))
                yield ImportBinding(bound_name=alias, name=name, alias=alias, type_checking=guarded)
            else:
                name = _compact(node_text(name_node))
                yield ImportBinding(
                    bound_name=name.split(".", 1)[0], name=name, type_checking=guarded
                )

    def _from_import(self, node: Any, guarded: bool) -> Iterator[ImportBinding]:
        module = _compact(node_text(node.child_by_field_name("module_name")))
        names = node.children_by_field_name("name")
        if not names:
            logger.debug(f"Skipping wildcard import from {module}")
            return
        for name_node in names:
            if name_node.type == "aliased_import":
                name = _compact(node_text(name_node.child_by_field_name("name")))
                alias = node_text(name_node.child_by_field_name("alias"))
                yield ImportBinding(
                    bound_name=alias, name=name, module=module, alias=alias, type_checking=guarded
                )
            else:
                name = _compact(node_text(name_node))
                yield ImportBinding(bound_name=name, name=name, module=module, type_checking=guarded)

    def _top_level_names(self, root: Any) -> Iterator[str]:
        for child in root.named_children:
            definition = child
            if child.type == "decorated_definition":
                definition = child.child_by_field_name("definition")
            if definition is not None and definition.type in ("class_definition", "function_definition"):
                yield node_text(definition.child_by_field_name("name"))
            elif child.type == "expression_statement":
                inner = _named(child)
                if inner and inner[0].type == "assignment":
                    left = inner[0].child_by_field_name("left")
                    if left is not None and left.type == "identifier":
                        yield node_text(left)
