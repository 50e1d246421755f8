"""Minimal import set for a generated model module.

Every root name the projected members reference is resolved against the
entity's module, in this order:
    1. an import binding in the source module (copied, made absolute)
    2. a top-level class/function/assignment of the source module
       (imported from the source module itself)
    3. a builtin (nothing to import)
Anything else is left unresolved and logged; the generated module then
fails at import time exactly where the source module would. Bindings from
an `if TYPE_CHECKING:` block keep their flag and are rendered under the
same guard.
"""

from __future__ import annotations

import builtins
from dataclasses import replace
from typing import Iterable

from ..logging_config import get_logger
from ..syntax.models import ImportBinding, MemberDeclaration, SourceUnit

logger = get_logger(__name__)

_BUILTIN_NAMES = frozenset(dir(builtins))


def referenced_names(members: Iterable[MemberDeclaration]) -> list[str]:
    """Root names used by member types and defaults, in first-use order."""
    names: list[str] = []
    for member in members:
        for expr in (member.type, member.default):
            if expr is None:
                continue
            for name in expr.names:
                if name not in names:
                    names.append(name)
    return names


def resolve_relative(
    binding: ImportBinding, module_name: str | None, is_package: bool = False
) -> ImportBinding:
    """Rewrite `from .x import y` against the importing module's name.

    A package `__init__` module is its own package, so one fewer level is
    dropped from its name. Returns the binding unchanged when it is
    absolute or cannot be resolved.
    """
    if not binding.is_relative or binding.module is None:
        return binding
    level = len(binding.module) - len(binding.module.lstrip("."))
    rest = binding.module[level:]
    if not module_name:
        logger.debug(f"Cannot resolve relative import {binding.render()}: module name unknown")
        return binding
    parts = module_name.split(".")
    drop = level - 1 if is_package else level
    if len(parts) - drop < 1:
        logger.debug(f"Relative import {binding.render()} escapes {module_name}")
        return binding
    package = parts[: len(parts) - drop]
    return replace(binding, module=".".join([*package, rest] if rest else package))


def required_imports(
    members: Iterable[MemberDeclaration], source: SourceUnit | None = None
) -> tuple[ImportBinding, ...]:
    """Resolve the imports the members need, canonically ordered."""
    bindings: list[ImportBinding] = []
    for name in referenced_names(members):
        binding = source.import_for(name) if source is not None else None
        if binding is not None:
            bindings.append(resolve_relative(binding, source.module_name, source.is_package))
        elif source is not None and name in source.top_level_names:
            if source.module_name:
                bindings.append(ImportBinding(bound_name=name, name=name, module=source.module_name))
            else:
                logger.debug(f"'{name}' is defined in {source.path} but its module name is unknown")
        elif name in _BUILTIN_NAMES:
            continue
        else:
            logger.debug(f"Unresolved name '{name}' left without import")
    return canonical_imports(bindings)


def canonical_imports(bindings: Iterable[ImportBinding]) -> tuple[ImportBinding, ...]:
    """Deduplicate and sort: plain imports first, then from-imports by module and name.

    A binding needed both at runtime and under TYPE_CHECKING is kept as runtime.
    """
    unique: dict[str, ImportBinding] = {}
    for binding in bindings:
        key = binding.render()
        if key not in unique or unique[key].type_checking:
            unique[key] = binding
    plain = sorted(
        (b for b in unique.values() if not b.is_from_import),
        key=lambda b: (b.name, b.alias or ""),
    )
    from_imports = sorted(
        (b for b in unique.values() if b.is_from_import),
        key=lambda b: (b.module or "", b.name, b.alias or ""),
    )
    return (*plain, *from_imports)


def render_import_lines(bindings: Iterable[ImportBinding]) -> list[str]:
    """Render bindings as import lines, merging from-imports per module."""
    lines: list[str] = []
    grouped: dict[str, list[str]] = {}
    for binding in bindings:
        if not binding.is_from_import:
            lines.append(binding.render())
            continue
        entry = f"{binding.name} as {binding.alias}" if binding.alias else binding.name
        grouped.setdefault(binding.module or "", []).append(entry)
    for module, names in grouped.items():
        lines.append(f"from {module} import {', '.join(names)}")
    return lines
