"""Tests for import resolution in generated models."""

import pytest

from entity_to_model.codefix import canonical_imports, required_imports, resolve_relative
from entity_to_model.codefix.imports import referenced_names, render_import_lines
from entity_to_model.codefix.projector import project_members
from entity_to_model.syntax import ImportBinding


def _imports(parse, source, module_name="app.entities.customer"):
    unit = parse(source, module_name=module_name)
    members = project_members(unit.declarations[0])
    return [b.render() for b in required_imports(members, unit)]


class TestResolveRelative:
    """Relative from-imports are made absolute."""

    @pytest.mark.parametrize(
        "module, expected",
        [
            (".types", "app.entities.types"),
            ("..shared", "app.shared"),
            (".", "app.entities"),
        ],
    )
    def test_resolves_against_module(self, module, expected):
        binding = ImportBinding(bound_name="Money", name="Money", module=module)
        assert resolve_relative(binding, "app.entities.customer").module == expected

    def test_absolute_is_unchanged(self):
        binding = ImportBinding(bound_name="Decimal", name="Decimal", module="decimal")
        assert resolve_relative(binding, "app.entities") is binding

    def test_unknown_module_name(self):
        binding = ImportBinding(bound_name="Money", name="Money", module=".types")
        assert resolve_relative(binding, None) is binding

    def test_escaping_package(self):
        binding = ImportBinding(bound_name="Money", name="Money", module="...types")
        assert resolve_relative(binding, "app.entities") is binding


class TestRequiredImports:
    """Only names the members use are imported."""

    def test_builtins_need_nothing(self, parse, simple_customer):
        assert _imports(parse, simple_customer) == []

    def test_unused_imports_are_dropped(self, parse, rich_customer):
        """Column, Annotated and ClassVar vanish with the markers."""
        assert _imports(parse, rich_customer) == [
            "from datetime import datetime",
            "from typing import Optional",
        ]

    def test_aliases_are_kept(self, parse):
        source = (
            "import datetime as dt\n"
            "from decimal import Decimal as D\n"
            "@Table('x')\n"
            "class A:\n"
            "    at: dt.datetime\n"
            "    amount: D\n"
        )
        assert _imports(parse, source) == ["import datetime as dt", "from decimal import Decimal as D"]

    def test_relative_imports_become_absolute(self, parse):
        source = "from .types import Money\n@Table('x')\nclass A:\n    price: Money\n"
        assert _imports(parse, source) == ["from app.entities.types import Money"]

    def test_top_level_names_import_from_source(self, parse):
        source = (
            "class Address:\n    pass\n\n"
            "@Table('x')\nclass Customer:\n    address: Address\n"
        )
        unit = parse(source, module_name="app.entities")
        customer = unit.declarations[1]
        bindings = required_imports(project_members(customer), unit)
        assert [b.render() for b in bindings] == ["from app.entities import Address"]

    def test_unresolved_names_are_skipped(self, parse):
        source = "@Table('x')\nclass A:\n    thing: Mystery\n"
        assert _imports(parse, source) == []

    def test_without_source(self, parse, rich_customer):
        """Without a source unit nothing but builtins resolves."""
        members = project_members(parse(rich_customer).declarations[0])
        assert required_imports(members) == ()

    def test_referenced_names_first_use_order(self, parse, rich_customer):
        members = project_members(parse(rich_customer).declarations[0])
        assert referenced_names(members) == ["int", "str", "Optional", "datetime"]


class TestCanonicalOrder:
    """Import order does not depend on source order."""

    def test_plain_before_from_and_sorted(self):
        bindings = [
            ImportBinding(bound_name="Optional", name="Optional", module="typing"),
            ImportBinding(bound_name="uuid", name="uuid"),
            ImportBinding(bound_name="Decimal", name="Decimal", module="decimal"),
            ImportBinding(bound_name="datetime", name="datetime"),
        ]
        rendered = [b.render() for b in canonical_imports(bindings)]
        assert rendered == [
            "import datetime",
            "import uuid",
            "from decimal import Decimal",
            "from typing import Optional",
        ]

    def test_duplicates_are_removed(self):
        binding = ImportBinding(bound_name="Optional", name="Optional", module="typing")
        assert canonical_imports([binding, binding]) == (binding,)

    def test_from_imports_merge_per_module(self):
        bindings = canonical_imports(
            [
                ImportBinding(bound_name="Optional", name="Optional", module="typing"),
                ImportBinding(bound_name="Any", name="Any", module="typing"),
            ]
        )
        assert render_import_lines(bindings) == ["from typing import Any, Optional"]


class TestPackageModules:
    """A package __init__ module is its own package."""

    @pytest.mark.parametrize(
        "module, expected",
        [
            (".address", "app.core.address"),
            ("..shared", "app.shared"),
            (".", "app.core"),
        ],
    )
    def test_resolves_inside_package(self, module, expected):
        binding = ImportBinding(bound_name="Address", name="Address", module=module)
        assert resolve_relative(binding, "app.core", is_package=True).module == expected

    def test_escaping_top_level_package(self):
        binding = ImportBinding(bound_name="Address", name="Address", module="..x")
        assert resolve_relative(binding, "app", is_package=True) is binding

    def test_init_module_imports(self, parse):
        source = "from .address import Address\n@Table('x')\nclass Customer:\n    address: Address\n"
        unit = parse(source, path="app/__init__.py", module_name="app")
        assert unit.is_package
        bindings = required_imports(project_members(unit.declarations[0]), unit)
        assert [b.render() for b in bindings] == ["from app.address import Address"]

    def test_regular_module_is_not_package(self, parse):
        assert not parse("x = 1\n", path="app/__init__helpers.py").is_package


class TestTypeCheckingImports:
    """Bindings from `if TYPE_CHECKING:` keep their guard."""

    SOURCE = (
        "from typing import TYPE_CHECKING, Optional\n"
        "if TYPE_CHECKING:\n"
        "    from .accounts import Account\n"
        "@Table('x')\n"
        "class Customer:\n"
        "    account: Optional[Account]\n"
    )

    def test_guard_survives_resolution(self, parse):
        unit = parse(self.SOURCE, module_name="app.entities")
        bindings = required_imports(project_members(unit.declarations[0]), unit)
        flags = {b.render(): b.type_checking for b in bindings}
        assert flags == {
            "from app.accounts import Account": True,
            "from typing import Optional": False,
        }

    def test_runtime_binding_wins_over_guarded(self):
        guarded = ImportBinding(
            bound_name="Account", name="Account", module="app.accounts", type_checking=True
        )
        runtime = ImportBinding(bound_name="Account", name="Account", module="app.accounts")
        assert canonical_imports([guarded, runtime]) == (runtime,)
        assert canonical_imports([runtime, guarded]) == (runtime,)
