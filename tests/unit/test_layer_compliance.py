"""Layer compliance tests.

Hexagonal layering and value-object contracts:
- domain imports nothing from other kitgen layers
- every public error derives from KitgenError
- domain value objects are immutable
"""

from __future__ import annotations

import ast
import inspect
from dataclasses import FrozenInstanceError, fields, is_dataclass
from pathlib import Path

import pytest

import kitgen
from kitgen.domain import config, exceptions, model, syntax

PACKAGE_ROOT = Path(kitgen.__file__).parent

LAYER_RULES = {
    "domain": ("kitgen.application", "kitgen.infrastructure", "kitgen.presentation"),
    "infrastructure": ("kitgen.application", "kitgen.presentation"),
    "application": ("kitgen.presentation",),
}


def imported_modules(path: Path) -> set[str]:
    """Collect absolute module names imported by a source file."""
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules.add(node.module)
    return modules


class TestLayering:
    """Tests for import direction between layers."""

    @pytest.mark.parametrize("layer", sorted(LAYER_RULES))
    def test_no_outward_imports(self, layer: str) -> None:
        forbidden = LAYER_RULES[layer]
        violations = [
            f"{path.relative_to(PACKAGE_ROOT)} imports {module}"
            for path in sorted((PACKAGE_ROOT / layer).rglob("*.py"))
            for module in imported_modules(path)
            if module.startswith(forbidden)
        ]
        assert violations == []


class TestErrors:
    """Tests for the error hierarchy."""

    def test_all_public_errors_derive_from_base(self) -> None:
        errors = [
            obj
            for _, obj in inspect.getmembers(exceptions, inspect.isclass)
            if issubclass(obj, Exception) and obj.__module__ == exceptions.__name__
        ]
        assert len(errors) == 10
        assert all(issubclass(e, exceptions.KitgenError) for e in errors)


class TestImmutability:
    """Tests for frozen value objects."""

    @pytest.mark.parametrize("module", [config, model, syntax])
    def test_dataclasses_are_frozen(self, module: object) -> None:
        classes = [
            obj
            for _, obj in inspect.getmembers(module, inspect.isclass)
            if is_dataclass(obj) and obj.__module__ == module.__name__  # type: ignore[attr-defined]
        ]
        assert classes
        for cls in classes:
            assert cls.__dataclass_params__.frozen, cls.__name__  # type: ignore[attr-defined]
            assert hasattr(cls, "__slots__"), cls.__name__

    def test_assignment_raises(self) -> None:
        value = model.Value(name="x", type_name="int")
        with pytest.raises(FrozenInstanceError):
            value.type_name = "string"  # type: ignore[misc]

    def test_tuples_not_lists(self) -> None:
        decl = syntax.TypeDecl(specs=())
        assert [f.name for f in fields(decl)] == ["specs", "doc", "line"]
        assert isinstance(decl.doc, tuple)
