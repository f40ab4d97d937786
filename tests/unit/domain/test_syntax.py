"""Tests for domain/syntax.py."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from kitgen.domain.syntax import (
    ArrayType,
    ChanDir,
    ChanType,
    Ellipsis,
    Field,
    FuncDecl,
    FuncType,
    Ident,
    ImportDecl,
    IndexExpr,
    InterfaceType,
    MapType,
    SelectorExpr,
    SourceFile,
    SourcePackage,
    StarExpr,
    StructType,
    TypeDecl,
    TypeSpec,
    ValueDecl,
    expr_string,
)


class TestIdent:
    """Tests for Ident."""

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="identifier"):
            Ident("")

    def test_is_frozen(self) -> None:
        ident = Ident("string")
        with pytest.raises(FrozenInstanceError):
            ident.name = "int"  # type: ignore[misc]


class TestExprString:
    """Tests for expr_string rendering."""

    @pytest.mark.parametrize(
        ("expr", "expected"),
        [
            (Ident("string"), "string"),
            (SelectorExpr("context", "Context"), "context.Context"),
            (StarExpr(Ident("Item")), "*Item"),
            (ArrayType(Ident("byte")), "[]byte"),
            (ArrayType(Ident("int"), length="4"), "[4]int"),
            (MapType(Ident("string"), ArrayType(Ident("int"))), "map[string][]int"),
            (ChanType(Ident("int")), "chan int"),
            (ChanType(Ident("int"), ChanDir.SEND), "chan<- int"),
            (ChanType(Ident("int"), ChanDir.RECV), "<-chan int"),
            (Ellipsis(Ident("string")), "...string"),
            (IndexExpr(Ident("List"), (Ident("T"),)), "List[T]"),
            (IndexExpr(Ident("Map"), (Ident("K"), Ident("V"))), "Map[K, V]"),
            (InterfaceType(), "interface{}"),
            (StructType(), "struct{ ... }"),
        ],
    )
    def test_type_expressions(self, expr: object, expected: str) -> None:
        assert expr_string(expr) == expected  # type: ignore[arg-type]

    def test_func_without_results(self) -> None:
        func = FuncType(params=(Field(("a", "b"), Ident("int")),))
        assert expr_string(func) == "func(a, b int)"

    def test_func_single_unnamed_result(self) -> None:
        func = FuncType(params=(Field((), Ident("string")),), results=(Field((), Ident("error")),))
        assert expr_string(func) == "func(string) error"

    def test_func_multiple_results(self) -> None:
        func = FuncType(results=(Field((), Ident("string")), Field((), Ident("error"))))
        assert expr_string(func) == "func() (string, error)"


class TestDeclarations:
    """Tests for declaration variants."""

    def test_type_spec_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="name"):
            TypeSpec(name="", type=Ident("int"))

    def test_value_decl_keyword_validated(self) -> None:
        with pytest.raises(ValueError, match="keyword"):
            ValueDecl(keyword="let", names=("x",))

    def test_type_decl_defaults(self) -> None:
        decl = TypeDecl(specs=(TypeSpec(name="ID", type=Ident("string")),))
        assert decl.doc == ()
        assert decl.line == 0


class TestSourcePackage:
    """Tests for SourceFile and SourcePackage."""

    def test_source_file_requires_package(self) -> None:
        with pytest.raises(ValueError, match="package"):
            SourceFile(path=Path("a.go"), package="")

    def test_mixed_files_rejected(self) -> None:
        a = SourceFile(path=Path("a.go"), package="foo")
        b = SourceFile(path=Path("b.go"), package="bar")
        with pytest.raises(ValueError, match="bar"):
            SourcePackage(name="foo", directory=Path(), files=(a, b))

    def test_decls_in_forest_order(self) -> None:
        first = ImportDecl(paths=("fmt",), line=3)
        second = FuncDecl(name="main", line=5)
        third = ValueDecl(keyword="var", names=("x",), line=1)
        a = SourceFile(path=Path("a.go"), package="foo", decls=(first, second))
        b = SourceFile(path=Path("b.go"), package="foo", decls=(third,))

        package = SourcePackage(name="foo", directory=Path(), files=(a, b))

        assert package.decls == (first, second, third)
