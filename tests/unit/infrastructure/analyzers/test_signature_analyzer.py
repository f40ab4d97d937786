"""Tests for infrastructure/analyzers/signature_analyzer.py."""

import pytest

from kitgen.domain.exceptions import UnsupportedFieldTypeError
from kitgen.domain.model import Interface, Method, Value
from kitgen.domain.syntax import (
    ArrayType,
    Ellipsis,
    Ident,
    MapType,
    SelectorExpr,
    StarExpr,
    StructType,
    TypeSpec,
)
from kitgen.infrastructure.analyzers.signature_analyzer import (
    extract_interfaces,
    extract_values,
    synthetic_name,
)
from tests.factories import make_field, make_greeter_spec, make_interface_spec, make_method

CONTEXT = {"interface": "Service", "method": "Do", "group": "params"}


class TestSyntheticName:
    """Tests for synthetic_name."""

    @pytest.mark.parametrize(
        ("type_name", "index", "expected"),
        [
            ("int", 0, "Int0"),
            ("string", 3, "String3"),
            ("error", 1, "Error1"),
            ("Item", 0, "Item0"),
        ],
    )
    def test_capitalized_type_and_index(self, type_name: str, index: int, expected: str) -> None:
        assert synthetic_name(type_name, index) == expected


class TestExtractValues:
    """Tests for field list flattening."""

    def test_empty(self) -> None:
        assert extract_values((), **CONTEXT) == ()

    def test_named(self) -> None:
        result = extract_values((make_field("string", "name"),), **CONTEXT)
        assert result == (Value("name", "string"),)

    def test_grouped_names_expand(self) -> None:
        result = extract_values((make_field("Foo", "a", "b"),), **CONTEXT)
        assert result == (Value("a", "Foo"), Value("b", "Foo"))

    def test_unnamed_indexes_skip_named_fields(self) -> None:
        fields = (make_field("int"), make_field("string", "name"), make_field("int"))

        result = extract_values(fields, **CONTEXT)

        assert result == (
            Value("Int0", "int"),
            Value("name", "string"),
            Value("Int1", "int"),
        )

    def test_unnamed_index_counts_across_types(self) -> None:
        fields = (make_field("string"), make_field("error"))

        result = extract_values(fields, **CONTEXT)

        assert result == (Value("String0", "string"), Value("Error1", "error"))

    def test_explicit_names_kept_verbatim(self) -> None:
        result = extract_values((make_field("int", "userID"),), **CONTEXT)
        assert result[0].name == "userID"

    @pytest.mark.parametrize(
        ("expr", "text"),
        [
            (StarExpr(Ident("Item")), "*Item"),
            (ArrayType(Ident("string")), "[]string"),
            (SelectorExpr("context", "Context"), "context.Context"),
            (MapType(Ident("string"), Ident("int")), "map[string]int"),
            (Ellipsis(Ident("int")), "...int"),
        ],
    )
    def test_unsupported_type_raises(self, expr: object, text: str) -> None:
        fields = (make_field("int", "n"), make_field(expr, "x"))  # type: ignore[arg-type]

        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            extract_values(fields, **CONTEXT)

        err = exc_info.value
        assert err.interface == "Service"
        assert err.method == "Do"
        assert err.group == "params"
        assert err.index == 1
        assert err.got == text


class TestExtractInterfaces:
    """Tests for extract_interfaces."""

    def test_greeter(self) -> None:
        result = extract_interfaces((make_greeter_spec(),), "Greeter")

        assert result == (
            Interface(
                name="Greeter",
                methods=(
                    Method(
                        name="Greet",
                        params=(Value("name", "string"),),
                        results=(Value("String0", "string"), Value("Error1", "error")),
                    ),
                ),
            ),
        )

    def test_other_name_skipped(self) -> None:
        assert extract_interfaces((make_greeter_spec(),), "Farewell") == ()

    def test_name_match_is_exact(self) -> None:
        assert extract_interfaces((make_greeter_spec(),), "greeter") == ()

    def test_non_interface_skipped(self) -> None:
        specs = (TypeSpec(name="Greeter", type=StructType()),)
        assert extract_interfaces(specs, "Greeter") == ()

    def test_only_matching_spec_of_group(self) -> None:
        specs = (
            make_interface_spec("Reader", make_method("Read")),
            make_interface_spec("Writer", make_method("Write")),
        )

        result = extract_interfaces(specs, "Writer")

        assert [i.name for i in result] == ["Writer"]
        assert result[0].methods == (Method(name="Write"),)

    def test_methods_in_declaration_order(self) -> None:
        spec = make_interface_spec(
            "Store", make_method("Put"), make_method("Get"), make_method("Del")
        )

        (interface,) = extract_interfaces((spec,), "Store")

        assert [m.name for m in interface.methods] == ["Put", "Get", "Del"]

    def test_embedded_elements_skipped(self) -> None:
        spec = make_interface_spec(
            "ReadCloser",
            make_field(SelectorExpr("io", "Reader")),
            make_method("Close", results=(make_field("error"),)),
        )

        (interface,) = extract_interfaces((spec,), "ReadCloser")

        assert interface.methods == (
            Method(name="Close", results=(Value("Error0", "error"),)),
        )

    def test_unsupported_result_names_coordinates(self) -> None:
        spec = make_interface_spec(
            "Store",
            make_method("Get", results=(make_field(StarExpr(Ident("Item"))),)),
        )

        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            extract_interfaces((spec,), "Store")

        assert exc_info.value.method == "Get"
        assert exc_info.value.group == "results"
        assert exc_info.value.index == 0
