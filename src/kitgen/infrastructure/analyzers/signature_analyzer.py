"""Interface signature analyzer.

Extracts the template-facing Interface model from the specs of one type
declaration group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kitgen.domain.exceptions import UnsupportedFieldTypeError
from kitgen.domain.model import Interface, Method, Value
from kitgen.domain.syntax import Field, FuncType, Ident, InterfaceType, TypeSpec, expr_string

if TYPE_CHECKING:
    from collections.abc import Iterable


def extract_interfaces(specs: Iterable[TypeSpec], type_name: str) -> tuple[Interface, ...]:
    """Extract interface models for the requested type name.

    Specs with another name, or whose type is not an interface, are skipped.

    Args:
        specs: Specs of one type declaration group.
        type_name: Requested type name (exact match).

    Returns:
        One Interface per matching spec, () if none matched.

    Raises:
        UnsupportedFieldTypeError: Method field type is not a plain identifier.
    """
    interfaces: list[Interface] = []

    for spec in specs:
        match spec:
            case TypeSpec(name=name, type=InterfaceType(methods=elements)) if name == type_name:
                interfaces.append(Interface(name=name, methods=_extract_methods(name, elements)))

    return tuple(interfaces)


def _extract_methods(interface: str, elements: tuple[Field, ...]) -> tuple[Method, ...]:
    """Extract directly declared methods.

    Embedded interfaces and type-set elements are not flattened.

    Args:
        interface: Interface name (for error messages).
        elements: Interface elements in declaration order.

    Returns:
        Methods in declaration order.
    """
    methods: list[Method] = []

    for element in elements:
        match element:
            case Field(names=(name,), type=FuncType(params=params, results=results)):
                context = {"interface": interface, "method": name}
                methods.append(
                    Method(
                        name=name,
                        params=extract_values(params, group="params", **context),
                        results=extract_values(results, group="results", **context),
                    )
                )

    return tuple(methods)


def extract_values(
    fields: tuple[Field, ...],
    *,
    interface: str,
    method: str,
    group: str,
) -> tuple[Value, ...]:
    """Flatten one field list into named values.

    Named fields yield one Value per declared name.
    Unnamed fields yield one Value named capitalize(type) + index, where
    index counts unnamed fields of this list only.

    Examples:
        (a, b Foo)            -> a Foo, b Foo
        (int, name string, int) -> Int0 int, name string, Int1 int

    Args:
        fields: Parameter or result field list.
        interface: Interface name (for error messages).
        method: Method name (for error messages).
        group: "params" or "results" (for error messages).

    Returns:
        Values in declaration order.

    Raises:
        UnsupportedFieldTypeError: Field type is not a plain identifier.
    """
    values: list[Value] = []
    unnamed = 0

    for index, field in enumerate(fields):
        # FAIL-FIRST: only plain identifiers are extractable
        if not isinstance(field.type, Ident):
            raise UnsupportedFieldTypeError(
                interface=interface,
                method=method,
                group=group,
                index=index,
                got=expr_string(field.type),
            )

        type_name = field.type.name
        if field.names:
            values.extend(Value(name=name, type_name=type_name) for name in field.names)
        else:
            values.append(Value(name=synthetic_name(type_name, unnamed), type_name=type_name))
            unnamed += 1

    return tuple(values)


def synthetic_name(type_name: str, index: int) -> str:
    """Build name for an unnamed field.

    Args:
        type_name: Field type identifier.
        index: Position among unnamed fields of the same list.

    Returns:
        Capitalized type name followed by index: ("string", 0) -> "String0".
    """
    return f"{type_name[:1].upper()}{type_name[1:]}{index}"

