"""Domain layer: interface model consumed by templates.

Immutable value objects extracted from an annotated interface declaration.
Attribute names are the template-facing API: method.name, method.params,
value.type_name and so on.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Value:
    """Named, typed parameter or result.

    Unnamed fields receive a synthetic name before reaching this model,
    so name is never empty.

    Examples:
        Greet(name string)    -> Value("name", "string")
        Greet() string        -> Value("String0", "string")
    """

    name: str
    type_name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("value name must not be empty")
        if not self.type_name:
            raise ValueError("value type_name must not be empty")


@dataclass(frozen=True, slots=True)
class Method:
    """Interface method signature.

    Attributes:
        name: Method identifier as declared.
        params: Parameters in declaration order, grouped names expanded.
        results: Results in declaration order, grouped names expanded.
    """

    name: str
    params: tuple[Value, ...] = ()
    results: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("method name must not be empty")


@dataclass(frozen=True, slots=True)
class Interface:
    """Interface declaration with its directly declared methods.

    Embedded interfaces are not flattened into methods.
    """

    name: str
    methods: tuple[Method, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("interface name must not be empty")

    def __str__(self) -> str:
        """Format as name (N methods)."""
        return f"{self.name} ({len(self.methods)} methods)"
