"""Domain layer: declaration forest of a Go package.

Immutable tagged variants produced by the source loader.
Only declarations and type expressions are represented; function bodies and
value initialisers are not part of the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias, assert_never

if TYPE_CHECKING:
    from pathlib import Path


# =============================================================================
# TYPE EXPRESSIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Ident:
    """Plain type identifier: string, error, Foo."""

    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("identifier must not be empty")


@dataclass(frozen=True, slots=True)
class SelectorExpr:
    """Qualified identifier: context.Context."""

    package: str
    name: str


@dataclass(frozen=True, slots=True)
class StarExpr:
    """Pointer type: *T."""

    elem: TypeExpr


@dataclass(frozen=True, slots=True)
class ArrayType:
    """Array or slice type: [N]T, []T.

    length is the array length as written, None for slices.
    """

    elem: TypeExpr
    length: str | None = None


@dataclass(frozen=True, slots=True)
class MapType:
    """Map type: map[K]V."""

    key: TypeExpr
    value: TypeExpr


class ChanDir(Enum):
    """Channel direction."""

    BOTH = "chan"
    SEND = "chan<-"
    RECV = "<-chan"


@dataclass(frozen=True, slots=True)
class ChanType:
    """Channel type: chan T, chan<- T, <-chan T."""

    elem: TypeExpr
    direction: ChanDir = ChanDir.BOTH


@dataclass(frozen=True, slots=True)
class Ellipsis:
    """Variadic parameter type: ...T."""

    elem: TypeExpr


@dataclass(frozen=True, slots=True)
class IndexExpr:
    """Generic instantiation: List[T], Map[K, V]."""

    base: TypeExpr
    args: tuple[TypeExpr, ...]


@dataclass(frozen=True, slots=True)
class Field:
    """One entry of a field list.

    Grouped names share one entry: (a, b Foo) -> Field(("a", "b"), Ident("Foo")).
    Unnamed entries have names == ().

    Examples:
        func(string)          -> Field((), Ident("string"))
        func(name string)     -> Field(("name",), Ident("string"))
        interface{ Get() }    -> Field(("Get",), FuncType((), ()))
        interface{ io.Reader }-> Field((), SelectorExpr("io", "Reader"))
    """

    names: tuple[str, ...]
    type: TypeExpr
    line: int = 0


@dataclass(frozen=True, slots=True)
class FuncType:
    """Function signature: func(params) results."""

    params: tuple[Field, ...] = ()
    results: tuple[Field, ...] = ()


@dataclass(frozen=True, slots=True)
class InterfaceType:
    """Interface type.

    methods holds every interface element in declaration order: named
    FuncType entries for methods, unnamed entries for embedded types.
    """

    methods: tuple[Field, ...] = ()


@dataclass(frozen=True, slots=True)
class StructType:
    """Struct type. Fields are not modelled."""


TypeExpr: TypeAlias = (
    Ident
    | SelectorExpr
    | StarExpr
    | ArrayType
    | MapType
    | ChanType
    | Ellipsis
    | IndexExpr
    | FuncType
    | InterfaceType
    | StructType
)


# =============================================================================
# DECLARATIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class TypeSpec:
    """Named type: Name Type, or alias Name = Type."""

    name: str
    type: TypeExpr
    line: int = 0
    is_alias: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("type spec name must not be empty")


@dataclass(frozen=True, slots=True)
class ImportDecl:
    """import "fmt" / import ( ... )."""

    paths: tuple[str, ...]
    line: int = 0


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """type T ... / type ( ... ).

    doc holds the raw comment texts (with // or /* */) of the comment group
    directly above the type keyword, in source order.
    """

    specs: tuple[TypeSpec, ...]
    doc: tuple[str, ...] = ()
    line: int = 0


@dataclass(frozen=True, slots=True)
class ValueDecl:
    """const / var declaration. Initialisers are not modelled."""

    keyword: str
    names: tuple[str, ...] = ()
    line: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.keyword not in ("const", "var"):
            raise ValueError(f"keyword must be 'const' or 'var', got {self.keyword!r}")


@dataclass(frozen=True, slots=True)
class FuncDecl:
    """func Name(...) / func (recv) Name(...). Body is not modelled."""

    name: str
    receiver: str | None = None
    line: int = 0


Decl: TypeAlias = ImportDecl | TypeDecl | ValueDecl | FuncDecl


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Parsed Go source file."""

    path: Path
    package: str
    decls: tuple[Decl, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.package:
            raise ValueError("package name must not be empty")


@dataclass(frozen=True, slots=True)
class SourcePackage:
    """All files of one package, in loader order."""

    name: str
    directory: Path
    files: tuple[SourceFile, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for source in self.files:
            if source.package != self.name:
                raise ValueError(
                    f"{source.path} belongs to package {source.package!r}, not {self.name!r}"
                )

    @property
    def decls(self) -> tuple[Decl, ...]:
        """All declarations in forest order."""
        return tuple(decl for source in self.files for decl in source.decls)


# =============================================================================
# RENDERING
# =============================================================================


def expr_string(expr: TypeExpr) -> str:
    """Render type expression as Go source text.

    Args:
        expr: Type expression.

    Returns:
        Go text, e.g. "*pkg.Foo", "map[string][]int".
    """
    match expr:
        case Ident(name=name):
            return name
        case SelectorExpr(package=package, name=name):
            return f"{package}.{name}"
        case StarExpr(elem=elem):
            return f"*{expr_string(elem)}"
        case ArrayType(elem=elem, length=length):
            return f"[{length or ''}]{expr_string(elem)}"
        case MapType(key=key, value=value):
            return f"map[{expr_string(key)}]{expr_string(value)}"
        case ChanType(elem=elem, direction=direction):
            return f"{direction.value} {expr_string(elem)}"
        case Ellipsis(elem=elem):
            return f"...{expr_string(elem)}"
        case IndexExpr(base=base, args=args):
            return f"{expr_string(base)}[{', '.join(expr_string(a) for a in args)}]"
        case FuncType(params=params, results=results):
            signature = f"func({_fields_string(params)})"
            if len(results) == 1 and not results[0].names:
                return f"{signature} {expr_string(results[0].type)}"
            if results:
                return f"{signature} ({_fields_string(results)})"
            return signature
        case InterfaceType(methods=methods):
            return "interface{}" if not methods else "interface{ ... }"
        case StructType():
            return "struct{ ... }"
        case _:
            assert_never(expr)


def _fields_string(fields: tuple[Field, ...]) -> str:
    """Render field list without parentheses."""
    parts: list[str] = []
    for field in fields:
        type_text = expr_string(field.type)
        if field.names:
            parts.append(f"{', '.join(field.names)} {type_text}")
        else:
            parts.append(type_text)
    return ", ".join(parts)
