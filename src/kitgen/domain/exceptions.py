"""Domain exceptions: all public errors of kitgen.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application raise these, not define their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class KitgenError(Exception):
    """Base for all kitgen error exceptions.

    Allows: except KitgenError to catch all generator errors.
    """


class ParseError(KitgenError, SyntaxError):
    """Failed to read or parse a Go source file.

    FAIL-FIRST: invalid syntax raises immediately.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        path: Path to file that failed.
        reason: Error description.
        line: 1-based line of the error, None if unknown.
    """

    def __init__(self, *, path: str, reason: str, line: int | None = None) -> None:
        """Initialize with file path, error reason and optional line."""
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else path
        super().__init__(f"{where}: {reason}")


class NoSourceFilesError(KitgenError, FileNotFoundError):
    """No Go source files found for the requested paths.

    Attributes:
        paths: Paths that were searched.
    """

    def __init__(self, paths: Iterable[str]) -> None:
        """Initialize with searched paths."""
        self.paths = tuple(paths)
        super().__init__(f"no buildable Go source files in {', '.join(self.paths)}")


class MixedPackagesError(KitgenError, ValueError):
    """Source files belong to more than one package.

    Attributes:
        packages: Package names found, in discovery order.
    """

    def __init__(self, packages: Iterable[str]) -> None:
        """Initialize with package names."""
        self.packages = tuple(packages)
        super().__init__(f"must be a single package, found {', '.join(self.packages)}")


class UnsupportedFieldTypeError(KitgenError, TypeError):
    """Interface method field has a type other than a plain identifier.

    Pointers, slices, qualified names and other composite types are outside
    the extraction contract. Raised instead of dropping the field.

    Attributes:
        interface: Interface type name.
        method: Method name.
        group: Field list kind ("params" or "results").
        index: 0-based position of the field in its list.
        got: Offending type as Go source text.
    """

    def __init__(self, *, interface: str, method: str, group: str, index: int, got: str) -> None:
        """Initialize with declaration and field coordinates."""
        self.interface = interface
        self.method = method
        self.group = group
        self.index = index
        self.got = got
        super().__init__(
            f"{interface}.{method}: {group}[{index}] has unsupported type {got!r}, "
            "expected a simple type identifier"
        )


class TemplateNotFoundError(KitgenError, LookupError):
    """No template for decorator/param combination.

    Attributes:
        decorator: Decorator name.
        param: Decorator parameter token.
        path: Template path that was looked up.
    """

    def __init__(self, *, decorator: str, param: str, path: str) -> None:
        """Initialize with decorator, param and looked-up path."""
        self.decorator = decorator
        self.param = param
        self.path = path
        super().__init__(f"template not found for decorator {decorator!r} param {param!r}: {path}")


class TemplateParseError(KitgenError, SyntaxError):
    """Template source is not valid template syntax.

    Attributes:
        path: Template path.
        reason: Underlying syntax error.
        line: Line in the template, None if unknown.
    """

    def __init__(self, *, path: str, reason: str, line: int | None = None) -> None:
        """Initialize with template path, reason and optional line."""
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else path
        super().__init__(f"fail to parse template {where}: {reason}")


class TemplateRenderError(KitgenError, RuntimeError):
    """Template failed during execution.

    Example: template references a model attribute that does not exist.

    Attributes:
        path: Template path.
        reason: Underlying error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with template path and reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"fail to execute template {path}: {reason}")


class FormatError(KitgenError, ValueError):
    """Generated text is not valid source and could not be formatted.

    Carries the raw text so the caller can still inspect it.

    Attributes:
        reason: Formatter diagnostics.
        raw: Unformatted generated text.
    """

    def __init__(self, *, reason: str, raw: str) -> None:
        """Initialize with formatter diagnostics and raw text."""
        self.reason = reason
        self.raw = raw
        super().__init__(f"fail to format generated source: {reason}")


class FormatterNotFoundError(KitgenError, RuntimeError):
    """Formatter executable is not available.

    Attributes:
        command: Executable that could not be started.
    """

    def __init__(self, command: str) -> None:
        """Initialize with command name."""
        self.command = command
        super().__init__(f"formatter {command!r} not found in PATH")
