"""Declaration walker: drives template rendering over the syntax forest.

For each decorated type declaration whose group declares the requested
interface, every (decorator, param) combination is rendered once and
appended to the shared Render buffer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from kitgen.application.reporters.json import InterfaceJsonReporter
from kitgen.domain.config import DEFAULT_MARKER
from kitgen.domain.syntax import FuncDecl, ImportDecl, TypeDecl, ValueDecl
from kitgen.infrastructure.analyzers import extract_interfaces, parse_decorators

if TYPE_CHECKING:
    from kitgen.application.render import Render
    from kitgen.domain.model import Interface
    from kitgen.domain.syntax import Decl, SourcePackage
    from kitgen.infrastructure.templates import TemplateCache

logger = logging.getLogger(__name__)


class DeclarationWalker:
    """Visits declarations of one package for one requested type name.

    Attributes:
        type_name: Interface name to generate for.
        marker: Decorator comment prefix.
        trace: Log every visited declaration at DEBUG level.
        matched: Decorated declarations of type_name seen by the last walk.
    """

    def __init__(
        self,
        type_name: str,
        templates: TemplateCache,
        render: Render,
        *,
        marker: str = DEFAULT_MARKER,
        trace: bool = False,
    ) -> None:
        """Initialize walker.

        Args:
            type_name: Interface name to generate for
            templates: Template cache of the current run
            render: Shared output buffer
            marker: Decorator comment prefix
            trace: Enable traversal tracing
        """
        self.type_name = type_name
        self.marker = marker
        self.trace = trace
        self._templates = templates
        self._render = render
        self._reporter = InterfaceJsonReporter()
        self.matched = 0

    def walk(self, package: SourcePackage) -> int:
        """Visit every declaration in forest order.

        Args:
            package: Loaded package

        Returns:
            Number of templates rendered

        Raises:
            UnsupportedFieldTypeError: Method signature cannot be modelled
            TemplateNotFoundError: Decorator/param has no template
            TemplateParseError: Template has invalid syntax
            TemplateRenderError: Template failed while rendering
        """
        self.matched = 0
        rendered = 0
        for decl in package.decls:
            rendered += self.visit(decl, package.name)
        return rendered

    def visit(self, decl: Decl, package: str) -> int:
        """Visit one declaration.

        Args:
            decl: Declaration to visit
            package: Go package name

        Returns:
            Number of templates rendered for this declaration
        """
        if self.trace:
            logger.debug("visit %s at line %d", type(decl).__name__, decl.line)

        match decl:
            case TypeDecl():
                return self._visit_type_decl(decl, package)
            case ImportDecl() | ValueDecl() | FuncDecl():
                return 0
            case _:
                assert_never(decl)

    def _visit_type_decl(self, decl: TypeDecl, package: str) -> int:
        decorators = parse_decorators(decl.doc, self.marker)
        if not decorators:
            return 0

        interfaces = extract_interfaces(decl.specs, self.type_name)
        if not interfaces:
            return 0
        self.matched += 1

        if self.trace:
            logger.debug("decorators: %s", decorators)
            logger.debug("model: %s", self._reporter.report(interfaces))

        rendered = 0
        for decorator, params in decorators.items():
            for param in params:
                context = self._context(interfaces, package, decorator, param, params)
                self._render.append(self._templates.render(decorator, param, context))
                rendered += 1
        return rendered

    def _context(
        self,
        interfaces: tuple[Interface, ...],
        package: str,
        decorator: str,
        param: str,
        params: tuple[str, ...],
    ) -> dict[str, object]:
        return {
            "interfaces": interfaces,
            "interface": interfaces[0],
            "type_name": self.type_name,
            "package": package,
            "decorator": decorator,
            "param": param,
            "params": params,
        }
