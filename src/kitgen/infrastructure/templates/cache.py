"""Template resolver with per-run compile cache.

Two-level lookup: path -> compiled template in this cache, otherwise the
Jinja2 loader chain (user directories, then bundled kitgen/templates).
Templates may import or include each other; they share one environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
)

from kitgen.domain.exceptions import TemplateNotFoundError, TemplateParseError, TemplateRenderError
from kitgen.infrastructure.templates.filters import FILTERS

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from jinja2 import BaseLoader, Template

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"


def template_path(decorator: str, param: str) -> str:
    """Build template path for decorator/param combination.

    Args:
        decorator: Decorator name.
        param: Decorator parameter token.

    Returns:
        Loader-relative path "<decorator>/<param>.tmpl".
    """
    return f"{decorator}/{param}{TEMPLATE_SUFFIX}"


def create_environment(search_path: Sequence[Path] = ()) -> Environment:
    """Create template environment with helper filters bound.

    Filters are installed before any template is compiled: Jinja2 resolves
    filter names at compile time.

    Args:
        search_path: Directories searched before bundled templates.

    Returns:
        Configured Environment.
    """
    loaders: list[BaseLoader] = []
    if search_path:
        loaders.append(FileSystemLoader([str(p) for p in search_path]))
    loaders.append(PackageLoader("kitgen", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        auto_reload=False,
        autoescape=False,
    )
    env.filters.update(FILTERS)
    return env


class TemplateCache:
    """Resolves and compiles templates once per run.

    First successful compile wins: later lookups of the same path return
    the cached template. Never invalidated.
    """

    def __init__(self, search_path: Sequence[Path] = ()) -> None:
        """Initialize cache.

        Args:
            search_path: Directories searched before bundled templates.
        """
        self._env = create_environment(search_path)
        self._templates: dict[str, Template] = {}

    def resolve(self, decorator: str, param: str) -> Template:
        """Get compiled template for decorator/param.

        Args:
            decorator: Decorator name.
            param: Decorator parameter token.

        Returns:
            Ready-to-render template.

        Raises:
            TemplateNotFoundError: No template at derived path.
            TemplateParseError: Template source has syntax errors.
        """
        path = template_path(decorator, param)

        cached = self._templates.get(path)
        if cached is not None:
            return cached

        logger.info("loading template: %s", path)

        try:
            template = self._env.get_template(path)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(decorator=decorator, param=param, path=path) from e
        except TemplateSyntaxError as e:
            raise TemplateParseError(path=path, reason=e.message or str(e), line=e.lineno) from e

        self._templates[path] = template
        return template

    def render(self, decorator: str, param: str, context: Mapping[str, object]) -> str:
        """Resolve and execute template.

        Output is produced in full before returning: a failing template
        yields no partial text.

        Args:
            decorator: Decorator name.
            param: Decorator parameter token.
            context: Template variables.

        Returns:
            Rendered text.

        Raises:
            TemplateNotFoundError: No template at derived path.
            TemplateParseError: Template source has syntax errors.
            TemplateRenderError: Template failed during execution.
        """
        template = self.resolve(decorator, param)

        try:
            return template.render(context)
        except TemplateSyntaxError as e:
            # Imported or included template failed to compile
            raise TemplateParseError(
                path=e.name or template_path(decorator, param),
                reason=e.message or str(e),
                line=e.lineno,
            ) from e
        except Exception as e:
            # Filters and context objects may raise anything while executing
            raise TemplateRenderError(path=template_path(decorator, param), reason=str(e)) from e

    @property
    def cached_paths(self) -> frozenset[str]:
        """Paths compiled so far."""
        return frozenset(self._templates)

    def __len__(self) -> int:
        """Number of compiled templates."""
        return len(self._templates)
