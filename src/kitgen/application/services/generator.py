"""Generator service: one code generation run.

Load package → header → walk declarations per type name → format.
Owns the run's Render buffer and TemplateCache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kitgen.application.render import Render
from kitgen.application.services.walker import DeclarationWalker
from kitgen.infrastructure.adapters import GofmtFormatter, GoSourceLoader
from kitgen.infrastructure.templates import TemplateCache

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from kitgen.domain.config import GeneratorConfig
    from kitgen.domain.ports import FormatterPort, SourceLoaderPort
    from kitgen.domain.syntax import SourcePackage

logger = logging.getLogger(__name__)

HEADER = '// Code generated by "kitgen %s"; DO NOT EDIT.\n\npackage %s\n'


class Generator:
    """Code generation run.

    Single use: the output buffer is shared by every requested type name
    and never reset.

    Example:
        generator = Generator(GeneratorConfig(type_names=("Service",)))
        source = generator.run([Path("./service")], ["-type", "Service"])
    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        loader: SourceLoaderPort | None = None,
        formatter: FormatterPort | None = None,
        templates: TemplateCache | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            config: Run configuration
            loader: Source loader (default: GoSourceLoader)
            formatter: Output formatter (default: GofmtFormatter)
            templates: Template cache (default: built from config.template_dirs)
        """
        self.config = config
        self._loader = loader if loader is not None else GoSourceLoader()
        self._formatter = formatter if formatter is not None else GofmtFormatter()
        self._templates = (
            templates if templates is not None else TemplateCache(config.template_dirs)
        )
        self._render = Render()
        self._package: SourcePackage | None = None

    @property
    def package(self) -> SourcePackage:
        """Loaded package.

        Raises:
            RuntimeError: If parse() was not called
        """
        if self._package is None:
            raise RuntimeError("no package loaded, call parse() first")
        return self._package

    @property
    def render(self) -> Render:
        """Output buffer of this run."""
        return self._render

    @property
    def output_path(self) -> Path:
        """Default or configured output file path."""
        return self.config.output_path(self.package.directory)

    def parse(self, paths: Sequence[Path]) -> SourcePackage:
        """Load the package to generate from.

        Args:
            paths: Single directory or files of one package

        Returns:
            Loaded package

        Raises:
            ParseError: File cannot be read or parsed
            NoSourceFilesError: Nothing to load
            MixedPackagesError: Files of different packages
        """
        self._package = self._loader.load(paths)
        logger.debug(
            "loaded package %s from %d file(s)", self._package.name, len(self._package.files)
        )
        return self._package

    def generate_header(self, args: Sequence[str]) -> None:
        """Append generated-code header and package clause.

        Args:
            args: Command-line arguments echoed in the header
        """
        self._render.appendf(HEADER, " ".join(args), self.package.name)

    def generate_type(self, type_name: str) -> int:
        """Render templates for one interface type name.

        Args:
            type_name: Interface name to generate for

        Returns:
            Number of templates rendered
        """
        walker = DeclarationWalker(
            type_name,
            self._templates,
            self._render,
            marker=self.config.marker,
            trace=self.config.debug,
        )
        rendered = walker.walk(self.package)
        if walker.matched == 0:
            logger.warning(
                "no decorated interface %s found in package %s", type_name, self.package.name
            )
        elif rendered == 0:
            logger.warning(
                "interface %s in package %s is decorated but names no templates",
                type_name,
                self.package.name,
            )
        else:
            logger.debug("rendered %d template(s) for %s", rendered, type_name)
        return rendered

    def format(self) -> str:
        """Format accumulated output.

        Returns:
            Formatted source

        Raises:
            FormatError: Output is not valid source (carries raw text)
        """
        return self._formatter.format(self._render.text)

    def run(self, paths: Sequence[Path], args: Sequence[str] = ()) -> str:
        """Full pipeline for every configured type name.

        Args:
            paths: Single directory or files of one package
            args: Command-line arguments echoed in the header

        Returns:
            Formatted source
        """
        self.parse(paths)
        self.generate_header(args)
        for type_name in self.config.type_names:
            self.generate_type(type_name)
        return self.format()


def generate(
    paths: Sequence[Path],
    config: GeneratorConfig,
    *,
    args: Sequence[str] = (),
    loader: SourceLoaderPort | None = None,
    formatter: FormatterPort | None = None,
) -> str:
    """Run a generator and return formatted source.

    Args:
        paths: Single directory or files of one package
        config: Run configuration
        args: Command-line arguments echoed in the header
        loader: Source loader override
        formatter: Output formatter override

    Returns:
        Formatted source
    """
    return Generator(config, loader=loader, formatter=formatter).run(paths, args)
