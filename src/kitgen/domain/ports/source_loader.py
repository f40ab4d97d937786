"""Source loader port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from kitgen.domain.syntax import SourceFile, SourcePackage


class SourceLoaderPort(ABC):
    """Port for loading a package's declaration forest.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def parse_file(self, path: Path) -> SourceFile:
        """Parse single source file.

        Args:
            path: Path to source file

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If file cannot be read or parsed
        """
        ...

    @abstractmethod
    def load(self, paths: Sequence[Path]) -> SourcePackage:
        """Load one package from a directory or a list of files.

        Args:
            paths: Single directory, or files of one package

        Returns:
            SourcePackage with files in forest order

        Raises:
            ParseError: If any file cannot be parsed
            NoSourceFilesError: If nothing to load
            MixedPackagesError: If files belong to different packages
        """
        ...
