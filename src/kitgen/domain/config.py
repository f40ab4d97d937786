"""Generator configuration.

User-provided run options. Replaces process-wide flags: one config per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MARKER = "//kit:"
DEFAULT_SUFFIX = "kit"
STDOUT = "-"


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Run configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        type_names: Interface type names to generate for, in order.
        marker: Comment prefix that marks a decorator line.
        template_dirs: Template directories searched before bundled templates.
        suffix: Output file suffix in <type>_<suffix>.go.
        output: Output file path. None = derived from first type name,
            "-" = stdout.
        debug: Trace declaration traversal to the log.
    """

    type_names: tuple[str, ...]
    marker: str = DEFAULT_MARKER
    template_dirs: tuple[Path, ...] = ()
    suffix: str = DEFAULT_SUFFIX
    output: str | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type_names:
            raise ValueError("type_names must not be empty")
        for name in self.type_names:
            if not name.isidentifier():
                raise ValueError(f"type name must be an identifier, got {name!r}")
        if not self.marker:
            raise ValueError("marker must not be empty")
        if not self.suffix:
            raise ValueError("suffix must not be empty")
        if self.output == "":
            raise ValueError("output must not be empty string, use None for default")

    @property
    def writes_stdout(self) -> bool:
        """Check if output goes to stdout."""
        return self.output == STDOUT

    def output_path(self, directory: Path) -> Path:
        """Resolve output file path.

        Args:
            directory: Package source directory.

        Returns:
            Explicit output path, or <directory>/<type>_<suffix>.go lowercased.
        """
        if self.output is not None and not self.writes_stdout:
            return Path(self.output)
        base_name = f"{self.type_names[0]}_{self.suffix}.go"
        return directory / base_name.lower()
