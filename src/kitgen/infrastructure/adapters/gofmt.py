"""gofmt formatter adapter.

Implements FormatterPort by piping generated text through the gofmt
executable. gofmt rejects syntactically invalid Go, which is surfaced as
FormatError together with the raw text.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from kitgen.domain.exceptions import FormatError, FormatterNotFoundError
from kitgen.domain.ports.formatter import FormatterPort

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("gofmt",)


class GofmtFormatter(FormatterPort):
    """Formats Go source with gofmt.

    Attributes:
        command: Executable and arguments; source is passed on stdin.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_COMMAND) -> None:
        """Initialize formatter.

        Args:
            command: Executable and arguments.

        Raises:
            ValueError: If command is empty (FAIL-FIRST)
        """
        if not command:
            raise ValueError("command must not be empty")
        self.command = tuple(command)

    def format(self, source: str) -> str:
        """Format source with gofmt.

        Args:
            source: Raw generated text

        Returns:
            gofmt output

        Raises:
            FormatError: gofmt rejected the text (carries raw text)
            FormatterNotFoundError: gofmt executable not found
        """
        logger.debug("formatting %d bytes with %s", len(source), " ".join(self.command))

        try:
            completed = subprocess.run(
                self.command,
                input=source,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise FormatterNotFoundError(self.command[0]) from e

        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise FormatError(reason=reason, raw=source)

        return completed.stdout
