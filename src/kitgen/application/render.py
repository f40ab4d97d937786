"""Render accumulator: append-only output buffer of one run."""

from __future__ import annotations

from io import StringIO


class Render:
    """Accumulated generated text.

    Shared by every decorator/param invocation of a run, in invocation
    order. Append-only: never reset between type names.
    """

    def __init__(self) -> None:
        self._buf = StringIO()
        self._size = 0

    def append(self, text: str) -> Render:
        """Append text.

        Args:
            text: Text to append.

        Returns:
            Self, for chaining.
        """
        self._buf.write(text)
        self._size += len(text)
        return self

    def appendf(self, fmt: str, *args: object) -> Render:
        """Append %-formatted text."""
        return self.append(fmt % args if args else fmt)

    @property
    def text(self) -> str:
        """Everything appended so far."""
        return self._buf.getvalue()

    @property
    def is_empty(self) -> bool:
        """Check if nothing was appended."""
        return self._size == 0

    def __len__(self) -> int:
        """Number of characters appended."""
        return self._size
