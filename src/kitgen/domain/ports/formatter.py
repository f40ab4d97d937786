"""Formatter port (interface)."""

from abc import ABC, abstractmethod


class FormatterPort(ABC):
    """Port for canonicalising generated source text.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def format(self, source: str) -> str:
        """Format source text.

        Args:
            source: Raw generated text

        Returns:
            Canonically formatted text

        Raises:
            FormatError: If text is not syntactically valid (carries raw text)
        """
        ...
