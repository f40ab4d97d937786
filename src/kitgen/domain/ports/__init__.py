"""Ports: interfaces implemented by infrastructure adapters."""

from kitgen.domain.ports.formatter import FormatterPort
from kitgen.domain.ports.source_loader import SourceLoaderPort

__all__ = [
    "FormatterPort",
    "SourceLoaderPort",
]
