"""Infrastructure adapters for external interfaces."""

from kitgen.infrastructure.adapters.go_loader import GoSourceLoader
from kitgen.infrastructure.adapters.gofmt import GofmtFormatter

__all__ = [
    "GoSourceLoader",
    "GofmtFormatter",
]
