"""kitgen - annotation-driven code generator for Go interfaces."""

__version__ = "0.1.0"

from kitgen.application.services import Generator, generate
from kitgen.domain.config import GeneratorConfig

__all__ = ["Generator", "GeneratorConfig", "__version__", "generate"]
