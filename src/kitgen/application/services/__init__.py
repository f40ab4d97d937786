"""Application services for code generation.

Generator is the main facade for one generation run.
"""

from kitgen.application.services.generator import Generator, generate
from kitgen.application.services.walker import DeclarationWalker

__all__ = [
    "DeclarationWalker",
    "Generator",
    "generate",
]
