"""Analyzers: decorator comments and interface signatures."""

from kitgen.infrastructure.analyzers.decorator_analyzer import parse_decorators, parse_params
from kitgen.infrastructure.analyzers.signature_analyzer import (
    extract_interfaces,
    extract_values,
    synthetic_name,
)

__all__ = [
    # Decorator comments
    "parse_decorators",
    "parse_params",
    # Interface signatures
    "extract_interfaces",
    "extract_values",
    "synthetic_name",
]
