"""Template namespace: resolution, caching and helper filters."""

from kitgen.infrastructure.templates.cache import TemplateCache, create_environment, template_path
from kitgen.infrastructure.templates.filters import FILTERS

__all__ = [
    "FILTERS",
    "TemplateCache",
    "create_environment",
    "template_path",
]
