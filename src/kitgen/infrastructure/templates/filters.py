"""Text helpers exposed to templates as filters.

Bound once when the template environment is created, before any template
is compiled. The table is read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


def join(values: Iterable[object], separator: str = ",") -> str:
    """Join values with a comma (or given separator)."""
    return separator.join(str(value) for value in values)


def upper(text: str) -> str:
    """Upper-case whole string."""
    return text.upper()


def lower(text: str) -> str:
    """Lower-case whole string."""
    return text.lower()


def capitalize(text: str) -> str:
    """Upper-case first letter, keep the rest: "userID" -> "UserID"."""
    return text[:1].upper() + text[1:]


def uncapitalize(text: str) -> str:
    """Lower-case first letter, keep the rest: "UserID" -> "userID"."""
    return text[:1].lower() + text[1:]


FILTERS: MappingProxyType[str, Callable[..., str]] = MappingProxyType(
    {
        "join": join,
        "upper": upper,
        "lower": lower,
        "capitalize": capitalize,
        "uncapitalize": uncapitalize,
    }
)
