"""JSON reporter: extracted interfaces → JSON string."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kitgen.domain.model import Interface, Method, Value


class InterfaceJsonReporter:
    """JSON reporter: outputs machine-readable interface models.

    Schema matches domain structure 1:1.
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
        """
        self._indent = indent

    def report(self, interfaces: Iterable[Interface]) -> str:
        """Format interfaces as JSON string.

        Args:
            interfaces: Extracted interface models.

        Returns:
            JSON array, one object per interface.
        """
        data = [_interface_to_dict(i) for i in interfaces]
        return json.dumps(data, indent=self._indent)


def _interface_to_dict(interface: Interface) -> dict[str, object]:
    """Convert Interface to dict."""
    return {
        "name": interface.name,
        "methods": [_method_to_dict(m) for m in interface.methods],
    }


def _method_to_dict(method: Method) -> dict[str, object]:
    """Convert Method to dict."""
    return {
        "name": method.name,
        "params": [_value_to_dict(v) for v in method.params],
        "results": [_value_to_dict(v) for v in method.results],
    }


def _value_to_dict(value: Value) -> dict[str, str]:
    """Convert Value to dict."""
    return {"name": value.name, "type": value.type_name}
