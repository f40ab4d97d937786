"""Decorator comment analyzer.

Turns the doc comment block of a declaration into a decorator map:

    //kit:endpoint request,func   -> {"endpoint": ("request", "func")}
    //kit:middleware logging      -> {"middleware": ("logging",)}

Pure function: no state, no side effects beyond debug logging.
"""

from __future__ import annotations

import csv
import logging
import re
from typing import TYPE_CHECKING

from kitgen.domain.config import DEFAULT_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Name and parameter record are separated by the first whitespace run.
SEPARATOR = re.compile(r"\s+")

# Parameter records starting with this character are comments.
COMMENT_CHAR = "#"


def parse_decorators(
    comments: Iterable[str] | None,
    marker: str = DEFAULT_MARKER,
) -> dict[str, tuple[str, ...]]:
    """Extract decorators from comment lines.

    Lines without the marker prefix are ignored. Repeated names merge:
    parameters of later lines are appended, a later line without
    parameters leaves the existing entry untouched.

    Args:
        comments: Raw comment texts (with // prefix), None if no doc comment.
        marker: Decorator prefix.

    Returns:
        Decorator name -> parameters, in first-seen order.
        Names without parameters map to ().
    """
    decorators: dict[str, tuple[str, ...]] = {}

    for comment in comments or ():
        if not comment.startswith(marker):
            continue

        parts = SEPARATOR.split(comment[len(marker) :], maxsplit=1)
        name = parts[0].strip()
        if not name:
            continue

        params = parse_params(parts[1]) if len(parts) > 1 else ()

        if name not in decorators:
            decorators[name] = params
        elif params:
            decorators[name] = decorators[name] + params

    return decorators


def parse_params(record: str) -> tuple[str, ...]:
    """Decode one comma-separated parameter record.

    Quoted fields and leading-space trimming follow csv rules. A quote
    inside an unquoted field is malformed.
    Best-effort: malformed records yield no parameters.

    Args:
        record: Text after the decorator name.

    Returns:
        Parameter strings in order, () for empty, comment or malformed record.
    """
    if record.startswith(COMMENT_CHAR):
        return ()

    if _has_bare_quote(record):
        logger.debug("ignoring malformed decorator parameters %r: bare quote in field", record)
        return ()

    reader = csv.reader([record], skipinitialspace=True, strict=True)
    try:
        fields = next(reader, None)
    except csv.Error as e:
        logger.debug("ignoring malformed decorator parameters %r: %s", record, e)
        return ()

    if fields is None:
        return ()

    return tuple(fields)


def _has_bare_quote(record: str) -> bool:
    """Check for a quote character inside an unquoted field.

    csv.reader accepts a"b as a literal field; such records are rejected.
    """
    state = "start"
    for char in record:
        match state:
            case "start":
                if char == '"':
                    state = "quoted"
                elif char != " " and char != ",":
                    state = "unquoted"
            case "unquoted":
                if char == '"':
                    return True
                if char == ",":
                    state = "start"
            case "quoted":
                if char == '"':
                    state = "closed"
            case "closed":
                # "" inside a quoted field re-enters it
                if char == '"':
                    state = "quoted"
                elif char == ",":
                    state = "start"
                else:
                    state = "unquoted"
    return False
