"""Go lexer for the declaration loader.

Splits Go source into tokens with line and offset info. Literals and
comments are recognised so that brackets inside them never confuse the
parser; operators other than ... and <- are single characters, which is
enough for skipping bodies and initialisers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from kitgen.domain.exceptions import ParseError

if TYPE_CHECKING:
    from collections.abc import Iterator


class TokenKind(Enum):
    """Lexical token category."""

    COMMENT = "COMMENT"
    IDENT = "IDENT"
    KEYWORD = "KEYWORD"
    STRING = "STRING"
    CHAR = "CHAR"
    NUMBER = "NUMBER"
    OP = "OP"
    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    """Lexical token.

    Attributes:
        kind: Token category.
        text: Source text of the token.
        line: 1-based line where the token starts.
        end_line: 1-based line where the token ends (differs for block
            comments and raw strings).
        start: Offset of first character.
        end: Offset after last character.
    """

    kind: TokenKind
    text: str
    line: int
    end_line: int
    start: int
    end: int

    def is_op(self, text: str) -> bool:
        """Check if token is the given operator."""
        return self.kind is TokenKind.OP and self.text == text

    def is_keyword(self, text: str) -> bool:
        """Check if token is the given keyword."""
        return self.kind is TokenKind.KEYWORD and self.text == text


KEYWORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

_TOKEN_RE = re.compile(
    r"""
      (?P<space>[ \t\r\n\f]+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<raw_string>`[^`]*`)
    | (?P<string>"(?:[^"\\\n]|\\.)*")
    | (?P<char>'(?:[^'\\\n]|\\.)+')
    | (?P<number>\.?[0-9][0-9a-zA-Z_.]*(?:[eEpP][+-][0-9_]+)?)
    | (?P<ident>[^\W\d]\w*)
    | (?P<op>\.\.\.|<-|[^\s\w])
    """,
    re.VERBOSE | re.DOTALL,
)

_KINDS = {
    "line_comment": TokenKind.COMMENT,
    "block_comment": TokenKind.COMMENT,
    "raw_string": TokenKind.STRING,
    "string": TokenKind.STRING,
    "char": TokenKind.CHAR,
    "number": TokenKind.NUMBER,
    "ident": TokenKind.IDENT,
    "op": TokenKind.OP,
}

_UNTERMINATED = {
    '"': "string literal not terminated",
    "'": "rune literal not terminated",
    "`": "raw string literal not terminated",
}


def tokenize(source: str, path: str = "<source>") -> Iterator[Token]:
    """Tokenize Go source.

    Whitespace is dropped, comments are kept. Ends with one EOF token.

    Args:
        source: Go source text.
        path: File name for error messages.

    Yields:
        Tokens in source order.

    Raises:
        ParseError: Unterminated literal or comment.
    """
    pos = 0
    line = 1
    length = len(source)

    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:  # pragma: no cover - op group matches any char
            raise ParseError(path=path, reason=f"invalid character {source[pos]!r}", line=line)

        group = match.lastgroup
        text = match.group()
        end_line = line + text.count("\n")

        if group != "space":
            kind = _KINDS[group]
            if kind is TokenKind.OP:
                if text in _UNTERMINATED:
                    raise ParseError(path=path, reason=_UNTERMINATED[text], line=line)
                if text == "/" and source.startswith("/*", pos):
                    raise ParseError(path=path, reason="comment not terminated", line=line)
            if kind is TokenKind.IDENT and text in KEYWORDS:
                kind = TokenKind.KEYWORD
            yield Token(kind, text, line, end_line, match.start(), match.end())

        line = end_line
        pos = match.end()

    yield Token(TokenKind.EOF, "", line, line, length, length)
