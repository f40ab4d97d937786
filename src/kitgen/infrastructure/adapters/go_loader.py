"""Go declaration loader adapter.

Implements SourceLoaderPort with a small recursive-descent parser over
go_lexer tokens. Understands the package clause, import/type/const/var/func
declarations and full type expressions; function bodies, value initialisers
and struct bodies are skipped by bracket matching.

Doc comments follow the Go convention: the comment group ending on the line
directly above a declaration keyword is its documentation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from kitgen.domain.exceptions import MixedPackagesError, NoSourceFilesError, ParseError
from kitgen.domain.ports.source_loader import SourceLoaderPort
from kitgen.domain.syntax import (
    ArrayType,
    ChanDir,
    ChanType,
    Ellipsis,
    Field,
    FuncDecl,
    FuncType,
    Ident,
    ImportDecl,
    IndexExpr,
    InterfaceType,
    MapType,
    SelectorExpr,
    SourceFile,
    SourcePackage,
    StarExpr,
    StructType,
    TypeDecl,
    TypeSpec,
    ValueDecl,
)
from kitgen.infrastructure.adapters.go_lexer import Token, TokenKind, tokenize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kitgen.domain.syntax import Decl, TypeExpr

GO_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"

_DECL_KEYWORDS = frozenset({"import", "type", "const", "var", "func"})
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
_TYPE_KEYWORDS = frozenset({"map", "chan", "func", "interface", "struct"})
_ARITHMETIC = frozenset({"+", "-", "/", "%", "<", ">"})


class GoSourceLoader(SourceLoaderPort):
    """Loads one Go package into a declaration forest.

    Stateless between calls.
    FAIL-FIRST: raises ParseError on unreadable files and syntax errors.
    """

    def parse_file(self, path: Path) -> SourceFile:
        """Parse single Go file.

        Args:
            path: Path to .go file

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If file cannot be read or parsed
        """
        try:
            source = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ParseError(path=str(path), reason="file not found") from e
        except PermissionError as e:
            raise ParseError(path=str(path), reason="permission denied") from e
        except UnicodeDecodeError as e:
            raise ParseError(path=str(path), reason=f"encoding error: {e}") from e
        except OSError as e:
            raise ParseError(path=str(path), reason=e.strerror or str(e)) from e

        return self.parse_source(source, path)

    def parse_source(self, source: str, path: Path) -> SourceFile:
        """Parse Go source text.

        Args:
            source: Go source text
            path: Path recorded in the result and in errors

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If source is not valid
        """
        return _Parser(list(tokenize(source, str(path))), path).parse_file()

    def load(self, paths: Sequence[Path]) -> SourcePackage:
        """Load one package from a directory or a list of files.

        A single directory loads its *.go files except *_test.go, sorted by
        name. No paths means the current directory.

        Args:
            paths: Single directory, or files of one package

        Returns:
            SourcePackage with files in forest order

        Raises:
            ParseError: If any file cannot be parsed
            NoSourceFilesError: If nothing to load
            MixedPackagesError: If files belong to different packages
        """
        if not paths:
            paths = (Path("."),)

        if len(paths) == 1 and paths[0].is_dir():
            directory = paths[0]
            files = sorted(
                p
                for p in directory.iterdir()
                if p.suffix == GO_SUFFIX and not p.name.endswith(TEST_SUFFIX) and p.is_file()
            )
        else:
            files = list(paths)
            directory = files[0].parent

        if not files:
            raise NoSourceFilesError(str(p) for p in paths)

        sources = tuple(self.parse_file(f) for f in files)

        packages = list(dict.fromkeys(s.package for s in sources))
        if len(packages) > 1:
            raise MixedPackagesError(packages)

        return SourcePackage(name=packages[0], directory=directory, files=sources)


@dataclass(frozen=True, slots=True)
class _CommentGroup:
    """Consecutive comment lines."""

    texts: tuple[str, ...]
    end_line: int
    trailing: bool


def _group_comments(tokens: list[Token]) -> dict[int, _CommentGroup]:
    """Group comments and index lead groups by their last line.

    Comments separated by at most one line break form a group. A group
    whose first comment follows code on the same line is a trailing
    comment, ends on that line and never documents a declaration.

    Args:
        tokens: All tokens, comments included.

    Returns:
        end_line -> group, for non-trailing groups.
    """
    groups: list[_CommentGroup] = []
    texts: list[str] = []
    end_line = 0
    trailing = False
    last_code_line = 0

    def close() -> None:
        if texts:
            groups.append(_CommentGroup(tuple(texts), end_line, trailing))
            texts.clear()

    for token in tokens:
        if token.kind is not TokenKind.COMMENT:
            close()
            last_code_line = token.end_line
            continue

        if texts and (token.line > end_line + 1 or (trailing and token.line > end_line)):
            close()
        if not texts:
            trailing = token.line == last_code_line
        texts.append(token.text)
        end_line = token.end_line

    close()
    return {g.end_line: g for g in groups if not g.trailing}


class _Parser:
    """Recursive-descent parser over one file's tokens."""

    def __init__(self, tokens: list[Token], path: Path) -> None:
        self._path = path
        self._docs = _group_comments(tokens)
        self._tokens = [t for t in tokens if t.kind is not TokenKind.COMMENT]
        self._pos = 0

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token:
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _prev(self) -> Token | None:
        return self._tokens[self._pos - 1] if self._pos > 0 else None

    def _advance(self) -> Token:
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def _error(self, reason: str, token: Token | None = None) -> ParseError:
        token = token or self._peek()
        return ParseError(path=str(self._path), reason=reason, line=token.line)

    def _expect_op(self, text: str) -> Token:
        token = self._peek()
        if not token.is_op(text):
            raise self._error(f"expected {text!r}, found {_describe(token)}")
        return self._advance()

    def _expect_ident(self) -> str:
        token = self._peek()
        if token.kind is not TokenKind.IDENT:
            raise self._error(f"expected identifier, found {_describe(token)}")
        return self._advance().text

    def _on_new_line(self) -> bool:
        """Check if next token starts a new line (implicit semicolon)."""
        prev = self._prev()
        return prev is None or self._peek().line > prev.end_line

    def _at_line_start(self, token: Token, index: int) -> bool:
        return index == 0 or token.line > self._tokens[index - 1].end_line

    def _skip_balanced(self) -> list[Token]:
        """Skip from an opening bracket to its matching closer.

        Returns:
            Tokens between the brackets.
        """
        opener = self._advance()
        stack = [_OPENERS[opener.text]]
        inner: list[Token] = []

        while stack:
            token = self._advance()
            if token.kind is TokenKind.EOF:
                raise self._error(f"unclosed {opener.text!r}", opener)
            if token.kind is TokenKind.OP:
                if token.text in _OPENERS:
                    stack.append(_OPENERS[token.text])
                elif token.text in _CLOSERS:
                    if token.text != stack.pop():
                        raise self._error(f"mismatched {token.text!r}", token)
                    if not stack:
                        break
            inner.append(token)

        return inner

    def _skip_to_next_decl(self) -> None:
        """Skip tokens up to the next top-level declaration keyword."""
        depth = 0
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF:
                return
            if (
                depth == 0
                and token.kind is TokenKind.KEYWORD
                and token.text in _DECL_KEYWORDS
                and self._at_line_start(token, self._pos)
            ):
                return
            if token.kind is TokenKind.OP:
                if token.text in _OPENERS:
                    depth += 1
                elif token.text in _CLOSERS:
                    depth -= 1
                    if depth < 0:
                        raise self._error(f"unexpected {token.text!r}", token)
            self._advance()

    def _end_of_element(self, closer: str) -> None:
        """Consume element separator: ';', newline, or closing bracket."""
        token = self._peek()
        if token.is_op(";"):
            self._advance()
        elif not (token.is_op(closer) or self._on_new_line()):
            raise self._error(f"expected ';' or newline, found {_describe(token)}")

    # -------------------------------------------------------------------------
    # File and declarations
    # -------------------------------------------------------------------------

    def parse_file(self) -> SourceFile:
        if not self._peek().is_keyword("package"):
            raise self._error("expected 'package' clause")
        self._advance()
        package = self._expect_ident()

        decls: list[Decl] = []
        while True:
            token = self._peek()
            match token.kind:
                case TokenKind.EOF:
                    break
                case TokenKind.OP if token.text == ";":
                    self._advance()
                case TokenKind.KEYWORD if token.text in _DECL_KEYWORDS:
                    decls.append(self._parse_decl())
                case _:
                    raise self._error(f"non-declaration statement: {_describe(token)}")

        return SourceFile(path=self._path, package=package, decls=tuple(decls))

    def _parse_decl(self) -> Decl:
        keyword = self._advance()
        doc = self._docs.get(keyword.line - 1)
        doc_texts = doc.texts if doc is not None else ()

        match keyword.text:
            case "import":
                return self._parse_import(keyword)
            case "type":
                return self._parse_type_decl(keyword, doc_texts)
            case "const" | "var":
                return self._parse_value_decl(keyword)
            case _:
                return self._parse_func_decl(keyword)

    def _parse_import(self, keyword: Token) -> ImportDecl:
        paths: list[str] = []

        if self._peek().is_op("("):
            self._advance()
            while not self._peek().is_op(")"):
                if self._peek().is_op(";"):
                    self._advance()
                    continue
                paths.append(self._parse_import_spec())
            self._advance()
        else:
            paths.append(self._parse_import_spec())

        return ImportDecl(paths=tuple(paths), line=keyword.line)

    def _parse_import_spec(self) -> str:
        token = self._peek()
        if token.kind is TokenKind.IDENT or token.is_op("."):
            self._advance()
        path = self._advance()
        if path.kind is not TokenKind.STRING:
            raise self._error(f"expected import path, found {_describe(path)}", path)
        return path.text[1:-1]

    def _parse_type_decl(self, keyword: Token, doc: tuple[str, ...]) -> TypeDecl:
        specs: list[TypeSpec] = []

        if self._peek().is_op("("):
            self._advance()
            while not self._peek().is_op(")"):
                if self._peek().is_op(";"):
                    self._advance()
                    continue
                if self._peek().kind is TokenKind.EOF:
                    raise self._error("unclosed type declaration group", keyword)
                specs.append(self._parse_type_spec())
                self._end_of_element(")")
            self._advance()
        else:
            specs.append(self._parse_type_spec())

        return TypeDecl(specs=tuple(specs), doc=doc, line=keyword.line)

    def _parse_type_spec(self) -> TypeSpec:
        line = self._peek().line
        name = self._expect_ident()

        if self._peek().is_op("[") and self._has_type_params():
            self._skip_balanced()

        is_alias = self._peek().is_op("=")
        if is_alias:
            self._advance()

        return TypeSpec(name=name, type=self._parse_type(), line=line, is_alias=is_alias)

    def _has_type_params(self) -> bool:
        """Distinguish type T[P any] from array type T [N]int."""
        first, second = self._peek(1), self._peek(2)
        if first.kind is not TokenKind.IDENT:
            return False
        if second.is_op("]"):
            return False
        if second.is_op("*"):
            return self._is_pointer_constraint()
        return not (second.kind is TokenKind.OP and second.text in _ARITHMETIC)

    def _is_pointer_constraint(self) -> bool:
        """Resolve [P *X] the way Go does.

        A type parameter only when X is a type literal or another entry
        follows; [N*2] and [P *C] are array lengths.
        """
        operand = self._peek(3)
        if operand.kind is TokenKind.KEYWORD and operand.text in _TYPE_KEYWORDS:
            return True
        if operand.kind is TokenKind.OP and operand.text in ("[", "*", "~", "("):
            return True

        depth = 0
        offset = 1
        while True:
            token = self._peek(offset)
            if token.kind is TokenKind.EOF:
                return False
            if token.kind is TokenKind.OP:
                if token.text in _OPENERS:
                    depth += 1
                elif token.text in _CLOSERS:
                    if depth == 0:
                        return False
                    depth -= 1
                elif token.text == "," and depth == 0:
                    return True
            offset += 1

    def _parse_value_decl(self, keyword: Token) -> ValueDecl:
        names: list[str] = []

        if self._peek().is_op("("):
            start = self._pos
            inner = self._skip_balanced()
            depth = 0
            for offset, token in enumerate(inner, start=start + 1):
                at_start = self._at_line_start(token, offset)
                if depth == 0 and token.kind is TokenKind.IDENT and at_start:
                    names.append(token.text)
                if token.kind is TokenKind.OP:
                    if token.text in _OPENERS:
                        depth += 1
                    elif token.text in _CLOSERS:
                        depth -= 1
        else:
            names.append(self._expect_ident())
            while self._peek().is_op(","):
                self._advance()
                names.append(self._expect_ident())
            self._skip_to_next_decl()

        return ValueDecl(keyword=keyword.text, names=tuple(names), line=keyword.line)

    def _parse_func_decl(self, keyword: Token) -> FuncDecl:
        receiver = None
        if self._peek().is_op("("):
            receiver = " ".join(t.text for t in self._skip_balanced()) or None
        name = self._expect_ident()
        self._skip_to_next_decl()
        return FuncDecl(name=name, receiver=receiver, line=keyword.line)

    # -------------------------------------------------------------------------
    # Type expressions
    # -------------------------------------------------------------------------

    def _parse_type(self) -> TypeExpr:
        token = self._peek()

        if token.kind is TokenKind.IDENT:
            return self._parse_type_name()

        if token.kind is TokenKind.KEYWORD and token.text in _TYPE_KEYWORDS:
            self._advance()
            match token.text:
                case "map":
                    self._expect_op("[")
                    key = self._parse_type()
                    self._expect_op("]")
                    return MapType(key=key, value=self._parse_type())
                case "chan":
                    if self._peek().is_op("<-"):
                        self._advance()
                        return ChanType(elem=self._parse_type(), direction=ChanDir.SEND)
                    return ChanType(elem=self._parse_type())
                case "func":
                    return self._parse_signature()
                case "interface":
                    return self._parse_interface()
                case _:
                    if not self._peek().is_op("{"):
                        raise self._error("expected '{' after struct")
                    self._skip_balanced()
                    return StructType()

        match token.text if token.kind is TokenKind.OP else None:
            case "*":
                self._advance()
                return StarExpr(elem=self._parse_type())
            case "[":
                self._advance()
                if self._peek().is_op("]"):
                    self._advance()
                    return ArrayType(elem=self._parse_type())
                self._pos -= 1
                length = " ".join(t.text for t in self._skip_balanced())
                return ArrayType(elem=self._parse_type(), length=length)
            case "<-":
                self._advance()
                if not self._peek().is_keyword("chan"):
                    raise self._error("expected 'chan' after '<-'")
                self._advance()
                return ChanType(elem=self._parse_type(), direction=ChanDir.RECV)
            case "...":
                self._advance()
                return Ellipsis(elem=self._parse_type())
            case "(":
                self._advance()
                inner = self._parse_type()
                self._expect_op(")")
                return inner

        raise self._error(f"expected type, found {_describe(token)}")

    def _parse_type_name(self) -> TypeExpr:
        """Parse Name, pkg.Name, and adjacent generic instantiation Name[T]."""
        first = self._advance()
        expr: TypeExpr = Ident(first.text)

        if self._peek().is_op(".") and self._peek(1).kind is TokenKind.IDENT:
            self._advance()
            expr = SelectorExpr(package=first.text, name=self._advance().text)

        bracket = self._peek()
        prev = self._prev()
        if bracket.is_op("[") and prev is not None and bracket.start == prev.end:
            self._advance()
            args = [self._parse_type()]
            while self._peek().is_op(","):
                self._advance()
                if self._peek().is_op("]"):
                    break
                args.append(self._parse_type())
            self._expect_op("]")
            expr = IndexExpr(base=expr, args=tuple(args))

        return expr

    def _parse_signature(self) -> FuncType:
        """Parse (params) results after the func keyword or method name."""
        params = self._parse_params()

        results: tuple[Field, ...] = ()
        if not self._on_new_line():
            token = self._peek()
            if token.is_op("("):
                results = self._parse_params()
            elif self._starts_type(token):
                results = (Field(names=(), type=self._parse_type(), line=token.line),)

        return FuncType(params=params, results=results)

    def _starts_type(self, token: Token) -> bool:
        if token.kind is TokenKind.IDENT:
            return True
        if token.kind is TokenKind.KEYWORD:
            return token.text in _TYPE_KEYWORDS
        return token.kind is TokenKind.OP and token.text in ("*", "[", "<-")

    def _parse_params(self) -> tuple[Field, ...]:
        """Parse a parenthesized parameter or result list.

        Go grouping: (a, b int, c string) names share the next type;
        a list either names every entry or none.
        """
        self._expect_op("(")

        entries: list[tuple[str | None, TypeExpr | None, int]] = []
        while not self._peek().is_op(")"):
            entries.append(self._parse_param_entry())
            if not self._peek().is_op(","):
                break
            self._advance()
        self._expect_op(")")

        if not any(name is not None and expr is not None for name, expr, _ in entries):
            # Unnamed list: bare identifiers are types
            return tuple(
                Field(names=(), type=expr if expr is not None else Ident(name or ""), line=line)
                for name, expr, line in entries
            )

        fields: list[Field] = []
        pending: list[str] = []
        for name, expr, line in entries:
            if expr is None and name is not None:
                pending.append(name)
            elif name is not None and expr is not None:
                fields.append(Field(names=(*pending, name), type=expr, line=line))
                pending.clear()
            else:
                raise ParseError(
                    path=str(self._path), reason="mixed named and unnamed parameters", line=line
                )
        if pending:
            raise self._error(f"missing type for parameter {pending[-1]!r}")

        return tuple(fields)

    def _parse_param_entry(self) -> tuple[str | None, TypeExpr | None, int]:
        """Parse one comma-separated entry.

        Returns:
            (name, None) for a bare identifier, (name, type) for a named
            entry, (None, type) for an unnamed non-identifier type.
        """
        token = self._peek()
        if token.kind is not TokenKind.IDENT:
            return None, self._parse_type(), token.line

        following = self._peek(1)
        if following.is_op(",") or following.is_op(")"):
            self._advance()
            return token.text, None, token.line
        if following.is_op(".") or (following.is_op("[") and following.start == token.end):
            return None, self._parse_type(), token.line

        self._advance()
        return token.text, self._parse_type(), token.line

    def _parse_interface(self) -> InterfaceType:
        self._expect_op("{")

        elements: list[Field] = []
        while not self._peek().is_op("}"):
            token = self._peek()
            if token.is_op(";"):
                self._advance()
                continue
            if token.kind is TokenKind.EOF:
                raise self._error("unclosed interface")

            if token.kind is TokenKind.IDENT and self._peek(1).is_op("("):
                self._advance()
                elements.append(
                    Field(names=(token.text,), type=self._parse_signature(), line=token.line)
                )
            else:
                elements.append(Field(names=(), type=self._parse_union(), line=token.line))

            self._end_of_element("}")

        self._advance()
        return InterfaceType(methods=tuple(elements))

    def _parse_union(self) -> TypeExpr:
        """Parse embedded element or type set ~A | B; keeps the first term."""
        if self._peek().is_op("~"):
            self._advance()
        first = self._parse_type()
        while self._peek().is_op("|"):
            self._advance()
            if self._peek().is_op("~"):
                self._advance()
            self._parse_type()
        return first


def _describe(token: Token) -> str:
    if token.kind is TokenKind.EOF:
        return "EOF"
    return repr(token.text)
