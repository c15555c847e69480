"""
  Lispy Lexer and Parser

- Streaming lexer over a single token regex
- Emits a syntax tree of tagged nodes, which lispy.reader.reader turns
  into values:

    - long     -> NodeKind.INTEGER
    - double   -> NodeKind.FLOAT
    - symbol   -> NodeKind.SYMBOL
    - "..."    -> NodeKind.STRING   (contents keep their quotes)
    - 'c'      -> NodeKind.CHAR     (contents keep their quotes)
    - ; ...    -> NodeKind.COMMENT
    - ( ... )  -> NodeKind.SEXPR
    - { ... }  -> NodeKind.QEXPR
    - input    -> NodeKind.TOP

Grammar:

    long    : -?[0-9]+
    double  : -?[0-9]+\\.[0-9]+
    symbol  : [a-zA-Z0-9_+\\-*/\\\\=<>!?&%|^]+
    string  : "(\\\\.|[^\\\\"])*"
    char    : '(\\\\.|[^\\\\'])'
    comment : ;[^\\r\\n]*
    sexpr   : '(' expr* ')'
    qexpr   : '{' expr* '}'

Atoms are lexed by maximal munch over the symbol alphabet and then
classified, so `12abc` is one symbol rather than a number followed by a
symbol.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from lispy.errors import LispySyntaxError


class NodeKind(Enum):
    INTEGER = "long"
    FLOAT = "double"
    SYMBOL = "symbol"
    STRING = "string"
    CHAR = "char"
    COMMENT = "comment"
    SEXPR = "sexpr"
    QEXPR = "qexpr"
    TOP = ">"


@dataclass
class SyntaxNode:
    kind: NodeKind
    contents: str = ""
    children: list[SyntaxNode] = field(default_factory=list)
    line: int = 1
    column: int = 1


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\r\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<char>'(?:\\.|[^\\'])')"  # character literals
    r"|(?P<atom>[a-zA-Z0-9_.+\-*/\\=<>!?&%|^]+)",  # numbers and symbols
    re.DOTALL,
)

LONG_RE = re.compile(r"-?[0-9]+")
DOUBLE_RE = re.compile(r"-?[0-9]+\.[0-9]+")

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}
DELIMS = {"lparen": "(", "rparen": ")", "lbrace": "{", "rbrace": "}"}

Token = tuple[str, str, int, int]


def _describe(source: str, pos: int) -> str:
    if source.startswith('"', pos):
        return "unterminated string literal"
    if source.startswith("'", pos):
        return "malformed character literal"
    return f"unexpected character {source[pos]!r}"


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, line, column) tuples."""
    pos = 0
    n = len(source)
    line = 1
    line_start = 0

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise LispySyntaxError(
                _describe(source, pos), filename, line, pos - line_start + 1
            )
        kind = m.lastgroup
        text = m.group(kind)
        if kind != "whitespace":
            if kind == "atom":
                if DOUBLE_RE.fullmatch(text):
                    kind = "double"
                elif LONG_RE.fullmatch(text):
                    kind = "long"
                else:
                    kind = "symbol"
            yield kind, text, line, pos - line_start + 1
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = m.end()


LEAF_KINDS = {
    "long": NodeKind.INTEGER,
    "double": NodeKind.FLOAT,
    "symbol": NodeKind.SYMBOL,
    "string": NodeKind.STRING,
    "char": NodeKind.CHAR,
    "comment": NodeKind.COMMENT,
}


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], filename: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.filename = filename
        self.buffer: list[Token] = []
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def error(self, message: str, tok: Optional[Token]) -> LispySyntaxError:
        if tok is None:
            tok = self.last
        line, column = (tok[2], tok[3]) if tok else (1, 1)
        return LispySyntaxError(message, self.filename, line, column)

    def parse_expr(self) -> Optional[SyntaxNode]:
        tok = self.advance()
        if tok is None:
            return None
        tok_type, tok_val, line, column = tok

        if tok_type in LEAF_KINDS:
            return SyntaxNode(LEAF_KINDS[tok_type], tok_val, line=line, column=column)

        if tok_type in CLOSERS:
            closer = CLOSERS[tok_type]
            kind = NodeKind.SEXPR if tok_type == "lparen" else NodeKind.QEXPR
            node = SyntaxNode(kind, tok_val, line=line, column=column)
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise self.error(f"unmatched '{tok_val}'", tok)
                if nxt[0] == closer:
                    self.advance()
                    return node
                if nxt[0] in ("rparen", "rbrace"):
                    raise self.error(
                        f"expected '{DELIMS[closer]}' but found '{nxt[1]}'", nxt
                    )
                node.children.append(self.parse_expr())

        raise self.error(f"unexpected '{tok_val}'", tok)

    def parse_all(self) -> Iterator[SyntaxNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, filename: str = "<stdin>") -> SyntaxNode:
    """Parse a whole input into a TOP node holding every top-level form."""
    stream = TokenStream(lex(source, filename), filename)
    return SyntaxNode(NodeKind.TOP, children=list(stream.parse_all()))
