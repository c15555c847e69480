"""Turn parser syntax nodes into Lispy values.

The reader depends only on the node-kind vocabulary and child order of
lispy.reader.parser.SyntaxNode. Numeric literals that do not fit their type
read as Error values rather than raising, so a bad literal surfaces through
ordinary evaluation like any other error.
"""

from __future__ import annotations

import math

from lispy.reader.parser import NodeKind, SyntaxNode
from lispy.types.symbol import Symbol
from lispy.types.value import (
    LONG_MAX,
    LONG_MIN,
    OK,
    Bool,
    Char,
    Double,
    Error,
    Expr,
    Long,
    QExpr,
    SExpr,
    String,
    Value,
    unescape,
)

# Symbols the reader resolves to literal values
LITERAL_SYMBOLS: dict[str, Value] = {
    "ok": OK,
    "true": Bool(True),
    "false": Bool(False),
}


def read_long(text: str) -> Value:
    x = int(text, 10)
    if x < LONG_MIN or x > LONG_MAX:
        return Error("invalid long")
    return Long(x)


def read_double(text: str) -> Value:
    x = float(text)
    # Overflow to infinity, or a non-zero literal underflowing to zero
    if math.isinf(x) or (x == 0.0 and text.strip("-0.") != ""):
        return Error("invalid double")
    return Double(x)


def read_symbol(text: str) -> Value:
    literal = LITERAL_SYMBOLS.get(text)
    if literal is not None:
        return literal.copy()
    return Symbol(text)


def read_quoted(text: str) -> str:
    """Strip the surrounding quote delimiters and unescape the rest."""
    return unescape(text[1:-1])


def read_children(node: SyntaxNode, into: Expr) -> Expr:
    for child in node.children:
        if child.kind is NodeKind.COMMENT:
            continue
        into.cells.append(read(child))
    return into


def read(node: SyntaxNode) -> Value:
    match node.kind:
        case NodeKind.INTEGER:
            return read_long(node.contents)
        case NodeKind.FLOAT:
            return read_double(node.contents)
        case NodeKind.SYMBOL:
            return read_symbol(node.contents)
        case NodeKind.STRING:
            return String(read_quoted(node.contents))
        case NodeKind.CHAR:
            return Char(read_quoted(node.contents))
        case NodeKind.SEXPR:
            return read_children(node, SExpr())
        case NodeKind.QEXPR | NodeKind.TOP:
            return read_children(node, QExpr())
        case NodeKind.COMMENT:
            raise ValueError("Comment nodes have no value")
    raise ValueError(f"Unknown syntax node kind: {node.kind}")
