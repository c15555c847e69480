from __future__ import annotations

from lispy.reader.parser import NodeKind, SyntaxNode, TokenStream, lex, parse
from lispy.reader.reader import read
from lispy.types.value import QExpr


def read_source(source: str, filename: str = "<stdin>") -> QExpr:
    """Parse and read `source` into a Q-expression of its top-level forms.

    Raises LispySyntaxError if the text does not parse.
    """
    return read(parse(source, filename))


__all__ = ["NodeKind", "SyntaxNode", "TokenStream", "lex", "parse", "read", "read_source"]
