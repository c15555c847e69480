"""Runtime values for Lispy.

Every value belongs to a closed set of variants. Each variant knows its
user-facing type name (used in error messages), how to copy itself, how it
compares for equality, and how it prints. Containers (SExpr, QExpr) own
their elements; copying them copies the whole tree. Immutable leaves copy
to themselves, since sharing them is unobservable.
"""

from __future__ import annotations

from io import StringIO
from typing import BinaryIO, ClassVar, Iterable, Iterator

import numpy as np

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1

# Escape tables shared by the printer (escape) and the reader (unescape).
ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\0": "\\0",
}

UNESCAPES: dict[str, str] = {v[1]: k for k, v in ESCAPES.items()}
UNESCAPES["?"] = "?"


def escape(text: str) -> str:
    return "".join(ESCAPES.get(c, c) for c in text)


def unescape(text: str) -> str:
    with StringIO() as buffer:
        i = 0
        n = len(text)
        while i < n:
            c = text[i]
            if c == "\\" and i + 1 < n and text[i + 1] in UNESCAPES:
                buffer.write(UNESCAPES[text[i + 1]])
                i += 2
                continue
            buffer.write(c)
            i += 1
        return buffer.getvalue()


def wrap_long(n: int) -> int:
    """Reduce an arbitrary Python int to signed 64-bit two's complement."""
    return ((n - LONG_MIN) % 2 ** 64) + LONG_MIN


def format_double(x: float) -> str:
    # Shortest positional digits that read back to the same float.
    return np.format_float_positional(x, unique=True, trim="0")


class Value:
    """Base class of all Lispy runtime values."""

    __slots__ = ()

    type_name: ClassVar[str] = "Unknown"

    def copy(self) -> Value:
        return self

    def __eq__(self, other: object) -> bool:
        return self is other


class Error(Value):
    """An error travelling through evaluation as an ordinary value."""

    __slots__ = ("message",)
    type_name = "Error"

    def __init__(self, message: str):
        self.message = message

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __str__(self) -> str:
        return f"Error: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


class Number(Value):
    """Common base of Long and Double; compares numerically across both."""

    __slots__ = ("value",)

    value: int | float

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value


class Long(Number):
    __slots__ = ()
    type_name = "Long"

    def __init__(self, value: int):
        self.value: int = wrap_long(int(value))

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Long({self.value})"


class Double(Number):
    __slots__ = ()
    type_name = "Double"

    def __init__(self, value: float):
        self.value: float = float(value)

    def __str__(self) -> str:
        return format_double(self.value)

    def __repr__(self) -> str:
        return f"Double({self.value!r})"


class Bool(Value):
    __slots__ = ("value",)
    type_name = "Boolean"

    def __init__(self, value: bool):
        self.value = bool(value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Bool) and self.value == other.value

    def __bool__(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def __repr__(self) -> str:
        return f"Bool({self.value})"


class Ok(Value):
    """Marks a successful operation with no meaningful result."""

    __slots__ = ()
    type_name = "OK"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok)

    def __str__(self) -> str:
        return "ok"

    def __repr__(self) -> str:
        return "OK"


OK = Ok()


class String(Value):
    __slots__ = ("value",)
    type_name = "String"

    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.value == other.value

    def __str__(self) -> str:
        return f'"{escape(self.value)}"'

    def __repr__(self) -> str:
        return f"String({self.value!r})"


class Char(Value):
    """A single character. Held as a string so multi-codepoint graphemes fit."""

    __slots__ = ("value",)
    type_name = "Character"

    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Char) and self.value == other.value

    def __str__(self) -> str:
        if self.value == '"':
            return "'\"'"
        if self.value == "?":
            return "'\\?'"
        return f"'{escape(self.value)}'"

    def __repr__(self) -> str:
        return f"Char({self.value!r})"


class Expr(Value):
    """Ordered, owned sequence of values. Base of SExpr and QExpr."""

    __slots__ = ("cells",)

    open_delim: ClassVar[str] = ""
    close_delim: ClassVar[str] = ""

    def __init__(self, cells: Iterable[Value] = ()):
        self.cells: list[Value] = list(cells)

    def copy(self) -> Expr:
        return type(self)(c.copy() for c in self.cells)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        if len(self.cells) != len(other.cells):
            return False
        return all(x == y for x, y in zip(self.cells, other.cells))

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i):
        return self.cells[i]

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_delim)
            buffer.write(" ".join(str(c) for c in self.cells))
            buffer.write(self.close_delim)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cells!r})"


class SExpr(Expr):
    """A list the evaluator reduces: head is the callee, the rest its arguments."""

    __slots__ = ()
    type_name = "S-expression"
    open_delim = "("
    close_delim = ")"

    def as_qexpr(self) -> QExpr:
        return QExpr(self.cells)


class QExpr(Expr):
    """A quoted list; never evaluated automatically."""

    __slots__ = ()
    type_name = "Q-expression"
    open_delim = "{"
    close_delim = "}"

    def as_sexpr(self) -> SExpr:
        return SExpr(self.cells)


class File(Value):
    """An open file. Copies share the underlying handle."""

    __slots__ = ("handle", "filename", "mode")
    type_name = "File"

    def __init__(self, handle: BinaryIO | None, filename: str, mode: str):
        self.handle = handle
        self.filename = filename
        self.mode = mode

    def copy(self) -> File:
        return File(self.handle, self.filename, self.mode)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, File) and self.filename == other.filename

    def __str__(self) -> str:
        return f"<File[{self.mode}]: {self.filename}>"

    def __repr__(self) -> str:
        return f"File({self.filename!r}, {self.mode!r})"
