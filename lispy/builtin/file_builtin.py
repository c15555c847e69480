"""File builtins: fopen, fclose, getc, putc, fgets, fseek, ftell, rewind.

Files are always opened in binary mode so that positions are byte offsets
and `fseek` can seek relative to the current position or the end, as C
stdio does. Characters are read as single bytes (latin-1); `putc` and
`fgets` encode and decode text as UTF-8. Operating-system failures come back
as Error values.
"""

from __future__ import annotations

import io
import logging

from lispy.builtin.checks import check_count, check_type
from lispy.types.environment import Environment
from lispy.types.value import OK, Char, Error, File, Long, String, Value

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

WHENCE = {0: io.SEEK_SET, 1: io.SEEK_CUR, 2: io.SEEK_END}


def _binary_mode(mode: str) -> str:
    return mode if "b" in mode else mode + "b"


def builtin_fopen(env: Environment, args: list[Value]) -> Value:
    """(fopen "name" "mode") opens a file using a C-style mode string."""
    if err := check_count("fopen", args, 2):
        return err
    if err := check_type("fopen", args, 0, String):
        return err
    if err := check_type("fopen", args, 1, String):
        return err

    filename, mode = args[0].value, args[1].value
    try:
        handle = open(filename, _binary_mode(mode))
    except (OSError, ValueError) as ex:
        logger.debug("fopen %s (%s) failed: %s", filename, mode, ex)
        return Error(f"Unable to open file '{filename}' with mode '{mode}'.")
    logger.debug("Opened %s with mode %s", filename, mode)
    return File(handle, filename, mode)


def builtin_fclose(env: Environment, args: list[Value]) -> Value:
    if err := check_count("fclose", args, 1):
        return err
    if err := check_type("fclose", args, 0, File):
        return err

    f = args[0]
    try:
        f.handle.close()
    except OSError:
        return Error("Failed to close file.")
    logger.debug("Closed %s", f.filename)
    return OK


def builtin_getc(env: Environment, args: list[Value]) -> Value:
    """Read one character; reaching end of file is an Error."""
    if err := check_count("getc", args, 1):
        return err
    if err := check_type("getc", args, 0, File):
        return err

    try:
        c = args[0].handle.read(1)
    except (OSError, ValueError):
        return Error("Unable to read character from file.")
    if not c:
        return Error("File closed or reached end of file.")
    return Char(c.decode("latin-1"))


def builtin_putc(env: Environment, args: list[Value]) -> Value:
    if err := check_count("putc", args, 2):
        return err
    if err := check_type("putc", args, 0, File):
        return err
    if err := check_type("putc", args, 1, Char):
        return err

    try:
        args[0].handle.write(args[1].value.encode(ENCODING))
    except (OSError, ValueError):
        return Error("Unable to write character to file.")
    return OK


def builtin_fgets(env: Environment, args: list[Value]) -> Value:
    """(fgets f n) reads at most n-1 bytes, stopping after a newline."""
    if err := check_count("fgets", args, 2):
        return err
    if err := check_type("fgets", args, 0, File):
        return err
    if err := check_type("fgets", args, 1, Long):
        return err

    size = args[1].value
    if size < 1:
        return Error(
            "Unexpected value at argument #2 to 'fgets'. "
            f"Got {size}; expected a positive buffer size."
        )
    if size == 1:
        return String("")

    try:
        line = args[0].handle.readline(size - 1)
    except (OSError, ValueError):
        line = b""
    if not line:
        return Error("Already at the end of the file, or some error occurred.")
    return String(line.decode(ENCODING, errors="replace"))


def builtin_fseek(env: Environment, args: list[Value]) -> Value:
    """(fseek f offset whence), whence 0/1/2 = from start/current/end."""
    if err := check_count("fseek", args, 3):
        return err
    if err := check_type("fseek", args, 0, File):
        return err
    if err := check_type("fseek", args, 1, Long):
        return err
    if err := check_type("fseek", args, 2, Long):
        return err

    offset, from_where = args[1].value, args[2].value
    if from_where not in WHENCE:
        return Error(
            "Unexpected value at argument #3 to 'fseek'. "
            f"Got {from_where}; expected 0 (from beginning), "
            "1 (from current position), or 2 (from end)."
        )
    try:
        args[0].handle.seek(offset, WHENCE[from_where])
    except (OSError, ValueError):
        return Error("Unable to seek in file.")
    return OK


def builtin_ftell(env: Environment, args: list[Value]) -> Value:
    if err := check_count("ftell", args, 1):
        return err
    if err := check_type("ftell", args, 0, File):
        return err

    try:
        return Long(args[0].handle.tell())
    except (OSError, ValueError):
        return Error("Unable to determine file position.")


def builtin_rewind(env: Environment, args: list[Value]) -> Value:
    if err := check_count("rewind", args, 1):
        return err
    if err := check_type("rewind", args, 0, File):
        return err

    try:
        args[0].handle.seek(0)
    except (OSError, ValueError):
        return Error("Unable to read file.")
    return OK


BUILTINS = {
    "fopen": builtin_fopen,
    "fclose": builtin_fclose,
    "getc": builtin_getc,
    "putc": builtin_putc,
    "fgets": builtin_fgets,
    "fseek": builtin_fseek,
    "ftell": builtin_ftell,
    "rewind": builtin_rewind,
}
