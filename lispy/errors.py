class LispyError(Exception):
    """ Base class for host-level Lispy errors (never raised by builtins)"""
    pass

class LispySyntaxError(LispyError):
    """ Raised when source text cannot be parsed"""

    def __init__(self, message: str, filename: str = "<stdin>", line: int = 1, column: int = 1):
        super().__init__(f"{filename}:{line}:{column}: error: {message}")
        self.filename = filename
        self.line = line
        self.column = column
        self.reason = message
