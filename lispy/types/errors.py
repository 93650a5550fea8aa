from __future__ import annotations


class LispyError(Exception):
    """ Base class for all Lispy host-level errors"""
    pass

class LispyInvalidSymbol(LispyError):
    """ Raised when a non-string name is bound in an environment"""
    pass

class LispyUnboundSymbol(LispyError):
    """ Raised when a symbol is looked up before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"unbound symbol: {name}")
        self.name = name

class LispySyntaxError(LispyError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column
