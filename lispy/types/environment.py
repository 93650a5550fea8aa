"""Runtime environment for Lispy.

The Environment maps symbol names to values. It holds a single global scope:
bindings are stored as independent copies, so a binding outlives the
expression that produced it and later mutation of either side is invisible to
the other.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator

from lispy.types.errors import LispyInvalidSymbol, LispyUnboundSymbol
from lispy.types.value import Value


class Environment:
    """Mapping from symbol names to Lispy values."""

    __slots__ = ("vars",)

    def __init__(self):
        self.vars: dict[str, Value] = {}

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to a copy of `value`, overwriting any existing binding.

        Raises LispyInvalidSymbol if `name` is not a string.
        """
        if not isinstance(name, str):
            raise LispyInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value.copy()

    def lookup(self, name: str) -> Value:
        """Return a copy of the value bound to `name`.

        Raises LispyUnboundSymbol if not found.
        """
        try:
            value = self.vars[name]
        except KeyError:
            raise LispyUnboundSymbol(name) from None
        return value.copy()

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
