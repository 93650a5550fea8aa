"""Runtime values for Lispy.

Every datum the reader produces and the evaluator consumes is one of the
closed set of variants below. Lists own their elements exclusively: a Value
tree never shares a subtree and never contains a cycle, so `copy()` is a plain
structural deep copy.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


def fits_i64(n: int) -> bool:
    return I64_MIN <= n <= I64_MAX


class Value:
    """Base of the Value variant; not instantiated directly."""

    __slots__ = ()

    def copy(self) -> Value:
        raise NotImplementedError

    def __str__(self) -> str:
        # Local import: the printer depends on the concrete classes below
        from lispy.printer import render
        return render(self)


class Number(Value):
    __slots__ = ("value",)

    def __init__(self, value: int):
        self.value = value

    def copy(self) -> Number:
        return Number(self.value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Error(Value):
    __slots__ = ("message",)

    def __init__(self, message: str):
        self.message = message

    def copy(self) -> Error:
        return Error(self.message)

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)

    def __repr__(self):
        return f"Error({self.message!r})"


class Symbol(Value):
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.id)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"


class Function(Value):
    """A native built-in, identified by its stable name.

    The callable itself lives in the built-in table; keeping only the name here
    makes functions copyable and comparable like any other atom.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def copy(self) -> Function:
        return Function(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Function) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Function({self.name!r})"


class Expr(Value):
    """Shared behaviour of the two list variants."""

    __slots__ = ("elements",)

    def __init__(self, elements: Iterable[Value] | None = None):
        self.elements: list[Value] = list(elements) if elements is not None else []

    def append(self, value: Value) -> None:
        self.elements.append(value)

    def copy(self):
        return type(self)(e.copy() for e in self.elements)

    def retag(self, cls: type[Expr]) -> Expr:
        """Return a `cls` list sharing this list's elements (no copy)."""
        x = cls()
        x.elements = self.elements
        return x

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.elements == other.elements

    __hash__ = None

    def __repr__(self):
        inner = ", ".join(repr(e) for e in self.elements)
        return f"{type(self).__name__}([{inner}])"


class SExpr(Expr):
    """An expression list, reduced by the evaluator."""

    __slots__ = ()


class QExpr(Expr):
    """A quoted list; never evaluated implicitly."""

    __slots__ = ()
