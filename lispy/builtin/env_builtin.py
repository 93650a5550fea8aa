"""Built-in functions for the Lispy runtime environment.

This module defines the arithmetic and list-processing primitives, the BUILTINS
dispatch table keyed by stable names, and `register`, which binds every name in
an Environment to its Function value.

Each built-in receives (env, args) with `args` an already-evaluated SExpr it
owns, validates its own preconditions, and reports violations as Error values.
"""
from __future__ import annotations

import operator
from typing import Callable

from lispy import BuiltinFn
from lispy.types.environment import Environment
from lispy.types.value import (
    Value,
    Number,
    Error,
    Symbol,
    Function,
    SExpr,
    QExpr,
    fits_i64,
)


# -------------------------------
# Arithmetic
# -------------------------------
def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _fold(name: str, op: Callable[[int, int], int], args: SExpr) -> Value:
    """Left fold `op` over numeric arguments, starting from the first one."""
    if len(args) == 0:
        return Error(f"{name}: wrong number of arguments")
    for a in args:
        if not isinstance(a, Number):
            return Error("cannot operate on non-number")

    first, *rest = (a.value for a in args)
    result = first
    if name == "-" and not rest:
        result = -result
    for y in rest:
        if op is _trunc_div and y == 0:
            return Error("division by zero")
        result = op(result, y)
        if not fits_i64(result):
            return Error("integer overflow")
    if not fits_i64(result):
        return Error("integer overflow")
    return Number(result)


def add(env: Environment, args: SExpr) -> Value:
    """Sum of all arguments."""
    return _fold("+", operator.add, args)


def sub(env: Environment, args: SExpr) -> Value:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    return _fold("-", operator.sub, args)


def mul(env: Environment, args: SExpr) -> Value:
    """Product of all arguments."""
    return _fold("*", operator.mul, args)


def div(env: Environment, args: SExpr) -> Value:
    """Divide left-to-right, truncating toward zero; checks zero division."""
    return _fold("/", _trunc_div, args)


# -------------------------------
# List operations
# -------------------------------
def _single_qexpr(name: str, args: SExpr) -> Value:
    """Return the sole Q-expression argument, or the Error describing why not."""
    if len(args) != 1:
        return Error(f"{name}: wrong number of arguments")
    q = args.elements[0]
    if not isinstance(q, QExpr):
        return Error(f"{name}: incorrect type")
    return q


def list_builtin(env: Environment, args: SExpr) -> Value:
    """(list a b ...) => {a b ...}; the argument list itself becomes the result."""
    return args.retag(QExpr)


def head(env: Environment, args: SExpr) -> Value:
    """(head {a b ...}) => {a}"""
    q = _single_qexpr("head", args)
    if isinstance(q, Error):
        return q
    if len(q) == 0:
        return Error("head: empty list")
    del q.elements[1:]
    return q


def tail(env: Environment, args: SExpr) -> Value:
    """(tail {a b ...}) => {b ...}"""
    q = _single_qexpr("tail", args)
    if isinstance(q, Error):
        return q
    if len(q) == 0:
        return Error("tail: empty list")
    del q.elements[0]
    return q


def join(env: Environment, args: SExpr) -> Value:
    """(join {a} {b c} ...) => {a b c ...}"""
    for a in args:
        if not isinstance(a, QExpr):
            return Error("join: incorrect type")
    x = QExpr()
    for q in args:
        x.elements.extend(q.elements)
    return x


def len_builtin(env: Environment, args: SExpr) -> Value:
    """(len {a b c}) => 3"""
    q = _single_qexpr("len", args)
    if isinstance(q, Error):
        return q
    return Number(len(q))


def eval_builtin(env: Environment, args: SExpr) -> Value:
    """(eval {+ 1 2}) => 3; the quoted list is evaluated as an S-expression."""
    q = _single_qexpr("eval", args)
    if isinstance(q, Error):
        return q
    # Local import: the evaluator dispatches back into this table
    from lispy.evaluation.evaluator import evaluate
    return evaluate(q.retag(SExpr), env)


# -------------------------------
# Environment
# -------------------------------
def def_builtin(env: Environment, args: SExpr) -> Value:
    """(def {a b} 1 2) binds a=1, b=2 and returns ()."""
    if len(args) == 0:
        return Error("def: wrong number of arguments")
    names, *values = args.elements
    if not isinstance(names, QExpr):
        return Error("def: incorrect type")
    for name in names:
        if not isinstance(name, Symbol):
            return Error("def: incorrect type")
    if len(names) != len(values):
        return Error("def: wrong number of arguments")

    for name, value in zip(names, values):
        env.define(name.id, value)
    return SExpr()


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, BuiltinFn] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "join": join,
    "len": len_builtin,
    "eval": eval_builtin,
    "def": def_builtin,
}


def register(env: Environment) -> None:
    """Bind every built-in name in `env` to its Function value."""
    env.update({name: Function(name) for name in BUILTINS})
