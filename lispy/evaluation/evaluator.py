"""Core evaluator for the Lispy interpreter.

Reduces a Value tree against an Environment. Evaluation is total: every
failure comes back as an Error value, never as an exception.

`evaluate` takes ownership of the value it is given; S-expressions are reduced
in place. Callers that need the input afterwards should pass `value.copy()`.
"""

from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.errors import LispyUnboundSymbol
from lispy.types.value import Value, Error, Symbol, SExpr
from lispy.evaluation.apply import apply


def evaluate(value: Value, env: Environment) -> Value:
    """Evaluate a single value."""
    match value:
        case Symbol():
            try:
                return env.lookup(value.id)
            except LispyUnboundSymbol as exc:
                return Error(str(exc))
        case SExpr():
            return evaluate_sexpr(value, env)

    # --- Numbers, errors, functions and Q-expressions return as-is ---
    return value


def evaluate_sexpr(x: SExpr, env: Environment) -> Value:
    """Reduce an S-expression.

    Every element is evaluated exactly once, left to right, before any of them
    is inspected; the first Error among the results wins.
    """
    x.elements = [evaluate(e, env) for e in x.elements]

    for e in x.elements:
        if isinstance(e, Error):
            return e

    if len(x) == 0:
        return x
    if len(x) == 1:
        return x.elements[0]

    head, *args = x.elements
    return apply(head, SExpr(args), env)
