"""Application engine for Lispy.

Functions are values carrying only a built-in name; applying one means
looking that name up in the built-in table and calling the native operation
with the environment and the (already evaluated) argument list. Keeping this
in one place lets the evaluator and the `eval` built-in share it.
"""

from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.value import Value, Error, Function, SExpr
from lispy.builtin.env_builtin import BUILTINS


def apply(head: Value, args: SExpr, env: Environment) -> Value:
    """Apply `head` to `args`.

    - A Function is dispatched by name through BUILTINS.
    - A Function whose name has no native operation is an unknown function.
    - Anything else cannot be applied.
    """
    if not isinstance(head, Function):
        return Error("S-expression does not start with a function")
    builtin = BUILTINS.get(head.name)
    if builtin is None:
        return Error(f"unknown function: {head.name}")
    return builtin(env, args)
