from lispy.types.value import (
    Value,
    Number,
    Error,
    Symbol,
    Function,
    Expr,
    SExpr,
    QExpr,
)
from lispy.types.environment import Environment

__all__ = [
    "Value",
    "Number",
    "Error",
    "Symbol",
    "Function",
    "Expr",
    "SExpr",
    "QExpr",
    "Environment",
]
