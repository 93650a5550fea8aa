"""Translate a generic parse tree into a Lispy Value tree.

No evaluation happens here. Any object exposing `tag`, `contents` and
`children` can be read; the parser in lispy.reader.parser produces one.
"""

from __future__ import annotations

import re
from typing import Protocol, Sequence

from lispy.types.value import Value, Number, Error, Symbol, Expr, SExpr, QExpr, fits_i64

NUMBER_RE = re.compile(r"-?[0-9]+")
DELIMITERS = frozenset({"(", ")", "{", "}"})


class Node(Protocol):
    tag: str
    contents: str
    children: Sequence["Node"]


def read_number(node: Node) -> Value:
    if not NUMBER_RE.fullmatch(node.contents):
        return Error("invalid number")
    n = int(node.contents)
    if not fits_i64(n):
        return Error("invalid number")
    return Number(n)


def _is_structural(node: Node) -> bool:
    """Delimiter tokens and whitespace/regex artifacts carry no value."""
    return node.contents in DELIMITERS or node.tag == "regex"


def _read_node(node: Node) -> Value:
    """Read one node; lists come back empty, to be filled by `read`."""
    tag = node.tag
    if "number" in tag:
        return read_number(node)
    if "symbol" in tag:
        return Symbol(node.contents)
    if tag == "root" or "sexpr" in tag:
        return SExpr()
    if "qexpr" in tag:
        return QExpr()
    return Error("unknown node")


def read(node: Node) -> Value:
    """Read a parse-tree node into a Value.

    Lists are filled from an explicit stack rather than by recursion, so any
    depth the parser accepts can be read.
    """
    value = _read_node(node)
    stack: list[tuple[Node, Value]] = [(node, value)]
    while stack:
        parent, x = stack.pop()
        if not isinstance(x, Expr):
            continue
        for child in parent.children:
            if _is_structural(child):
                continue
            child_value = _read_node(child)
            x.append(child_value)
            stack.append((child, child_value))
    return value
