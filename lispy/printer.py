"""Textual rendering of Lispy values.

The output of `render` uses the reader's own notation, so numbers, symbols and
nested lists read back as structurally identical values. Rendering walks the
tree with an explicit stack, so arbitrarily deep values render without
recursion.
"""

from __future__ import annotations

from lispy.types.value import Value, Number, Error, Symbol, Function, SExpr, QExpr

FUNCTION_PLACEHOLDER = "<function>"

DELIMITERS: dict[type, tuple[str, str]] = {
    SExpr: ("(", ")"),
    QExpr: ("{", "}"),
}


def _render_atom(value: Value) -> str:
    match value:
        case Number():
            return str(value.value)
        case Error():
            return f"Error: {value.message}"
        case Symbol():
            return value.id
        case Function():
            return FUNCTION_PLACEHOLDER
    raise TypeError(f"Cannot render {value!r}")


def render(value: Value) -> str:
    """Render `value` as text. Total over every Value variant."""
    parts: list[str] = []
    # Pending work: Values still to render, or literal text to emit
    stack: list[Value | str] = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        delimiters = DELIMITERS.get(type(item))
        if delimiters is None:
            parts.append(_render_atom(item))
            continue
        open_, close = delimiters
        parts.append(open_)
        stack.append(close)
        for i, element in enumerate(reversed(item.elements)):
            if i:
                stack.append(" ")
            stack.append(element)
    return "".join(parts)
