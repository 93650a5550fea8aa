"""
  Grammar-driven parser for Lispy source text.

- Built on Lark (LALR); the grammar lives in GRAMMAR below
- Emits a generic tree of ParseNode(tag, contents, children), the shape the
  reader consumes:

    - whole program          -> tag "root"
    - ( ... )                -> tag "sexpr"
    - { ... }                -> tag "qexpr"
    - -?[0-9]+               -> tag "number", contents = literal text
    - symbol characters      -> tag "symbol", contents = literal text
    - ( ) { } delimiters     -> tag "char", kept in the tree as leaves

  The parser only checks syntax; meaning is assigned by lispy.reader.reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from lispy.types.errors import LispySyntaxError


GRAMMAR = r"""
    root: expr*

    ?expr: NUMBER
         | SYMBOL
         | sexpr
         | qexpr

    sexpr: LPAREN expr* RPAREN
    qexpr: LBRACE expr* RBRACE

    // Numbers take priority: "-5" is a number, "-" alone is a symbol.
    NUMBER.2: /-?[0-9]+/
    SYMBOL: /[a-zA-Z0-9_+\-*\/\\=<>!&]+/

    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"

    %import common.WS
    %ignore WS
"""

_parser = Lark(GRAMMAR, start="root", parser="lalr")

TOKEN_TAGS: dict[str, str] = {
    "NUMBER": "number",
    "SYMBOL": "symbol",
    "LPAREN": "char",
    "RPAREN": "char",
    "LBRACE": "char",
    "RBRACE": "char",
}


@dataclass
class ParseNode:
    """A generic parse-tree node: a tag, leaf text, and ordered children."""

    tag: str
    contents: str = ""
    children: list[ParseNode] = field(default_factory=list)

    def pretty(self, indent: str = "  ") -> str:
        """Indented multi-line dump of the tree, one node per line."""
        with StringIO() as buffer:
            stack: list[tuple[ParseNode, int]] = [(self, 0)]
            while stack:
                node, depth = stack.pop()
                buffer.write(indent * depth)
                buffer.write(node.tag)
                if node.contents:
                    buffer.write(f" '{node.contents}'")
                buffer.write("\n")
                stack.extend((child, depth + 1) for child in reversed(node.children))
            return buffer.getvalue()


def _convert_one(node: Tree | Token) -> ParseNode:
    if isinstance(node, Token):
        return ParseNode(TOKEN_TAGS.get(node.type, node.type.lower()), str(node))
    return ParseNode(str(node.data))


def _convert(tree: Tree) -> ParseNode:
    """Convert a Lark tree to ParseNodes with an explicit stack, so nesting depth is unbounded."""
    root = _convert_one(tree)
    stack: list[tuple[Tree | Token, ParseNode]] = [(tree, root)]
    while stack:
        node, converted = stack.pop()
        if isinstance(node, Token):
            continue
        for child in node.children:
            child_converted = _convert_one(child)
            converted.children.append(child_converted)
            stack.append((child, child_converted))
    return root


def parse(source: str, filename: str = "<stdin>") -> ParseNode:
    """Parse `source` into a ParseNode tree rooted at a "root" node.

    Raises LispySyntaxError when the text does not match the grammar.
    """
    try:
        tree = _parser.parse(source)
    except UnexpectedCharacters as exc:
        raise LispySyntaxError(
            f"{filename}:{exc.line}:{exc.column}: unexpected character {exc.char!r}",
            exc.line,
            exc.column,
        ) from exc
    except UnexpectedToken as exc:
        if exc.token.type == "$END":
            found = "end of input"
        else:
            found = repr(str(exc.token))
        raise LispySyntaxError(
            f"{filename}:{exc.line}:{exc.column}: unexpected {found}",
            exc.line,
            exc.column,
        ) from exc
    except UnexpectedEOF as exc:
        raise LispySyntaxError(f"{filename}: unexpected end of input") from exc
    return _convert(tree)
