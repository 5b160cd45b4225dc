"""Text rendering of menus, tokens, error markers and expression trees."""

from __future__ import annotations

import math
from collections.abc import Sequence

from symbolop.model import Node, Token, TokenKind, op_level


def table(length: int, left: str, middle: str, right: str) -> str:
    """A horizontal rule ``length`` characters wide."""
    return left + middle * max(length - 2, 0) + right


def main_menu() -> str:
    """The main menu text."""
    rule = table(40, "+", "-", "+")
    lines = [
        rule,
        "  1.diff(function)",
        "  2.diff(function, num)",
        "  5.Enter to quit",
        "  ---",
        rule,
    ]
    return "\n".join(lines) + "\n"


def format_tokens(tokens: Sequence[Token]) -> str:
    """Render tokens back to a compact string."""
    parts = []
    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            parts.append(f"{token.num:f}")
        elif token.kind is TokenKind.OPERATOR:
            parts.append(token.op)
        else:
            parts.append(token.var)
    return "".join(parts)


def _marker_block(shown: str, width: int, position: int, message: str | None) -> str:
    rule = table(width + 2, "=", "=", "=")
    marker = "~" * max(position, 0) + "^" + "~" * max(width - 1 - position, 0)
    return f"{message or ''}\n{rule}\n {shown}\n {marker}\n{rule}\n"


def format_marker(text: str, position: int, message: str | None = None) -> str:
    """Show ``text`` with a caret under the character at ``position``."""
    return _marker_block(text, len(text), position, message)


def format_token_marker(tokens: Sequence[Token], position: int, message: str | None = None) -> str:
    """Show the tokens with a caret at the token index ``position``."""
    return _marker_block(format_tokens(tokens), len(tokens), position, message)


def format_tree(root: Node | None, depth: int = 1) -> str:
    """Sideways drawing of a tree: right subtree above, left below."""
    if root is None:
        return ""
    indent = "\t" * depth
    if root.kind is TokenKind.NUMBER:
        line = f"{indent}{depth}|({root.num:.2f})\n"
    elif root.kind is TokenKind.VARIABLE:
        line = f"{indent}{depth}|({root.var})\n"
    else:
        line = f"{indent}{depth}|[{root.op}]\n"
    return format_tree(root.right, depth + 1) + line + format_tree(root.left, depth + 1)


def _format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return f"{value:.4f}"


def tree_to_infix(root: Node | None, parent_level: int = -1) -> str:
    """Infix text of a tree, with brackets where precedence needs them."""
    if root is None:
        return ""
    level = op_level(root.op) if root.kind is TokenKind.OPERATOR else -1
    bracket = level != -1 and level <= parent_level

    if root.kind is TokenKind.OPERATOR:
        if root.op == "*":
            middle = ""
        elif root.op in ("^", "/"):
            middle = root.op
        else:
            middle = f" {root.op} "
    elif root.kind is TokenKind.NUMBER:
        middle = _format_number(root.num)
    else:
        middle = "x"

    text = tree_to_infix(root.left, level) + middle + tree_to_infix(root.right, level)
    return f"({text})" if bracket else text