"""Symbolic differentiation of expression trees with respect to x."""

from __future__ import annotations

from collections.abc import Callable

from symbolop.model import Node, TokenKind, minus_one, number, operator


def _diff_add_sub(root: Node) -> None:
    root.pending_diff = False
    root.left.pending_diff = True
    root.right.pending_diff = True


def _diff_times(root: Node) -> None:
    """(a*b)' = a'*b + a*b'."""
    root.pending_diff = False
    left_copy, right_copy = root.copy(), root.copy()
    root.op = "+"
    root.left = left_copy
    root.right = right_copy
    left_copy.left.pending_diff = True
    right_copy.right.pending_diff = True


def _diff_div(root: Node) -> None:
    """(a/b)' = a'*b^(-1) + a*((-1)*b^(-1-1))*b'."""
    a, b = root.left, root.right
    a_copy, b_copy1, b_copy2 = a.copy(), b.copy(), b.copy()
    a.pending_diff = True
    b_copy1.pending_diff = True

    root.pending_diff = False
    root.op = "+"
    root.left = operator("*", a, operator("^", b, minus_one()))
    square_inverse = operator("^", b_copy2, operator("-", minus_one(), number(1)))
    root.right = operator(
        "*",
        a_copy,
        operator("*", operator("*", minus_one(), square_inverse), b_copy1),
    )


def _diff_pow(root: Node) -> None:
    """(a^b)' = b*a^(b-1)*a' for a numeric exponent b."""
    a, b = root.left, root.right
    a_copy, b_copy = a.copy(), b.copy()
    a_copy.pending_diff = True

    root.pending_diff = False
    root.op = "*"
    root.left = operator("*", b, operator("^", a, operator("-", b_copy, number(1))))
    root.right = a_copy


_RULES: dict[str, Callable[[Node], None]] = {
    "+": _diff_add_sub,
    "-": _diff_add_sub,
    "*": _diff_times,
    "/": _diff_div,
    "^": _diff_pow,
}


def _diff(root: Node | None) -> None:
    if root is None:
        return
    if root.pending_diff:
        if root.kind is TokenKind.OPERATOR:
            if root.is_numeric():
                root.set_number(0)
            else:
                rule = _RULES.get(root.op)
                if rule is not None:
                    rule(root)
        elif root.kind is TokenKind.NUMBER:
            root.num = 0.0
        else:
            root.set_number(1)
        root.pending_diff = False
    _diff(root.left)
    _diff(root.right)


def differentiate(root: Node) -> None:
    """Replace the tree, in place, by its derivative with respect to x."""
    root.pending_diff = True
    _diff(root)


def substitute_x(root: Node | None, x: float) -> None:
    """Replace every occurrence of the variable by the number ``x``."""
    if root is None:
        return
    substitute_x(root.left, x)
    substitute_x(root.right, x)
    if root.kind is TokenKind.VARIABLE:
        root.set_number(x)