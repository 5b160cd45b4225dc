"""Algebraic simplification of expression trees, carried out in place."""

from __future__ import annotations

import math
from collections.abc import Callable

from symbolop.model import Node, TokenKind


def _is_number(node: Node | None, value: float | None = None) -> bool:
    if node is None or node.kind is not TokenKind.NUMBER:
        return False
    return value is None or node.num == value


def _is_operator(node: Node, op: str) -> bool:
    return node.kind is TokenKind.OPERATOR and node.op == op


def _is_odd_integer(value: float) -> bool:
    return float(value).is_integer() and value % 2 == 1


def _divide(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or nan instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _power(base: float, exponent: float) -> float:
    """Floating-point power that yields inf or nan instead of raising."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


_ARITHMETIC: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "^": _power,
}


def fold_numbers(root: Node | None, divide: bool = False) -> None:
    """Evaluate operators whose operands are both numbers.

    Division is folded only when ``divide`` is true.  Products with a zero
    factor and quotients with a zero numerator collapse to zero.
    """
    if root is None:
        return
    fold_numbers(root.left, divide)
    fold_numbers(root.right, divide)

    if root.kind is TokenKind.OPERATOR and _is_number(root.left) and _is_number(root.right):
        left, right = root.left.num, root.right.num
        if root.op in _ARITHMETIC:
            root.set_number(_ARITHMETIC[root.op](left, right))
        elif root.op == "/" and divide:
            root.set_number(_divide(left, right))

    if _is_operator(root, "*") and (_is_number(root.left, 0) or _is_number(root.right, 0)):
        root.set_number(0)

    if _is_operator(root, "/") and _is_number(root.left, 0):
        root.set_number(0)


def simplify_times_one(root: Node | None) -> None:
    """Rewrite ``1*a`` and ``a*1`` as ``a``."""
    if root is None:
        return
    simplify_times_one(root.left)
    simplify_times_one(root.right)

    if _is_operator(root, "*"):
        if _is_number(root.left, 1):
            root.become(root.right)
        elif _is_number(root.right, 1):
            root.become(root.left)


def simplify_div_one(root: Node | None) -> None:
    """Rewrite ``a/1`` as ``a``."""
    if root is None:
        return
    simplify_div_one(root.left)
    simplify_div_one(root.right)

    if _is_operator(root, "/") and _is_number(root.right, 1):
        root.become(root.left)


def simplify_pow_one(root: Node | None) -> None:
    """Rewrite ``a^1`` as ``a``, folding a numeric exponent first."""
    if root is None:
        return
    simplify_pow_one(root.left)
    simplify_pow_one(root.right)

    if _is_operator(root, "^") and root.right is not None and root.right.is_numeric():
        fold_numbers(root.right, False)
        if _is_number(root.right, 1):
            root.become(root.left)


def simplify_pow_zero(root: Node | None) -> None:
    """Rewrite ``a^0`` as ``1``, folding a numeric exponent first."""
    if root is None:
        return
    simplify_pow_zero(root.left)
    simplify_pow_zero(root.right)

    if _is_operator(root, "^") and root.right is not None and root.right.is_numeric():
        fold_numbers(root.right, False)
        if _is_number(root.right, 0):
            root.set_number(1)


def simplify_add_zero(root: Node | None) -> None:
    """Rewrite ``0+a`` and ``a+0`` as ``a``."""
    if root is None:
        return
    simplify_add_zero(root.left)
    simplify_add_zero(root.right)

    if _is_operator(root, "+"):
        if _is_number(root.left, 0):
            root.become(root.right)
        elif _is_number(root.right, 0):
            root.become(root.left)


def simplify_sub_zero(root: Node | None) -> None:
    """Rewrite ``a-0`` as ``a``, folding a numeric subtrahend first."""
    if root is None:
        return
    simplify_sub_zero(root.left)
    simplify_sub_zero(root.right)

    if _is_operator(root, "-") and root.right is not None and root.right.is_numeric():
        fold_numbers(root.right, False)
        if _is_number(root.right, 0):
            root.become(root.left)