"""Indefinite integration of simple polynomial expression trees."""

from __future__ import annotations

from symbolop.model import ExpressionError, Node, TokenKind, number, operator, variable

_TOO_COMPLEX = "The function is too complex!"


def _numeric(node: Node | None) -> bool:
    return node is None or node.is_numeric()


def check_integrable(root: Node | None) -> None:
    """Raise ExpressionError unless the tree is a sum of ``c*x^n`` terms.

    Rejected are products of two non-numeric factors, any division, and
    powers that are not the variable raised to a numeric exponent.
    """
    if root is None:
        return
    check_integrable(root.left)
    check_integrable(root.right)

    if root.kind is not TokenKind.OPERATOR:
        return
    if root.op == "*" and not _numeric(root.left) and not _numeric(root.right):
        raise ExpressionError(_TOO_COMPLEX)
    if root.op == "/":
        raise ExpressionError(_TOO_COMPLEX)
    if root.op == "^":
        base_is_variable = root.left is not None and root.left.kind is TokenKind.VARIABLE
        if not (base_is_variable and _numeric(root.right)):
            raise ExpressionError(_TOO_COMPLEX)


def _inte(root: Node | None) -> None:
    if root is None or not root.pending_inte:
        return

    if root.kind is TokenKind.NUMBER:
        root.pending_inte = False
        constant = root.num
        root.kind = TokenKind.OPERATOR
        root.op = "*"
        root.num = 0.0
        root.left = number(constant)
        root.right = variable()
    elif root.kind is TokenKind.VARIABLE:
        root.pending_inte = False
        root.kind = TokenKind.OPERATOR
        root.var = ""
        root.op = "/"
        root.left = operator("^", variable(), number(2))
        root.right = number(2)
    elif root.op in ("+", "-"):
        root.pending_inte = False
        root.left.pending_inte = True
        root.right.pending_inte = True
        _inte(root.left)
        _inte(root.right)
    elif root.op == "*":
        root.pending_inte = False
        left_numeric, right_numeric = _numeric(root.left), _numeric(root.right)
        if not left_numeric and right_numeric:
            root.left.pending_inte = True
            _inte(root.left)
        if left_numeric and not right_numeric:
            root.right.pending_inte = True
            _inte(root.right)
    elif root.op == "^":
        root.pending_inte = False
        if root.left.kind is TokenKind.VARIABLE and root.right.kind is TokenKind.NUMBER:
            raised = root.copy()
            raised.right.num += 1
            root.left = raised
            root.right = number(raised.right.num)
            root.op = "/"


def integrate(root: Node) -> None:
    """Replace the tree, in place, by an antiderivative with respect to x."""
    root.pending_inte = True
    _inte(root)