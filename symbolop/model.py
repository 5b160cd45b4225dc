"""Tokens, expression-tree nodes and the small constructors used to build them."""

from __future__ import annotations

import enum
from dataclasses import dataclass

COMMAND_SIZE = 200
DIFF_KEYWORD = "diff"
INTE_KEYWORD = "inte"


class TokenKind(enum.Enum):
    """What a token or tree node holds."""

    NUMBER = "number"
    OPERATOR = "operator"
    VARIABLE = "variable"


class ExpressionError(ValueError):
    """Raised when a command, expression or tree cannot be processed."""


@dataclass(frozen=True)
class Token:
    """One lexical item of an expression: a number, an operator or the variable."""

    kind: TokenKind
    op: str = ""
    num: float = 0.0
    var: str = ""

    def is_op(self, op: str) -> bool:
        """Return True if this token is the operator ``op``."""
        return self.kind is TokenKind.OPERATOR and self.op == op


@dataclass(eq=False)
class Node:
    """A node of a binary expression tree.

    ``pending_diff`` and ``pending_inte`` mark subtrees that still have to be
    differentiated or integrated.
    """

    kind: TokenKind
    op: str = ""
    num: float = 0.0
    var: str = ""
    left: Node | None = None
    right: Node | None = None
    pending_diff: bool = False
    pending_inte: bool = False

    def copy(self) -> Node:
        """Deep copy of the subtree; the pending marks are not copied."""
        if self.kind is TokenKind.NUMBER:
            clone = Node(TokenKind.NUMBER, num=self.num)
        elif self.kind is TokenKind.OPERATOR:
            clone = Node(TokenKind.OPERATOR, op=self.op)
        else:
            clone = Node(TokenKind.VARIABLE, var=self.var)
        clone.left = self.left.copy() if self.left is not None else None
        clone.right = self.right.copy() if self.right is not None else None
        return clone

    def is_numeric(self) -> bool:
        """True if the subtree holds only numbers and operators (no variable)."""
        if self.kind is TokenKind.VARIABLE:
            return False
        return all(child.is_numeric() for child in (self.left, self.right) if child is not None)

    def set_number(self, value: float) -> None:
        """Turn this node into a number leaf, dropping its children."""
        self.kind = TokenKind.NUMBER
        self.num = float(value)
        self.op = ""
        self.var = ""
        self.left = None
        self.right = None

    def become(self, other: Node) -> None:
        """Take over every field of ``other``, its children included."""
        self.kind = other.kind
        self.op = other.op
        self.num = other.num
        self.var = other.var
        self.left = other.left
        self.right = other.right
        self.pending_diff = other.pending_diff
        self.pending_inte = other.pending_inte


def op_level(op: str) -> int:
    """Precedence of an operator character; -1 for anything else."""
    if op in ("+", "-"):
        return 1
    if op in ("*", "/"):
        return 2
    if op == "~":
        return 3
    if op == "^":
        return 4
    return -1


def node_from_token(token: Token) -> Node:
    """A fresh leaf node holding what the token holds."""
    if token.kind is TokenKind.NUMBER:
        return Node(TokenKind.NUMBER, num=token.num)
    if token.kind is TokenKind.OPERATOR:
        return Node(TokenKind.OPERATOR, op=token.op)
    return Node(TokenKind.VARIABLE, var=token.var)


def number(value: float) -> Node:
    """A number leaf."""
    return Node(TokenKind.NUMBER, num=float(value))


def variable() -> Node:
    """The variable leaf ``x``."""
    return Node(TokenKind.VARIABLE, var="x")


def operator(op: str, left: Node | None = None, right: Node | None = None) -> Node:
    """An operator node with the given children."""
    return Node(TokenKind.OPERATOR, op=op, left=left, right=right)


def minus_one() -> Node:
    """The tree ``0 - 1``, the form a unary minus of one takes."""
    return operator("-", number(0), number(1))