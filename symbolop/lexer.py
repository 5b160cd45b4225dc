"""Turning expression text into tokens, postfix order and an expression tree."""

from __future__ import annotations

import re
from collections.abc import Sequence

from symbolop.display import format_marker, format_token_marker
from symbolop.model import (
    COMMAND_SIZE,
    ExpressionError,
    Node,
    Token,
    TokenKind,
    node_from_token,
    number,
    op_level,
)
from symbolop.simplify import fold_numbers

_MAX_TOKENS = COMMAND_SIZE - 4
_OPERATOR_CHARS = "+-*/^~()"
_LEGAL_CHARS = "1234567890 x()+-/^*~."
_OPERAND_END_CHARS = "1234567890x)"
_UNARY_CONTEXT = "/*^("
_BAD_FINAL_CHARS = "+-*/^(."
_NUMBER = re.compile(r"0[xX](?:\d+\.?\d*|\.\d+)|\d+\.?\d*|\.\d+")


def _fail(chars: Sequence[str], position: int, message: str) -> ExpressionError:
    return ExpressionError(format_marker("".join(chars), position, message))


def _left_is(chars: Sequence[str], position: int, allowed: str) -> bool:
    """True if the last non-space character before ``position`` is in ``allowed``."""
    for ch in reversed(chars[:position]):
        if ch != " ":
            return ch in allowed
    return False


def _check_brackets(chars: list[str]) -> None:
    depth = 0
    for position, ch in enumerate(chars):
        if ch == "(":
            if depth >= COMMAND_SIZE:
                raise _fail(chars, position, "Error")
            depth += 1
        elif ch == ")":
            if depth == 0:
                raise _fail(chars, position, "Error")
            depth -= 1
    if depth:
        raise _fail(chars, 0, "The bracket stack should be empty")


def _collapse_signs(chars: list[str]) -> None:
    """Replace every run of + and - by one sign, padding the run with spaces."""
    start: int | None = None
    last_is_sign = False
    for position, ch in enumerate(chars):
        if ch == " ":
            continue
        is_sign = ch in "+-"
        if start is None:
            if is_sign:
                start = position
        elif not is_sign:
            end = position - 1
            minus_count = chars[start : end + 1].count("-")
            chars[start:end] = [" "] * (end - start)
            chars[end] = "-" if minus_count % 2 else "+"
            start = None
        last_is_sign = is_sign
    if last_is_sign:
        raise _fail(chars, start if start is not None else 0, "Illegal end")


def _mark_unary(chars: list[str]) -> None:
    if chars[0] == "-":
        chars[0] = "~"
    if chars[0] == "+":
        chars[0] = " "
    for sign, replacement in (("-", "~"), ("+", " ")):
        positions = [pos for pos, ch in enumerate(chars) if ch == sign]
        for pos in positions:
            if _left_is(chars, pos, _UNARY_CONTEXT):
                chars[pos] = replacement


def normalize_expression(exp: str) -> str:
    """Check an infix expression and return it in normalised form.

    Runs of signs are collapsed, a unary minus becomes ``~`` and a unary plus
    a space.  Raises ExpressionError on unbalanced brackets, a trailing sign,
    a ``*`` or ``/`` without a left operand, an illegal character or an
    operator at the very end.
    """
    if not exp:
        raise ExpressionError("The expression is empty")
    chars = list(exp)
    _check_brackets(chars)
    _collapse_signs(chars)
    _mark_unary(chars)

    for op, message in (("/", "Divisiion error"), ("*", "Times error")):
        for pos, ch in enumerate(chars):
            if ch == op and not _left_is(chars, pos, _OPERAND_END_CHARS):
                raise _fail(chars, pos, message)

    for pos, ch in enumerate(chars):
        if ch not in _LEGAL_CHARS:
            raise _fail(chars, pos, "Illegal characters")

    if chars[-1] in _BAD_FINAL_CHARS:
        raise _fail(chars, len(chars) - 1, "Should be not an operator")

    return "".join(chars)


def _parse_number(text: str) -> float:
    if text[:2] in ("0x", "0X"):
        return float.fromhex(text)
    return float(text)


def tokenize(exp: str) -> list[Token]:
    """Split a normalised expression into tokens; spaces are skipped."""
    tokens: list[Token] = []
    position = 0
    while position < len(exp):
        if len(tokens) > _MAX_TOKENS:
            raise _fail(exp, position, "Expression is too long")
        ch = exp[position]
        if ch == "x":
            tokens.append(Token(TokenKind.VARIABLE, var=ch))
        elif ch in _OPERATOR_CHARS:
            tokens.append(Token(TokenKind.OPERATOR, op=ch))
        elif ch.isdigit() or ch == ".":
            match = _NUMBER.match(exp, position)
            end = match.end() if match else position
            if end < len(exp) and exp[end] == ".":
                raise _fail(exp, end, "Point error")
            tokens.append(Token(TokenKind.NUMBER, num=_parse_number(exp[position:end])))
            position = end
            continue
        position += 1
    if len(tokens) > _MAX_TOKENS:
        raise ExpressionError("Expression is too long")
    return tokens


def check_tokens(tokens: Sequence[Token]) -> None:
    """Reject a unary minus straight after ``^``; it must be written ``^(-...)``."""
    for index, (token, following) in enumerate(zip(tokens, tokens[1:])):
        if token.is_op("^") and following.is_op("~"):
            raise ExpressionError(
                format_token_marker(
                    tokens,
                    index + 1,
                    "'-' is'n allowed directly after the '^, the correct format is: ^(-)",
                )
            )


def to_postfix(tokens: Sequence[Token]) -> list[Token]:
    """Reorder infix tokens into postfix order.

    ``^`` and ``~`` are right associative, the other operators left
    associative.  Raises ExpressionError if a bracket is left unmatched.
    """
    stack: list[Token] = []
    postfix: list[Token] = []
    for token in tokens:
        if token.kind is not TokenKind.OPERATOR:
            postfix.append(token)
            continue
        if not stack or token.op == "(":
            stack.append(token)
            continue
        if token.op == ")":
            while stack:
                top = stack.pop()
                if top.op == "(":
                    break
                postfix.append(top)
            continue

        level = op_level(token.op)
        if level == -1:
            continue
        top = stack[-1]
        top_level = op_level(top.op)
        if top_level < level or (top_level == level and top.op in ("^", "~")):
            stack.append(token)
            continue
        postfix.append(stack.pop())
        while stack and stack[-1].op != "(" and op_level(stack[-1].op) >= level:
            postfix.append(stack.pop())
        stack.append(token)

    while stack:
        top = stack.pop()
        if top.op in ("(", ")"):
            raise ExpressionError("Unbalanced brackets in the expression")
        postfix.append(top)
    return postfix


def postfix_to_tree(postfix: Sequence[Token]) -> Node:
    """Build an expression tree from postfix tokens; ``~a`` becomes ``0 - a``."""
    if postfix and postfix[0].kind is TokenKind.OPERATOR:
        raise ExpressionError(
            format_token_marker(postfix, 0, "The first character should not be an operator")
        )

    stack: list[Node] = []
    for index, token in enumerate(postfix):
        node = node_from_token(token)
        if node.kind is not TokenKind.OPERATOR:
            stack.append(node)
            continue
        needed = 1 if token.op == "~" else 2
        if len(stack) < needed:
            raise ExpressionError(format_token_marker(postfix, index, "Stack empty"))
        if token.op == "~":
            node.op = "-"
            node.left = number(0)
            node.right = stack.pop()
        else:
            node.right = stack.pop()
            node.left = stack.pop()
        stack.append(node)

    if len(stack) > 1:
        raise ExpressionError(
            format_token_marker(postfix, 0, "The nodeStack has more than one element")
        )
    if not stack:
        raise ExpressionError("The expression tree is empty")
    return stack[0]


def check_tree(root: Node | None) -> None:
    """Reject division by zero and powers with a non-numeric exponent.

    A numeric divisor is folded in place before it is checked; one that
    still holds a division afterwards counts as zero.
    """
    if root is None:
        return
    check_tree(root.left)
    check_tree(root.right)

    if root.kind is not TokenKind.OPERATOR:
        return
    divisor = root.right
    if root.op == "/" and divisor is not None and divisor.is_numeric():
        fold_numbers(divisor, False)
        if divisor.kind is not TokenKind.NUMBER or divisor.num == 0:
            raise ExpressionError("Cannot 0 after '/'")
    if root.op == "^" and divisor is not None and not divisor.is_numeric():
        raise ExpressionError("The function is too complex")