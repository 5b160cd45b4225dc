import math

import pytest

from symbolop.differentiate import substitute_x
from symbolop.lexer import (
    check_tokens,
    check_tree,
    normalize_expression,
    postfix_to_tree,
    to_postfix,
    tokenize,
)
from symbolop.model import ExpressionError, Token, TokenKind
from symbolop.simplify import fold_numbers


def _parse(text):
    normalized = normalize_expression(text)
    tokens = tokenize(normalized)
    check_tokens(tokens)
    root = postfix_to_tree(to_postfix(tokens))
    check_tree(root)
    return root


def _evaluate(text, x=0.0):
    root = _parse(text)
    substitute_x(root, x)
    fold_numbers(root, True)
    assert root.kind is TokenKind.NUMBER
    return root.num


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2+3*4", 2 + 3 * 4),
        ("(1+2)*3", (1 + 2) * 3),
        ("10-4-3", 10 - 4 - 3),
        ("8/4/2", 8 / 4 / 2),
        ("2^3^2", 2 ** 3 ** 2),
        ("-2^2", -(2 ** 2)),
        ("2*-3", 2 * -3),
        ("2^(-1)", 2 ** -1),
        ("5--3", 5 - -3),
        ("5-+-3", 5 + 3),
        ("+4*2", 4 * 2),
        ("1.5 * 4", 1.5 * 4),
    ],
)
def test_pipeline_evaluates_like_python(text, expected):
    assert math.isclose(_evaluate(text), expected)


def test_pipeline_with_variable():
    assert math.isclose(_evaluate("x^2+3*x-1", x=2.0), 2.0 ** 2 + 3 * 2.0 - 1)


def test_normalize_unary_minus_at_start():
    assert normalize_expression("-x") == "~x"


def test_normalize_unary_minus_after_times():
    assert normalize_expression("2*-x") == "2*~x"


def test_normalize_keeps_length():
    text = "x---+--2*3"
    assert len(normalize_expression(text)) == len(text)


def test_normalize_collapses_sign_runs_to_one_sign():
    result = normalize_expression("x--+-2")
    assert result.replace(" ", "") == "x-2"


def test_normalize_even_minus_count_gives_plus():
    result = normalize_expression("x----2")
    assert result.replace(" ", "") == "x+2"


@pytest.mark.parametrize(
    "text, message",
    [
        ("(x", "bracket stack should be empty"),
        ("x)", "Error"),
        ("x-", "Illegal end"),
        ("*x", "Times error"),
        ("/x", "Divisiion error"),
        ("x+a", "Illegal characters"),
        ("x^", "Should be not an operator"),
        ("x.", "Should be not an operator"),
    ],
)
def test_normalize_errors(text, message):
    with pytest.raises(ExpressionError, match=message):
        normalize_expression(text)


def test_normalize_empty_raises():
    with pytest.raises(ExpressionError):
        normalize_expression("")


def test_tokenize_kinds_and_values():
    tokens = tokenize("x+12.5")
    assert [t.kind for t in tokens] == [TokenKind.VARIABLE, TokenKind.OPERATOR, TokenKind.NUMBER]
    assert tokens[1].op == "+"
    assert tokens[2].num == 12.5


def test_tokenize_skips_spaces():
    assert tokenize("  x  ") == tokenize("x")


def test_tokenize_leading_point():
    assert tokenize(".5")[0].num == 0.5


@pytest.mark.parametrize("text", ["1.2.3", ".", "x+."])
def test_tokenize_point_error(text):
    with pytest.raises(ExpressionError, match="Point error"):
        tokenize(text)


def test_tokenize_too_long():
    with pytest.raises(ExpressionError, match="too long"):
        tokenize("x+" * 100 + "x")


def test_check_tokens_rejects_minus_after_power():
    tokens = tokenize(normalize_expression("x^-2"))
    with pytest.raises(ExpressionError, match="correct format"):
        check_tokens(tokens)


def test_check_tokens_accepts_bracketed_negative_exponent():
    tokens = tokenize(normalize_expression("x^(-2)"))
    check_tokens(tokens)
    assert tokens[2].is_op("(")


def test_to_postfix_precedence_order():
    postfix = to_postfix(tokenize("1+2*3"))
    assert [t.num for t in postfix if t.kind is TokenKind.NUMBER] == [1.0, 2.0, 3.0]
    assert [t.op for t in postfix if t.kind is TokenKind.OPERATOR] == ["*", "+"]


def test_to_postfix_unbalanced_raises():
    with pytest.raises(ExpressionError):
        to_postfix(tokenize("(x"))


def test_postfix_to_tree_unary_minus():
    root = postfix_to_tree(to_postfix(tokenize("~x")))
    assert root.op == "-"
    assert root.left.kind is TokenKind.NUMBER and root.left.num == 0
    assert root.right.kind is TokenKind.VARIABLE


def test_postfix_to_tree_first_operator_raises():
    with pytest.raises(ExpressionError, match="first character"):
        postfix_to_tree([Token(TokenKind.OPERATOR, op="+")])


def test_postfix_to_tree_empty_raises():
    with pytest.raises(ExpressionError):
        postfix_to_tree([])


def test_postfix_to_tree_two_operands_raises():
    operands = [Token(TokenKind.NUMBER, num=1.0), Token(TokenKind.VARIABLE, var="x")]
    with pytest.raises(ExpressionError, match="more than one"):
        postfix_to_tree(operands)


def test_postfix_to_tree_missing_operand_raises():
    postfix = [Token(TokenKind.NUMBER, num=1.0), Token(TokenKind.OPERATOR, op="*")]
    with pytest.raises(ExpressionError, match="Stack empty"):
        postfix_to_tree(postfix)


@pytest.mark.parametrize("text", ["x/0", "x/(2-2)", "x/(4/2)"])
def test_check_tree_zero_divisor(text):
    root = postfix_to_tree(to_postfix(tokenize(normalize_expression(text))))
    with pytest.raises(ExpressionError, match="Cannot 0"):
        check_tree(root)


def test_check_tree_variable_exponent():
    root = postfix_to_tree(to_postfix(tokenize("x^x")))
    with pytest.raises(ExpressionError, match="too complex"):
        check_tree(root)


def test_check_tree_folds_numeric_divisor():
    root = postfix_to_tree(to_postfix(tokenize("x/(1+1)")))
    check_tree(root)
    assert root.right.kind is TokenKind.NUMBER
    assert root.right.num == 2.0