import pytest

from symbolop.command import (
    CommandType,
    ParsedCommand,
    classify_arguments,
    classify_command,
    parse_math_argument,
)
from symbolop.differentiate import differentiate, substitute_x
from symbolop.model import ExpressionError, TokenKind
from symbolop.simplify import fold_numbers


@pytest.mark.parametrize(
    "command, expected",
    [
        ("diff(x^2)", CommandType.DIFF_CHAR),
        ("diff(x^2, 3)", CommandType.DIFF_NUM),
        ("inte(x)", CommandType.INTE_CHAR),
        ("inte(x, 0, 1)", CommandType.INTE_NUM),
        ("diff(x, 1, 2)", CommandType.DIFF_NUM),
    ],
)
def test_classify_command(command, expected):
    assert classify_command(command) is expected


@pytest.mark.parametrize(
    "command",
    [
        "foo(x)",
        "diffx",
        "diff(x",
        "diff(x,)",
        "diff(x,1,)",
        "diff(x,1,2,3)",
        "diff(" + "x+" * 100 + "x)",
    ],
)
def test_classify_command_rejects(command):
    with pytest.raises(ExpressionError):
        classify_command(command)


def test_classify_arguments_modes():
    assert classify_arguments("diff(x)", 4) is False
    assert classify_arguments("diff(x, 2)", 4) is True
    assert classify_arguments("inte(x, 1, 2)", 4) is True


def test_classify_arguments_error_message():
    with pytest.raises(ExpressionError, match="Too many commas"):
        classify_arguments("inte(x,1,2,3)", 4)


def test_parse_diff_num_arguments():
    parsed = parse_math_argument("diff(x^2, 3)", CommandType.DIFF_NUM)
    assert isinstance(parsed, ParsedCommand)
    assert parsed.kind is CommandType.DIFF_NUM
    assert parsed.x == 3.0
    assert parsed.right is None
    assert parsed.tree.op == "^"
    assert parsed.tree.left.kind is TokenKind.VARIABLE
    assert parsed.tree.right.num == 2.0


def test_parse_inte_num_arguments():
    parsed = parse_math_argument("inte(x, -1.5, 4)", CommandType.INTE_NUM)
    assert parsed.x == -1.5
    assert parsed.right == 4.0
    assert parsed.tree.kind is TokenKind.VARIABLE


def test_parse_char_form_has_no_numbers():
    parsed = parse_math_argument("diff(x*2)", CommandType.DIFF_CHAR)
    assert parsed.x is None and parsed.right is None
    assert parsed.tree.op == "*"
    assert parsed.tree.left.kind is TokenKind.VARIABLE
    assert parsed.tree.right.num == 2.0


def test_parse_unary_minus_becomes_subtraction_from_zero():
    parsed = parse_math_argument("diff(-x)", CommandType.DIFF_CHAR)
    assert parsed.tree.op == "-"
    assert parsed.tree.left.num == 0.0
    assert parsed.tree.right.kind is TokenKind.VARIABLE


@pytest.mark.parametrize(
    "command, kind",
    [
        ("diff()", CommandType.DIFF_CHAR),
        ("diff(,2)", CommandType.DIFF_NUM),
        ("diff(x, a)", CommandType.DIFF_NUM),
        ("diff(x, 3 )", CommandType.DIFF_NUM),
        ("inte(x, 0 1)", CommandType.INTE_NUM),
        ("inte(x, 0, )", CommandType.INTE_NUM),
        ("inte(x, 0, 1 )", CommandType.INTE_NUM),
        ("diff(x^-2)", CommandType.DIFF_CHAR),
        ("diff(x+)", CommandType.DIFF_CHAR),
        ("diff( , 2)", CommandType.DIFF_NUM),
    ],
)
def test_parse_rejects(command, kind):
    with pytest.raises(ExpressionError):
        parse_math_argument(command, kind)


def test_classify_then_parse_then_evaluate_derivative():
    command = "diff(x^2, 3)"
    parsed = parse_math_argument(command, classify_command(command))
    differentiate(parsed.tree)
    substitute_x(parsed.tree, parsed.x)
    fold_numbers(parsed.tree, True)
    assert parsed.tree.kind is TokenKind.NUMBER
    assert parsed.tree.num == pytest.approx(6.0)