"""Recognising ``diff(...)`` and ``inte(...)`` commands and parsing their arguments."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from symbolop.display import format_marker
from symbolop.lexer import check_tokens, normalize_expression, postfix_to_tree, to_postfix, tokenize
from symbolop.model import COMMAND_SIZE, DIFF_KEYWORD, INTE_KEYWORD, ExpressionError, Node


class CommandType(enum.Enum):
    """The forms a command can take."""

    DIFF_CHAR = "diff(function)"
    DIFF_NUM = "diff(function, x)"
    INTE_CHAR = "inte(function)"
    INTE_NUM = "inte(function, left, right)"


@dataclass
class ParsedCommand:
    """The expression tree of a command and its numeric arguments, if any."""

    kind: CommandType
    tree: Node
    x: float | None = None
    right: float | None = None


_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:"
    r"(0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|((?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)"
    r"|(inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _fail(command: str, position: int, message: str) -> ExpressionError:
    return ExpressionError(format_marker(command, position, message))


def _read_float(text: str, position: int) -> tuple[float | None, int]:
    """Read a number the way the C library does; return (None, position) if none."""
    match = _FLOAT.match(text, position)
    if match is None:
        return None, position
    sign, hex_part, dec_part, word = match.groups()
    if hex_part is not None:
        value = float.fromhex(hex_part)
    elif dec_part is not None:
        value = float(dec_part)
    else:
        value = float(word)
    if sign == "-":
        value = -value
    return value, match.end()


def _char_at(text: str, position: int) -> str:
    return text[position] if 0 <= position < len(text) else ""


def _skip_spaces(text: str, position: int) -> int:
    while _char_at(text, position) == " ":
        position += 1
    return position


def classify_arguments(command: str, start: int) -> bool:
    """Check the argument list opening at index ``start``.

    Return True if numeric arguments follow the expression, False if the
    expression stands alone.  Raise ExpressionError on a malformed list.
    """
    if not command.endswith(")"):
        raise _fail(command, 0, "The string final character is not ')'")

    first = command.find(",", start)
    if first == -1:
        return False

    second = command.find(",", first + 1)
    if second == -1:
        if _char_at(command, first + 1) == ")":
            raise _fail(command, first, "The second argument error")
        return True

    if command.find(",", second + 1) != -1:
        raise _fail(command, first + 1, "Too many commas")
    if _char_at(command, second + 1) == ")":
        raise _fail(command, second, "The third argument error")
    return True


def classify_command(command: str) -> CommandType:
    """Tell which command form ``command`` is; raise ExpressionError if none."""
    if len(command) >= COMMAND_SIZE - 1:
        raise _fail(
            command,
            len(command),
            f"The string length has reached the maximum allowable length({COMMAND_SIZE - 1})",
        )

    bracket = command.find("(")
    if bracket == -1:
        raise _fail(command, 0, "Command format error")

    keyword = command[:bracket]
    if keyword == DIFF_KEYWORD:
        forms = (CommandType.DIFF_CHAR, CommandType.DIFF_NUM)
    elif keyword == INTE_KEYWORD:
        forms = (CommandType.INTE_CHAR, CommandType.INTE_NUM)
    else:
        raise _fail(keyword, 0, "Command error")

    numeric = classify_arguments(command, bracket)
    return forms[1] if numeric else forms[0]


def parse_math_argument(command: str, kind: CommandType) -> ParsedCommand:
    """Parse the expression and numeric arguments of a classified command.

    The expression is normalised, tokenised, reordered to postfix and built
    into a tree.  Raises ExpressionError at the first problem found.
    """
    bracket = command.find("(")
    if bracket == -1:
        raise _fail(command, 0, "Command format error")
    exp_start = bracket + 1
    if _char_at(command, exp_start) in (",", ")", ""):
        raise _fail(command, exp_start, "The expression is not exist")

    if kind in (CommandType.DIFF_CHAR, CommandType.INTE_CHAR):
        exp_end = len(command) - 1
        expression = command[exp_start:exp_end]
    else:
        exp_end = command.find(",", exp_start)
        if exp_end == -1:
            raise _fail(command, len(command), "Second argument error")
        expression = command[exp_start:exp_end]

    x: float | None = None
    right: float | None = None
    arg_start = _skip_spaces(command, exp_end + 1)

    if kind is CommandType.DIFF_NUM:
        x, arg_end = _read_float(command, arg_start)
        if x is None:
            raise _fail(command, arg_start, "Second argument error")
        if _char_at(command, arg_end) != ")":
            raise _fail(command, arg_end, "This character should be ')'")
    elif kind is CommandType.INTE_NUM:
        x, arg_end = _read_float(command, arg_start)
        if x is None:
            raise _fail(command, arg_start, "Second argument error")
        if _char_at(command, arg_end) != ",":
            raise _fail(command, arg_end, "Second argument error")
        third_start = _skip_spaces(command, arg_end + 1)
        right, third_end = _read_float(command, third_start)
        if right is None:
            raise _fail(command, third_start, "Third argument error")
        if _char_at(command, third_end) != ")":
            raise _fail(command, third_end, "This character should be ')'")

    normalized = normalize_expression(expression)
    tokens = tokenize(normalized)
    check_tokens(tokens)
    postfix = to_postfix(tokens)
    tree = postfix_to_tree(postfix)
    return ParsedCommand(kind=kind, tree=tree, x=x, right=right)