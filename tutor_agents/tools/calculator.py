"""
Safe arithmetic evaluator for the Math agent's fast path.

Only numeric literals, + - * /, parentheses and whitespace are accepted.
The expression is parsed with `ast` and walked node by node; nothing is
ever passed to eval().
"""
from typing import Union
import ast
import math
import operator
import re

from ..errors import EvaluationError

Number = Union[int, float]

# Characters allowed anywhere in an expression
_ALLOWED = re.compile(r"^[\d\s+\-*/().]+$")
_HAS_DIGIT = re.compile(r"\d")
# A number, an operator and another number (or an opening parenthesis)
_EMBEDDED = re.compile(r"\d\s*[+\-*/]\s*[(\d]")

_BIN_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Integer results wider than this are refused rather than printed
_MAX_INT_BITS = 1024


def is_expression(text: str) -> bool:
    """True when *text* only uses characters of the arithmetic grammar."""
    stripped = text.strip()
    return bool(stripped) and bool(_ALLOWED.match(stripped)) and bool(_HAS_DIGIT.search(stripped))


def contains_expression(text: str) -> bool:
    """True when *text* has an arithmetic operation somewhere in it ("what is 2 + 2")."""
    return bool(_EMBEDDED.search(text))


def _eval(node: ast.AST) -> Number:
    if isinstance(node, ast.Expression):
        return _eval(node.body)
    if isinstance(node, ast.Constant):
        # bool is an int subclass; the grammar can't produce one but be exact
        if type(node.value) in (int, float):
            return node.value
        raise EvaluationError(f"Unsupported literal: {node.value!r}")
    if isinstance(node, ast.BinOp):
        op = _BIN_OPS.get(type(node.op))
        if op is None:
            raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
        left = _eval(node.left)
        right = _eval(node.right)
        try:
            return op(left, right)
        except ZeroDivisionError:
            raise EvaluationError("Division by zero")
        except OverflowError:
            raise EvaluationError("Result is too large")
    if isinstance(node, ast.UnaryOp):
        op = _UNARY_OPS.get(type(node.op))
        if op is None:
            raise EvaluationError(f"Unsupported operator: {type(node.op).__name__}")
        return op(_eval(node.operand))
    raise EvaluationError(f"Unsupported expression: {type(node).__name__}")


def evaluate(expression: str) -> Number:
    """
    Evaluate a restricted arithmetic expression.

    Args:
        expression: e.g. "2 + 3 * (4 - 1) / 2"

    Returns:
        The numeric result (int when every operand and step stays integral)

    Raises:
        EvaluationError: on any token outside the grammar, malformed input,
            division by zero or a non-finite result.
    """
    if not is_expression(expression):
        raise EvaluationError(f"Not an arithmetic expression: {expression!r}")

    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except (SyntaxError, ValueError, RecursionError, MemoryError) as e:
        raise EvaluationError(f"Could not parse expression: {e}")

    try:
        result = _eval(tree)
    except RecursionError:
        raise EvaluationError("Expression is nested too deeply")

    if isinstance(result, float) and not math.isfinite(result):
        raise EvaluationError("Result is not a finite number")
    if isinstance(result, int) and result.bit_length() > _MAX_INT_BITS:
        raise EvaluationError("Result is too large")
    return result


def format_number(value: Number) -> str:
    """Render a result for the user; integral floats drop the trailing .0"""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)
