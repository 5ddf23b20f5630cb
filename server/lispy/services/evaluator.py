from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from functools import cached_property
from typing import Callable

from langchain_core.tools import tool

from lispy.core.config import get_settings
from lispy.core.exceptions import LispyParseError, MalformedTreeError
from lispy.models.evaluation import EvaluationResult
from lispy.models.tree import NUMBER_PATTERN, Application, Node, NumberLeaf, to_sexpr
from lispy.models.value import (
    LONG_MAX,
    LONG_MIN,
    Error,
    ErrorKind,
    Number,
    ResultValue,
    make_error,
    make_number,
)
from lispy.services.reader import parse

logger = logging.getLogger("lispy.evaluator")


def _truncating_div(dividend: int, divisor: int) -> int:
    # Python's // floors; native integer division truncates toward zero.
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


_LONG_DIGITS = len(str(LONG_MAX))

_BINARY_OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_div,
}


def apply_op(x: ResultValue, op: str, y: ResultValue) -> ResultValue:
    """Combine two evaluated operands under ``op``.

    An error on the left wins over anything on the right, and an error on the
    right wins over the operator itself.
    """
    if isinstance(x, Error):
        return x
    if isinstance(y, Error):
        return y
    if not (isinstance(x, Number) and isinstance(y, Number)):
        raise TypeError(f"Cannot apply {op!r} to {x!r} and {y!r}")

    operator_fn = _BINARY_OPERATORS.get(op)
    if operator_fn is None:
        return make_error(ErrorKind.INVALID_OPERATOR)
    if op == "/" and y.value == 0:
        return make_error(ErrorKind.DIVISION_BY_ZERO)
    return make_number(operator_fn(x.value, y.value))


def _read_number(literal: str) -> ResultValue:
    if not NUMBER_PATTERN.fullmatch(literal):
        return make_error(ErrorKind.INVALID_NUMBER)
    digits = literal.lstrip("-").lstrip("0") or "0"
    # Anything longer than LONG_MAX is out of range; int() never sees oversized strings.
    if len(digits) > _LONG_DIGITS:
        return make_error(ErrorKind.INVALID_NUMBER)
    value = -int(digits) if literal.startswith("-") else int(digits)
    if not LONG_MIN <= value <= LONG_MAX:
        return make_error(ErrorKind.INVALID_NUMBER)
    return make_number(value)


def evaluate(node: Node) -> ResultValue:
    if isinstance(node, NumberLeaf):
        return _read_number(node.literal)

    if isinstance(node, Application):
        if not node.operands:
            raise MalformedTreeError(
                "Operator application has no operands.",
                details={"operator": node.operator},
            )
        result = evaluate(node.operands[0])
        for operand in node.operands[1:]:
            result = apply_op(result, node.operator, evaluate(operand))
        return result

    raise MalformedTreeError(f"Unsupported tree node: {type(node).__name__}")


@dataclass
class EvaluatorService:
    max_expression_length: int = 200

    @classmethod
    def from_settings(cls) -> "EvaluatorService":
        return cls(max_expression_length=get_settings().max_expression_length)

    def evaluate(self, expression: str) -> EvaluationResult:
        cleaned = expression.strip()
        if not cleaned:
            raise LispyParseError("Expression cannot be empty.")

        if len(cleaned) > self.max_expression_length:
            raise LispyParseError(f"Expression exceeds {self.max_expression_length} characters.")

        tree = parse(cleaned)
        result = evaluate(tree)

        if isinstance(result, Error):
            logger.info("evaluation.error", extra={"tree": to_sexpr(tree), "error_kind": result.kind.value})
        else:
            logger.debug("evaluation.ok", extra={"tree": to_sexpr(tree)})

        return EvaluationResult.from_value(expression, result)

    @cached_property
    def langchain_tool(self):
        service = self

        @tool("lispy", return_direct=True)
        def _lispy(expression: str) -> str:
            """Evaluate a prefix arithmetic expression such as '+ 1 (* 2 3)' and return the printed result."""
            return service.evaluate(expression).output

        return _lispy
