from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# Literals are limited to the range of a native signed 64-bit long.
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1


class ErrorKind(str, Enum):
    DIVISION_BY_ZERO = "DivisionByZero"
    INVALID_OPERATOR = "InvalidOperator"
    INVALID_NUMBER = "InvalidNumber"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DIVISION_BY_ZERO: "Error: Division by Zero!",
    ErrorKind.INVALID_OPERATOR: "Error: Invalid Operator!",
    ErrorKind.INVALID_NUMBER: "Error: Invalid Number!",
}


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Error:
    kind: ErrorKind


ResultValue = Union[Number, Error]


def make_number(value: int) -> Number:
    return Number(value)


def make_error(kind: ErrorKind) -> Error:
    return Error(kind)


def render(result: ResultValue) -> str:
    """Text shown to the user for ``result``; callers add the line terminator."""
    if isinstance(result, Number):
        return str(result.value)
    if isinstance(result, Error):
        return ERROR_MESSAGES[result.kind]
    raise TypeError(f"Not a result value: {result!r}")
