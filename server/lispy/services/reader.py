from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

from lispy.core.exceptions import LispyParseError
from lispy.models.tree import NUMBER_PATTERN, Application, Node, NumberLeaf

_TOKEN_PATTERN = re.compile(r"\(|\)|[^\s()]+")
MAX_NESTING_DEPTH = 100


class TokenKind(str, Enum):
    LPAREN = "("
    RPAREN = ")"
    ATOM = "atom"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    column: int


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    for match in _TOKEN_PATTERN.finditer(text):
        lexeme = match.group()
        if lexeme == "(":
            kind = TokenKind.LPAREN
        elif lexeme == ")":
            kind = TokenKind.RPAREN
        else:
            kind = TokenKind.ATOM
        tokens.append(Token(kind=kind, text=lexeme, column=match.start() + 1))
    return tokens


def parse(text: str, *, filename: str = "<stdin>") -> Node:
    """Parse one line into a tree.

    Grammar accepted::

        number   : /-?[0-9]+/ ;
        expr     : <atom> | '(' <operator> <expr>+ ')' ;
        lispy    : <operator> <expr>+ | '(' <operator> <expr>+ ')' ;

    Any non-number atom is accepted as an operator and any atom as an operand,
    so unknown operators and malformed numbers come back from the evaluator
    as error values rather than as parse errors.
    """
    tokens = tokenize(text)
    if not tokens:
        raise LispyParseError(f"{filename}:1:1: error: expected operator", details={"column": 1})
    return _Parser(tokens, end_column=len(text) + 1, filename=filename).parse_line()


class _Parser:
    def __init__(self, tokens: list[Token], *, end_column: int, filename: str) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0
        self._end_column = end_column
        self._filename = filename

    def parse_line(self) -> Application:
        first = self._tokens[0]
        if first.kind is TokenKind.LPAREN and self._closing_index(0) in (None, len(self._tokens) - 1):
            self._pos = 1
            node = self._parse_application(closed=True)
        else:
            node = self._parse_application(closed=False)
        if self._peek() is not None:
            self._fail("expected end of input")
        return node

    def _parse_application(self, *, closed: bool) -> Application:
        token = self._peek()
        if token is None or token.kind is not TokenKind.ATOM or NUMBER_PATTERN.fullmatch(token.text):
            self._fail("expected operator")
        self._pos += 1

        operands: list[Node] = []
        while (current := self._peek()) is not None and current.kind is not TokenKind.RPAREN:
            operands.append(self._parse_expr())
        if not operands:
            self._fail("expected expression")

        if closed:
            if self._peek() is None:
                self._fail("expected ')'")
            self._pos += 1
        return Application(operator=token.text, operands=tuple(operands))

    def _parse_expr(self) -> Node:
        token = self._tokens[self._pos]
        if token.kind is TokenKind.ATOM:
            self._pos += 1
            return NumberLeaf(literal=token.text)
        # Only '(' reaches here; ')' ends the operand run in the caller.
        if self._depth >= MAX_NESTING_DEPTH:
            self._fail("nesting too deep")
        self._pos += 1
        self._depth += 1
        node = self._parse_application(closed=True)
        self._depth -= 1
        return node

    def _closing_index(self, start: int) -> int | None:
        depth = 0
        for index in range(start, len(self._tokens)):
            kind = self._tokens[index].kind
            if kind is TokenKind.LPAREN:
                depth += 1
            elif kind is TokenKind.RPAREN:
                depth -= 1
                if depth == 0:
                    return index
        return None

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _fail(self, message: str) -> NoReturn:
        token = self._peek()
        column = token.column if token is not None else self._end_column
        raise LispyParseError(
            f"{self._filename}:1:{column}: error: {message}",
            details={"column": column},
        )
