from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

# Literal shape of a numeric leaf.
NUMBER_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class NumberLeaf:
    literal: str


@dataclass(frozen=True)
class Application:
    operator: str
    operands: tuple["Node", ...]


Node = Union[NumberLeaf, Application]


def to_sexpr(node: Node) -> str:
    """Canonical fully parenthesized text of ``node``, used in logs."""
    if isinstance(node, NumberLeaf):
        return node.literal
    inner = " ".join(to_sexpr(operand) for operand in node.operands)
    return f"({node.operator} {inner})"
