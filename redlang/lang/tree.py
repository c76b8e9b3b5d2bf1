"""Syntax tree for the red language. Every node carries the (line, start, end) span of the source it was parsed
from, so runtime failures can point at the exact substring responsible.

Trees are built bottom-up by the parser and never shared or mutated afterwards.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Node:
    line: int
    start: int
    end: int


@dataclass(frozen=True)
class Identifier(Node):
    name: str


# number expressions

@dataclass(frozen=True)
class NumberLiteral(Node):
    value: int


@dataclass(frozen=True)
class NumberReference(Node):
    name: str


@dataclass(frozen=True)
class BinaryNumber(Node):
    """left <op> right, where op is one of "+", "-", "*", "/"."""
    op: str
    left: "NumberExpression"
    right: "NumberExpression"


NumberExpression = Union[NumberLiteral, NumberReference, BinaryNumber]


# text expressions

@dataclass(frozen=True)
class TextLiteral(Node):
    value: str

    @property
    def is_reference(self):
        return False


@dataclass(frozen=True)
class TextReference(Node):
    name: str

    @property
    def is_reference(self):
        return True


@dataclass(frozen=True)
class Concat(Node):
    left: "TextExpression"
    right: "TextExpression"

    @property
    def is_reference(self):
        """Whether the leftmost leaf of this concatenation is a variable reference."""
        return self.left.is_reference


TextExpression = Union[TextLiteral, TextReference, Concat]


# statements

@dataclass(frozen=True)
class TextAssign(Node):
    target: Identifier
    value: TextExpression


@dataclass(frozen=True)
class NumberAssign(Node):
    target: Identifier
    value: NumberExpression


@dataclass(frozen=True)
class InputStatement(Node):
    target: Identifier


@dataclass(frozen=True)
class OutputStatement(Node):
    target: Identifier


Statement = Union[TextAssign, NumberAssign, InputStatement, OutputStatement]


def span(first, last):
    """Returns the (line, start, end) running from the start of first to the end of last."""
    return first.line, first.start, last.end
