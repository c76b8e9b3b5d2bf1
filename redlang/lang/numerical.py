"""Runtime values of the red language and the integer arithmetic performed on them.

A runtime value is either a Python int (always kept inside the signed 64-bit range) or a Python str. Arithmetic
wraps around on overflow like a 64-bit machine register, and division truncates toward zero.
"""

import re

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1

INTEGER_FORMAT = re.compile(r"[+-]?[0-9]+")  # no whitespace, no underscores, ASCII digits only


def wrap(num):
    """Wraps an arbitrary Python int into the signed 64-bit range (two's complement)."""
    return (num - INT_MIN) % (1 << INT_BITS) + INT_MIN


def parse_integer(text):
    """Returns text as an int if it is a signed base-10 64-bit integer, else None."""
    if not INTEGER_FORMAT.fullmatch(text):
        return None

    num = int(text)
    if not INT_MIN <= num <= INT_MAX:
        return None
    return num


def to_integer(value):
    """Coerces a runtime value to an int. Returns None if value is text that isn't a 64-bit integer."""
    if isinstance(value, int):
        return value
    return parse_integer(value)


def render(value):
    """Renders a runtime value as text: ints in base 10, text as itself."""
    return str(value)


def divide(left, right):
    """Integer division truncating toward zero. Raises ZeroDivisionError if right is 0."""
    quotient = abs(left) // abs(right)
    return wrap(quotient if (left < 0) == (right < 0) else -quotient)


OPERATIONS = {
    "+": lambda left, right: wrap(left + right),
    "-": lambda left, right: wrap(left - right),
    "*": lambda left, right: wrap(left * right),
    "/": divide,
}


def apply(op, left, right):
    """Applies arithmetic operator op ("+", "-", "*" or "/") to two 64-bit ints."""
    return OPERATIONS[op](left, right)
