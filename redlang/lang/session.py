"""Session control for the red language. A Session owns the single flat namespace a program runs against and the
line-oriented input/output it talks to, and executes parsed statements strictly in source order.
"""

import logging
import sys

from redlang.lang import numerical
from redlang.lang.error import ExecutionError
from redlang.lang.lexical import DELIMITER, lex
from redlang.lang.syntax import parse
from redlang.lang.tree import (BinaryNumber, Concat, InputStatement, NumberAssign, NumberLiteral, NumberReference,
                               OutputStatement, TextAssign, TextLiteral, TextReference)


logger = logging.getLogger(__name__)


class Session:
    """Governs a red session. Variables live in self.namespace until the session is discarded."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin      # needs readline()
        self.stdout = stdout if stdout is not None else sys.stdout  # needs write()
        self.namespace = {}  # dict of name: int or str

    def interpret(self, source):
        """Lexes, parses and runs source in this session. Each stage finishes before the next one starts."""
        self.run(parse(lex(source)))

    def run(self, statements):
        """Executes statements in order. The first ExecutionError aborts the run and is raised."""
        for stmt in statements:
            logger.debug("line %d: executing %s", stmt.line, type(stmt).__name__)
            self.execute(stmt)

    def execute(self, stmt):
        if isinstance(stmt, TextAssign):
            self.namespace[stmt.target.name] = self.eval_text(stmt.value)

        elif isinstance(stmt, NumberAssign):
            self.namespace[stmt.target.name] = self.eval_number(stmt.value)

        elif isinstance(stmt, InputStatement):
            self.namespace[stmt.target.name] = self.read_line(stmt.target)

        elif isinstance(stmt, OutputStatement):
            value = self.lookup(stmt.target.name, stmt.target)
            self.write_line(numerical.render(value), stmt.target)

        else:
            raise ExecutionError.at(f"cannot execute {type(stmt).__name__}", stmt)

    # evaluation

    def eval_number(self, expr):
        if isinstance(expr, NumberLiteral):
            return expr.value

        elif isinstance(expr, NumberReference):
            value = numerical.to_integer(self.lookup(expr.name, expr))
            if value is None:
                raise ExecutionError.at(f"cannot convert text variable `{expr.name}` to a number", expr)
            return value

        elif isinstance(expr, BinaryNumber):
            left = self.eval_number(expr.left)
            right = self.eval_number(expr.right)
            try:
                return numerical.apply(expr.op, left, right)
            except ZeroDivisionError:
                raise ExecutionError.at("division by zero", expr.right) from None

        raise ExecutionError.at(f"cannot evaluate {type(expr).__name__} as a number", expr)

    def eval_text(self, expr):
        if isinstance(expr, TextLiteral):
            return expr.value

        elif isinstance(expr, TextReference):
            return numerical.render(self.lookup(expr.name, expr))

        elif isinstance(expr, Concat):
            left = self.eval_text(expr.left)
            right = self.eval_text(expr.right)

            # literal words are space separated, interpolated variables glue to their neighbours
            if expr.left.is_reference or expr.right.is_reference or left.endswith(DELIMITER):
                return left + right
            return f"{left} {right}"

        raise ExecutionError.at(f"cannot evaluate {type(expr).__name__} as text", expr)

    def lookup(self, name, node):
        """Returns the value bound to name. node is the span to blame if it isn't set."""
        try:
            return self.namespace[name]
        except KeyError:
            raise ExecutionError.at(f"variable `{name}` not set", node) from None

    # io

    def read_line(self, target):
        """Reads one line from self.stdin without its line terminator. Unreadable input and an exhausted stream both
        raise an ExecutionError spanning target, so a missing line never passes silently as empty text.
        """
        try:
            line = self.stdin.readline()
        except (OSError, UnicodeError) as exc:
            raise ExecutionError.at(f"could not read input for `{target.name}`: {exc}", target) from exc

        if not line:
            raise ExecutionError.at(f"end of input reached while reading `{target.name}`", target)

        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def write_line(self, text, target):
        try:
            self.stdout.write(text + "\n")
        except (OSError, UnicodeError) as exc:
            raise ExecutionError.at(f"could not write `{target.name}`: {exc}", target) from exc
