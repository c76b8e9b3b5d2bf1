"""Recursive descent parser for the red language. Builds statement trees (see tree.py) from the Tokens produced in
lexical.py, using a single index cursor and one Token of lookahead.

Arithmetic deliberately has no operator precedence: a chain folds strictly left-to-right in source order, so
`2 + 3 * 4` is `(2 + 3) * 4`.
"""

import logging

from redlang.lang import numerical
from redlang.lang.error import ParseError
from redlang.lang.lexical import OPERATORS, TokenType
from redlang.lang.tree import (BinaryNumber, Concat, Identifier, InputStatement, NumberAssign, NumberLiteral,
                               NumberReference, OutputStatement, TextAssign, TextLiteral, TextReference, span)


logger = logging.getLogger(__name__)

OPERATOR_KINDS = {kind: symbol for symbol, kind in OPERATORS.items()}
LINE_ENDS = (TokenType.NEWLINE, TokenType.EOF)


class Parser:
    """Parses one list of Tokens. Tokens should end with an EOF Token, as produced by lexical.lex."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.token_idx = 0

    def parse(self):
        """Returns the statements of self.tokens in source order. Raises ParseError on the first malformed one."""
        statements = []
        while True:
            token = self.current()
            if token.kind is TokenType.NEWLINE:
                self.advance()
            elif token.kind is TokenType.EOF:
                break
            else:
                statements.append(self.statement())

        logger.debug("parsed %d statements", len(statements))
        return statements

    def statement(self):
        keyword = self.current()

        if keyword.kind is TokenType.TEXT:
            target, value = self.assignment(keyword, self.text_value, TextLiteral(*span(keyword, keyword), ""))
            stmt = TextAssign(*span(keyword, last(target, value)), target, value)

        elif keyword.kind is TokenType.ZAHL:
            target, value = self.assignment(keyword, self.number_value, NumberLiteral(*span(keyword, keyword), 0))
            stmt = NumberAssign(*span(keyword, last(target, value)), target, value)

        elif keyword.kind is TokenType.INPUT:
            self.advance()
            target = self.identifier(keyword)
            stmt = InputStatement(*span(keyword, target), target)

        elif keyword.kind is TokenType.OUTPUT:
            self.advance()
            target = self.identifier(keyword)
            stmt = OutputStatement(*span(keyword, target), target)

        else:
            raise ParseError.at(f"expected Text, Zahl, Input or Output but found {describe(keyword)}", keyword)

        token = self.current()
        if token.kind not in LINE_ENDS:
            raise ParseError.at(f"expected end of line after statement but found {describe(token)}", token)

        return stmt

    def assignment(self, keyword, parse_value, default):
        """Parses `<name> [= <value>]` after a Text/Zahl keyword. Returns (Identifier, value expression)."""
        self.advance()
        target = self.identifier(keyword)

        token = self.current()
        if token.kind is TokenType.EQUAL:
            self.advance()
            return target, parse_value()
        elif token.kind in LINE_ENDS:
            return target, default

        raise ParseError.at(f"invalid assignment, expected `=` but found {describe(token)}", token)

    def identifier(self, keyword):
        token = self.current()
        if token.kind is not TokenType.IDENTIFIER:
            raise ParseError.at(f"expected variable name after {keyword.kind.value} but found {describe(token)}",
                                token)

        self.advance()
        return Identifier(*span(token, token), token.lexeme)

    # text values

    def text_value(self):
        """Greedily collects value/identifier Tokens and folds them right-to-left into Concat nodes."""
        leaves = []
        while self.current().kind in (TokenType.VALUE, TokenType.IDENTIFIER):
            token = self.current()
            if token.kind is TokenType.VALUE:
                leaves.append(TextLiteral(*span(token, token), token.lexeme))
            else:
                leaves.append(TextReference(*span(token, token), token.lexeme))
            self.advance()

        if not leaves:
            token = self.current()
            raise ParseError.at(f"expected text value but found {describe(token)}", token)

        result = leaves.pop()
        while leaves:
            left = leaves.pop()
            result = Concat(*span(left, result), left, result)
        return result

    # number values

    def number_value(self):
        """Parses <operand> { <operator> <operand> }, folding strictly left-to-right."""
        result = self.number_leaf()
        while self.current().kind in OPERATOR_KINDS:
            op = OPERATOR_KINDS[self.current().kind]
            self.advance()
            right = self.number_leaf()
            result = BinaryNumber(*span(result, right), op, result, right)
        return result

    def number_leaf(self):
        token = self.current()

        if token.kind is TokenType.VALUE:
            self.advance()
            value = numerical.parse_integer(token.lexeme)
            if value is None:
                raise ParseError.at(f"`{token.lexeme}` is not a valid 64-bit integer", token)
            return NumberLiteral(*span(token, token), value)

        elif token.kind is TokenType.IDENTIFIER:
            self.advance()
            return NumberReference(*span(token, token), token.lexeme)

        raise ParseError.at(f"expected number value but found {describe(token)}", token)

    # cursor

    def current(self):
        if self.token_idx < len(self.tokens):
            return self.tokens[self.token_idx]

        if self.tokens:
            raise ParseError.at("unexpected end of input while parsing", self.tokens[-1])
        raise ParseError("unexpected end of input while parsing")

    def advance(self):
        self.token_idx += 1


def last(*nodes):
    """Returns whichever of nodes ends furthest into the source."""
    return max(nodes, key=lambda node: node.end)


def describe(token):
    """Human readable name of token for error messages."""
    if token.kind in (TokenType.IDENTIFIER, TokenType.VALUE):
        return f"{token.kind.value} `{token.lexeme}`"
    elif token.kind in LINE_ENDS:
        return token.kind.value
    return f"`{token.lexeme}`"


def parse(tokens):
    """Returns the statements parsed from tokens. Raises ParseError on the first malformed statement."""
    return Parser(tokens).parse()
