"""Lexical analysis for the red language. Turns a whole (newline-normalized) source string into a flat list of Tokens.

The grammar is strictly one statement per line:

```
<text_stmt>   ::= "Text" <name> [ "=" <value-run> ]     ; words and $name$ references
<number_stmt> ::= "Zahl" <name> [ "=" <number-expr> ]   ; <operand> { ("+" | "-" | "*" | "/") <operand> }
<input_stmt>  ::= "Input" <name>
<output_stmt> ::= "Output" <name>

<operand>     ::= <digit>+ | "$" <name> "$"
<name>        ::= (<alphanumeric> | "_")*              ; digits may come first
```

Inside a value run, "$$" is an escaped dollar: it ends the current word with a literal "$" instead of opening a
reference.

All Token offsets are character offsets into the whole source, not into the current line.
"""

import enum
import logging
from dataclasses import dataclass

from redlang.lang.error import LexError


logger = logging.getLogger(__name__)


class TokenType(enum.Enum):
    TEXT = "Text"
    ZAHL = "Zahl"
    INPUT = "Input"
    OUTPUT = "Output"
    IDENTIFIER = "identifier"
    VALUE = "value"
    EQUAL = "="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    NEWLINE = "newline"
    EOF = "end of input"


KEYWORDS = {kind.value: kind for kind in (TokenType.TEXT, TokenType.ZAHL, TokenType.INPUT, TokenType.OUTPUT)}
OPERATORS = {kind.value: kind for kind in (TokenType.ADD, TokenType.SUB, TokenType.MUL, TokenType.DIV)}

DELIMITER = "$"    # opens and closes a variable reference


@dataclass(frozen=True)
class Token:
    line: int
    start: int
    end: int
    kind: TokenType
    lexeme: str

    def __repr__(self):
        return f"Token({self.kind.name}, {self.lexeme!r}, line={self.line}, {self.start}..{self.end})"


class Lexer:
    """Single forward scan over a source string. self.start marks the beginning of the token being built."""

    def __init__(self, source):
        self.source = source
        self.current = 0
        self.start = 0
        self.line = 1
        self.tokens = []

    def lex(self):
        """Returns the list of Tokens for self.source, always terminated by an EOF Token."""
        while True:
            self.skip_whitespace()
            if self.is_at_end():
                break
            self.statement()

        self.start = self.current
        self.add_token(TokenType.EOF)

        logger.debug("lexed %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens

    # statements

    def statement(self):
        self.start = self.current
        while not self.is_at_end() and not self.peek().isspace():
            self.current += 1

        word = self.source[self.start:self.current]
        if word not in KEYWORDS:
            raise self.error(f"expected Text, Zahl, Input or Output but found `{word}`")

        kind = KEYWORDS[word]
        self.add_token(kind)
        self.identifier()

        if kind is TokenType.TEXT or kind is TokenType.ZAHL:
            self.skip_spaces()
            if self.is_at_line_end():
                return  # no value, the parser supplies the default

            if self.peek() != "=":
                self.start = self.current
                self.skip_word()
                raise self.error("expected `=` to assign a value")

            self.start = self.current
            self.current += 1
            self.add_token(TokenType.EQUAL)

            if kind is TokenType.TEXT:
                self.text_value()
            else:
                self.number_value()

        else:
            self.skip_spaces()
            if not self.is_at_line_end():
                self.start = self.current
                self.skip_word()
                raise self.error(f"unexpected `{self.source[self.start:self.current]}` after {kind.value} variable")

    def identifier(self):
        """Scans a (possibly empty) name. An empty name emits nothing: the parser reports what it finds instead."""
        self.skip_spaces()
        return self.name()

    def name(self):
        while not self.is_at_end() and is_name_char(self.peek()):
            self.current += 1

        if self.current > self.start:
            return self.add_token(TokenType.IDENTIFIER)
        return None

    # values

    def number_value(self):
        """Scans <operand> { <operator> <operand> } up to the end of the line."""
        while True:
            self.operand()

            self.skip_spaces()
            if self.is_at_line_end():
                return

            char = self.peek()
            if char not in OPERATORS:
                self.start = self.current
                self.skip_word()
                raise self.error(f"expected an arithmetic operator (+ - * /) but found `{self.lexeme()}`")

            self.current += 1
            self.add_token(OPERATORS[char])

    def operand(self):
        self.skip_spaces()
        if self.is_at_end():
            raise self.error("unexpected end of input, expected a number")

        char = self.peek()
        if is_digit(char):
            while not self.is_at_end() and is_digit(self.peek()):
                self.current += 1
            self.add_token(TokenType.VALUE)

        elif char == DELIMITER:
            self.reference()

        elif char == "\n":
            raise self.error("expected a number before the end of the line")

        else:
            self.skip_word()
            raise self.error(f"expected a number or a `$variable$` but found `{self.lexeme()}`")

    def text_value(self):
        """Scans words and references up to (not including) the end of the line."""
        self.skip_spaces()
        self.start = self.current

        while not self.is_at_line_end():
            char = self.peek()

            if is_blank(char):
                self.close_word()
                self.skip_spaces()

            elif char == DELIMITER and self.peek(1) == DELIMITER:
                self.current += 1  # keep the first "$" as part of the word
                self.add_token(TokenType.VALUE)
                self.current += 1
                self.start = self.current

            elif char == DELIMITER:
                self.close_word()
                self.reference()
                self.start = self.current

            else:
                self.current += 1

        self.close_word()

    def close_word(self):
        if self.current > self.start:
            self.add_token(TokenType.VALUE)
        self.start = self.current

    def reference(self):
        """Scans $name$ starting at the opening delimiter. Emits only the name as an IDENTIFIER Token."""
        opening = self.current
        self.current += 1
        self.start = self.current

        name = self.name()
        if name is None:
            self.start = opening
            if self.peek() == DELIMITER:
                self.current += 1
                raise self.error("expected a variable name between `$` and `$`")
            raise self.error("expected a variable name after `$`")

        if self.peek() != DELIMITER:
            self.start = opening
            raise self.error(f"expected closing `$` for variable `{name.lexeme}`")
        self.current += 1

        if self.peek() == DELIMITER:
            self.start = self.current - 1
            self.current += 1
            raise self.error("found `$$` but a variable reference was already open")

        self.start = self.current

    # helpers

    def add_token(self, kind):
        token = Token(self.line, self.start, self.current, kind, self.lexeme())
        self.tokens.append(token)
        self.start = self.current
        return token

    def lexeme(self):
        return self.source[self.start:self.current]

    def error(self, msg):
        return LexError(msg, self.line, self.start, self.current)

    def peek(self, ahead=0):
        idx = self.current + ahead
        return self.source[idx] if idx < len(self.source) else ""

    def is_at_end(self):
        return self.current >= len(self.source)

    def is_at_line_end(self):
        return self.is_at_end() or self.peek() == "\n"

    def skip_spaces(self):
        """Skips blanks (any whitespace but newlines)."""
        while not self.is_at_end() and is_blank(self.peek()):
            self.current += 1
        self.start = self.current

    def skip_whitespace(self):
        """Skips all whitespace between statements, emitting a NEWLINE Token for every newline crossed."""
        while not self.is_at_end() and self.peek().isspace():
            self.start = self.current
            self.current += 1
            if self.source[self.start] == "\n":
                self.add_token(TokenType.NEWLINE)
                self.line += 1
        self.start = self.current

    def skip_word(self):
        while not self.is_at_end() and not self.peek().isspace():
            self.current += 1


def is_blank(char):
    """Separator inside a statement: any whitespace character except the newline ending it."""
    return char.isspace() and char != "\n"


def is_name_char(char):
    return char.isalnum() or char == "_"


def is_digit(char):
    return "0" <= char <= "9" and len(char) == 1


def lex(source):
    """Returns the Tokens of source. Raises LexError on the first malformed statement."""
    return Lexer(source).lex()
