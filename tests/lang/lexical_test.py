import unittest

from redlang.lang.error import LexError
from redlang.lang.lexical import Token, TokenType, lex

T = TokenType


def kinds(source):
    return [(token.kind, token.lexeme) for token in lex(source)]


class LexerTestCase(unittest.TestCase):

    def test_empty_source(self):
        self.assertEqual([Token(1, 0, 0, T.EOF, "")], lex(""))

    def test_spans(self):
        expected = [
            Token(1, 0, 4, T.ZAHL, "Zahl"),
            Token(1, 5, 6, T.IDENTIFIER, "a"),
            Token(1, 7, 8, T.EQUAL, "="),
            Token(1, 9, 10, T.VALUE, "5"),
            Token(1, 10, 10, T.EOF, ""),
        ]
        self.assertEqual(expected, lex("Zahl a = 5"))

    def test_statements(self):
        cases = {
            "Zahl a": [(T.ZAHL, "Zahl"), (T.IDENTIFIER, "a"), (T.EOF, "")],
            "Text s": [(T.TEXT, "Text"), (T.IDENTIFIER, "s"), (T.EOF, "")],
            "Input name": [(T.INPUT, "Input"), (T.IDENTIFIER, "name"), (T.EOF, "")],
            "  Output  x_1  ": [(T.OUTPUT, "Output"), (T.IDENTIFIER, "x_1"), (T.EOF, "")],
            "Output 1st": [(T.OUTPUT, "Output"), (T.IDENTIFIER, "1st"), (T.EOF, "")],
            "Output": [(T.OUTPUT, "Output"), (T.EOF, "")],
            "Zahl = 5": [(T.ZAHL, "Zahl"), (T.EQUAL, "="), (T.VALUE, "5"), (T.EOF, "")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_assignments_scan_values(self):
        cases = {
            "Text a = x": [(T.TEXT, "Text"), (T.IDENTIFIER, "a"), (T.EQUAL, "="), (T.VALUE, "x"), (T.EOF, "")],
            "Zahl a = 1": [(T.ZAHL, "Zahl"), (T.IDENTIFIER, "a"), (T.EQUAL, "="), (T.VALUE, "1"), (T.EOF, "")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_blanks_are_any_whitespace_but_newline(self):
        cases = {
            "Zahl a\u00a0= 5": [(T.ZAHL, "Zahl"), (T.IDENTIFIER, "a"), (T.EQUAL, "="), (T.VALUE, "5"), (T.EOF, "")],
            "Output\u00a0a": [(T.OUTPUT, "Output"), (T.IDENTIFIER, "a"), (T.EOF, "")],
            "Text a =\tx\u00a0y": [(T.TEXT, "Text"), (T.IDENTIFIER, "a"), (T.EQUAL, "="), (T.VALUE, "x"),
                                   (T.VALUE, "y"), (T.EOF, "")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), repr(case))

    def test_number_values(self):
        cases = {
            "Zahl a = 2 + 3 * 4": [(T.VALUE, "2"), (T.ADD, "+"), (T.VALUE, "3"), (T.MUL, "*"), (T.VALUE, "4")],
            "Zahl a=1-$b$/3": [(T.VALUE, "1"), (T.SUB, "-"), (T.IDENTIFIER, "b"), (T.DIV, "/"), (T.VALUE, "3")],
            "Zahl a = $b$": [(T.IDENTIFIER, "b")],
            "Zahl a = 007": [(T.VALUE, "007")],
        }
        for case, expected in cases.items():
            tokens = kinds(case)
            self.assertEqual([(T.ZAHL, "Zahl"), (T.IDENTIFIER, "a"), (T.EQUAL, "=")], tokens[:3], case)
            self.assertEqual(expected + [(T.EOF, "")], tokens[3:], case)

    def test_text_values(self):
        cases = {
            "Text a = hello world": [(T.VALUE, "hello"), (T.VALUE, "world")],
            "Text a = hello   world  ": [(T.VALUE, "hello"), (T.VALUE, "world")],
            "Text a = hi $n$!": [(T.VALUE, "hi"), (T.IDENTIFIER, "n"), (T.VALUE, "!")],
            "Text a = $n$": [(T.IDENTIFIER, "n")],
            "Text a = x$n$y": [(T.VALUE, "x"), (T.IDENTIFIER, "n"), (T.VALUE, "y")],
            "Text a = 5$$": [(T.VALUE, "5$")],
            "Text a = $$5": [(T.VALUE, "$"), (T.VALUE, "5")],
            "Text a = a+b=c": [(T.VALUE, "a+b=c")],
        }
        for case, expected in cases.items():
            tokens = kinds(case)
            self.assertEqual([(T.TEXT, "Text"), (T.IDENTIFIER, "a"), (T.EQUAL, "=")], tokens[:3], case)
            self.assertEqual(expected + [(T.EOF, "")], tokens[3:], case)

    def test_reference_spans_name_only(self):
        tokens = lex("Text a = hi $n$!")
        self.assertEqual(Token(1, 13, 14, T.IDENTIFIER, "n"), tokens[4])
        self.assertEqual(Token(1, 15, 16, T.VALUE, "!"), tokens[5])

    def test_escaped_dollar_span(self):
        self.assertEqual(Token(1, 9, 11, T.VALUE, "5$"), lex("Text a = 5$$")[3])

    def test_newlines(self):
        tokens = lex("Output a\n\nInput b\n")
        expected = [
            Token(1, 0, 6, T.OUTPUT, "Output"),
            Token(1, 7, 8, T.IDENTIFIER, "a"),
            Token(1, 8, 9, T.NEWLINE, "\n"),
            Token(2, 9, 10, T.NEWLINE, "\n"),
            Token(3, 10, 15, T.INPUT, "Input"),
            Token(3, 16, 17, T.IDENTIFIER, "b"),
            Token(3, 17, 18, T.NEWLINE, "\n"),
            Token(4, 18, 18, T.EOF, ""),
        ]
        self.assertEqual(expected, tokens)

    def test_text_value_stops_at_newline(self):
        self.assertEqual(
            [T.TEXT, T.IDENTIFIER, T.EQUAL, T.VALUE, T.NEWLINE, T.OUTPUT, T.IDENTIFIER, T.EOF],
            [token.kind for token in lex("Text a = hi\nOutput a")]
        )

    def test_offsets_are_characters(self):
        tokens = lex("Text ä = ümlaut\nOutput ä")
        self.assertEqual(Token(1, 9, 15, T.VALUE, "ümlaut"), tokens[3])
        self.assertEqual(Token(2, 23, 24, T.IDENTIFIER, "ä"), tokens[6])

    def test_tokens_are_ordered(self):
        tokens = lex("Text a = x $b$ y\n\nZahl c = 1 + $d$\nOutput c")
        positions = [(token.line, token.start) for token in tokens]
        self.assertEqual(sorted(positions), positions)

    def test_errors(self):
        cases = {
            "Print a": (1, 0, 5),                   # unknown keyword
            "\n\nPrint": (3, 2, 7),
            "Zahl a 5": (1, 7, 8),                  # missing =
            "Text a b c": (1, 7, 8),
            "Text a = $name": (1, 9, 14),           # unterminated reference
            "Zahl a = $b + 1": (1, 9, 11),
            "Text a = $n$$": (1, 11, 13),           # $$ after an open reference
            "Zahl a = $n$$": (1, 11, 13),
            "Zahl a = $$": (1, 9, 11),              # empty name
            "Text a = $ x$": (1, 9, 10),
            "Zahl a = 1 2": (1, 11, 12),            # missing operator
            "Zahl a = 1 % 2": (1, 11, 12),
            "Zahl a = 1 +": (1, 12, 12),            # end of input mid-scan
            "Zahl a = 1 +\nOutput a": (1, 12, 12),
            "Zahl a = -5": (1, 9, 11),
            "Output a b": (1, 9, 10),               # trailing junk
        }
        for case, (line, start, end) in cases.items():
            with self.assertRaises(LexError, msg=case) as ctx:
                lex(case)
            self.assertEqual((line, start, end), (ctx.exception.line, ctx.exception.start, ctx.exception.end), case)

    def test_error_messages(self):
        cases = {
            "Print a": "expected Text, Zahl, Input or Output but found `Print`",
            "Zahl a 5": "expected `=` to assign a value",
            "Text a = $name": "expected closing `$` for variable `name`",
            "Text a = $n$$": "found `$$` but a variable reference was already open",
            "Zahl a = 1 2": "expected an arithmetic operator (+ - * /) but found `2`",
            "Output a b": "unexpected `b` after Output variable",
            "Input a\u00a0b": "unexpected `b` after Input variable",
        }
        for case, message in cases.items():
            with self.assertRaises(LexError, msg=case) as ctx:
                lex(case)
            self.assertEqual(message, ctx.exception.message, case)


if __name__ == '__main__':
    unittest.main()
