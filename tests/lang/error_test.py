import io
import unittest

from redlang.lang.error import Diagnostic, ErrorHandler, ExecutionError, LexError, ParseError


class DiagnosticTestCase(unittest.TestCase):

    def test_fields(self):
        error = ParseError("expected identifier", 2, 14, 17)
        self.assertEqual((2, 14, 17, "expected identifier"), (error.line, error.start, error.end, error.message))
        self.assertEqual("expected identifier", str(error))

    def test_hierarchy(self):
        for cls in (LexError, ParseError, ExecutionError):
            self.assertTrue(issubclass(cls, Diagnostic), cls)

    def test_equality(self):
        self.assertEqual(LexError("x", 1, 2, 3), LexError("x", 1, 2, 3))
        self.assertNotEqual(LexError("x", 1, 2, 3), ParseError("x", 1, 2, 3))
        self.assertNotEqual(LexError("x", 1, 2, 3), LexError("x", 1, 2, 4))


class ErrorHandlerTestCase(unittest.TestCase):
    SOURCE = "Zahl a = 1\nOutput missing\n"

    def test_locate(self):
        cases = {
            (1, 5, 6): ("Zahl a = 1", 5, 6),
            (2, 18, 25): ("Output missing", 7, 14),
            (2, 25, 25): ("Output missing", 14, 14),
            (2, 7, 14): ("Output missing", 7, 14),   # line-relative span
        }
        for (line, start, end), expected in cases.items():
            self.assertEqual(expected, ErrorHandler.locate(self.SOURCE, line, start, end), (line, start, end))

        self.assertIsNone(ErrorHandler.locate(self.SOURCE, 9, 0, 1))

    def test_diagnose(self):
        diagnosis = ErrorHandler.diagnose(ExecutionError("variable `missing` not set", 2, 18, 25), self.SOURCE)
        lines = diagnosis.split("\n")

        self.assertEqual(3, len(lines))
        self.assertIn("missing", lines[1])
        self.assertIn("^", lines[2])
        self.assertIn("~~~~~~", lines[2])
        self.assertIn("variable `missing` not set", lines[2])

    def test_throw_non_fatal(self):
        stream = io.StringIO()
        handler = ErrorHandler(fatal=False, stream=stream)
        handler.register_source(self.SOURCE)

        with handler:
            raise ExecutionError("variable `missing` not set", 2, 18, 25)

        output = stream.getvalue()
        self.assertIn("runtime error", output)
        self.assertIn("variable `missing` not set", output)
        self.assertIn("Output", output)
        self.assertIsNone(handler.source)

    def test_throw_fatal(self):
        stream = io.StringIO()
        with self.assertRaises(SystemExit) as ctx:
            with ErrorHandler(stream=stream):
                raise LexError("expected `=` to assign a value", 1, 7, 8)

        self.assertEqual(1, ctx.exception.code)
        self.assertIn("lexical error", stream.getvalue())

    def test_internal_errors(self):
        stream = io.StringIO()
        with ErrorHandler(fatal=False, stream=stream):
            raise ValueError("boom")

        output = stream.getvalue()
        self.assertIn("[internal]", output)
        self.assertIn("ValueError: boom", output)

    def test_no_source(self):
        stream = io.StringIO()
        with ErrorHandler(fatal=False, stream=stream):
            raise Diagnostic("'missing.red' could not be read")

        self.assertEqual(1, len(stream.getvalue().strip().split("\n")))

    def test_passes_through_success(self):
        stream = io.StringIO()
        with ErrorHandler(stream=stream):
            pass
        self.assertEqual("", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
