"""Error handling for the red language. Only Diagnostics should be encountered while running a script: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Diagnostics never format themselves for a terminal. Coloring and caret underlining happen in ErrorHandler.
"""

import sys

from termcolor import colored


class Diagnostic(Exception):
    """Location-tagged failure. start and end are character offsets into the whole source, line is 1-based."""
    kind = "error"

    def __init__(self, message, line=0, start=0, end=0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.start = start
        self.end = end

    @classmethod
    def at(cls, message, node):
        """Builds a Diagnostic spanning node, which can be anything with line, start and end (Token, AST node)."""
        return cls(message, node.line, node.start, node.end)

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r}, line={self.line}, start={self.start}, end={self.end})"

    def __eq__(self, other):
        return (type(self) is type(other) and self.message == other.message
                and (self.line, self.start, self.end) == (other.line, other.start, other.end))

    def __hash__(self):
        return hash((type(self), self.message, self.line, self.start, self.end))


class LexError(Diagnostic):
    kind = "lexical error"


class ParseError(Diagnostic):
    kind = "syntax error"


class ExecutionError(Diagnostic):
    kind = "runtime error"


class ErrorHandler:
    """Context manager that reports red Diagnostics (and anything else that escapes) against the source text."""
    ERROR = "red"
    GUTTER = "yellow"
    CONTEXT = "green"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.source = None  # text the next Diagnostic will be rendered against

    def register_source(self, source):
        """Registers source text. Should be called before lexing it."""
        self.source = source

    def remove_source(self):
        self.source = None

    @staticmethod
    def locate(source, line, start, end):
        """Returns (text of line, start column, end column) or None if line isn't in source."""
        lines = source.split("\n")
        if not 1 <= line <= len(lines):
            return None

        offset = sum(len(text) + 1 for text in lines[:line - 1])
        text = lines[line - 1]

        start_col = start - offset if start >= offset else start  # tolerate line-relative spans
        start_col = min(max(start_col, 0), len(text))
        end_col = min(max(start_col + (end - start), start_col), len(text) + 1)
        return text, start_col, end_col

    @staticmethod
    def diagnose(error, source):
        """Returns the offending line of source with error's span highlighted and underlined."""
        located = ErrorHandler.locate(source, error.line, error.start, error.end)
        if located is None:
            return f"  on line {error.line}"

        text, start_col, end_col = located
        end_col = max(end_col, start_col + 1)  # zero width spans still get a caret
        gutter = " " * len(str(error.line))

        diagnosis = f"{gutter} |\n"
        diagnosis += colored(str(error.line), ErrorHandler.GUTTER) + " | "
        diagnosis += colored(text[:start_col], ErrorHandler.CONTEXT)
        diagnosis += colored(text[start_col:end_col], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += text[end_col:] + "\n"

        diagnosis += f"{gutter} | " + " " * start_col
        diagnosis += colored("^" + "~" * (end_col - start_col - 1), ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis + " " + colored(error.message, ErrorHandler.ERROR)

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def throw(self, error, internal=False):
        """Reports error, which must be a Diagnostic, against the registered source. Exits if self.fatal."""
        error_msg = ""
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.message
        self._print(error_msg)

        if not internal and self.source is not None and error.line:
            self._print(ErrorHandler.diagnose(error, self.source))

        if self.fatal:
            sys.exit(1)
        self.source = None  # if error occurred, forget the source (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if exc_type is KeyboardInterrupt:
            self.throw(Diagnostic("keyboard interrupt"))
        elif issubclass(exc_type, Diagnostic):
            self.throw(exc_val)
        else:
            self.throw(Diagnostic(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)

        return True
