"""Runs .red scripts, or the interactive shell when no script is given. Installed as the `red` executable.

Reading the script, timing the stages and rendering diagnostics all happen here: the lang package only raises
Diagnostics and never prints them.
"""

import argparse
import contextlib
import logging
import sys
import time

from redlang.lang.error import Diagnostic, ErrorHandler
from redlang.lang.lexical import lex
from redlang.lang.session import Session
from redlang.lang.shell import Shell
from redlang.lang.syntax import parse


logger = logging.getLogger(__name__)


@contextlib.contextmanager
def stopwatch(task, active=True):
    """Logs how long the body took as "Task '<task>' took <n> ms" (or µs below a millisecond)."""
    start = time.perf_counter()
    yield
    if active:
        elapsed = time.perf_counter() - start
        if elapsed < 1e-3:
            logger.info("Task '%s' took %d µs", task, elapsed * 1e6)
        else:
            logger.info("Task '%s' took %d ms", task, elapsed * 1e3)


def read_source(path, encoding):
    """Returns the contents of path with carriage returns stripped."""
    try:
        with open(path, "r", encoding=encoding) as file:
            return file.read().replace("\r", "")
    except (OSError, UnicodeDecodeError) as exc:
        raise Diagnostic(f"'{path}' could not be read: {exc}") from exc


def run_file(path, error_handler, encoding="utf-8", timings=False, stdin=None, stdout=None):
    """Reads, lexes, parses and interprets the script at path. Diagnostics propagate to error_handler."""
    with stopwatch("Overall Execution", timings):
        with stopwatch("Reading File", timings):
            source = read_source(path, encoding)
        error_handler.register_source(source)

        with stopwatch("Lexing", timings):
            tokens = lex(source)
        with stopwatch("Parsing", timings):
            statements = parse(tokens)
        with stopwatch("Interpreting", timings):
            Session(stdin, stdout).run(statements)

    error_handler.remove_source()


def main(argv=None):
    """Runs red interpreter. Called from the red executable script."""
    parser = argparse.ArgumentParser(prog="red", description="Interpreter for the red scripting language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", action="store_true", help="log lexer, parser and interpreter activity")
    parser.add_argument("-t", "--timings", action="store_true", help="report how long each stage took")
    parser.add_argument("--encoding", default="utf-8", help="encoding of the script file (default: utf-8)")
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO if args.timings else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s" if not args.verbose else "[%(name)s] %(message)s")

    with ErrorHandler() as error_handler:
        if args.file is not None:
            run_file(args.file, error_handler, args.encoding, args.timings)
        else:
            Shell(Session(), error_handler).cmdloop()
