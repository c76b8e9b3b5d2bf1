"""red: lexer, parser and tree-walking interpreter for a tiny line-based scripting language.

For reference, a complete program:

```
Input name
Zahl answer = 2 + 3 * 4
Text greeting = the answer for $name$ is
Output greeting
Output answer
```

`answer` is 20, not 14: arithmetic folds strictly left to right.

Basic program flow:
    1. Lexer (lang/lexical.py): scans the whole source into a flat list of Tokens
    2. Parser (lang/syntax.py): builds one syntax tree per statement (lang/tree.py)
    3. Interpreter (lang/session.py): executes the statements in order against a single namespace

Any failure is raised as a Diagnostic (lang/error.py) pointing at the exact characters responsible.
"""

import logging

from redlang.lang.error import Diagnostic, ErrorHandler, ExecutionError, LexError, ParseError
from redlang.lang.lexical import Token, TokenType, lex
from redlang.lang.session import Session
from redlang.lang.syntax import parse


logging.getLogger(__name__).addHandler(logging.NullHandler())


def interpret(source, stdin=None, stdout=None):
    """Runs source in a fresh Session and returns that Session."""
    sess = Session(stdin, stdout)
    sess.interpret(source)
    return sess
