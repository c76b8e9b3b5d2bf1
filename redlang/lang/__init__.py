"""The red language itself: lexing, parsing, interpreting and error reporting."""
