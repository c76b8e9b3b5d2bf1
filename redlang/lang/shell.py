"""Handles interactive/command-line mode for the red interpreter. Uses cmd as backend."""

import cmd

from redlang.lang import numerical


class Shell(cmd.Cmd):
    """red interpreter shell. Every line is a complete program run in one shared Session."""
    intro = "red interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "

    def __init__(self, sess, error_handler, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.error_handler = error_handler
        self.error_handler.fatal = False

    def default(self, line):
        """Executes arbitrary red statement."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.error_handler.register_source(line)
            self.sess.interpret(line)
            self.error_handler.remove_source()

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        print("Welcome to the red interpreter!\n\n"
              "Every line is one statement:\n"
              "  Text <name> = <words and $variables$>\n"
              "  Zahl <name> = <number> + - * / <number> ...   (evaluated strictly left to right)\n"
              "  Input <name>\n"
              "  Output <name>\n\n"
              "Variables are kept until you leave the shell. Type 'vars' to list them, 'exit' to quit.")

    def do_vars(self, arg):
        """Lists the variables set so far."""
        for name, value in self.sess.namespace.items():
            kind = "Zahl" if isinstance(value, int) else "Text"
            print(f"{kind} {name} = {numerical.render(value)}")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
