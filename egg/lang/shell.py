"""Handles interactive/command-line mode for the Egg interpreter. Uses cmd as backend."""

import cmd

from egg.pure.lexical import STRING
from egg.pure.values import display


class Shell(cmd.Cmd):
    """Egg interpreter shell. Definitions made on one line are visible on later lines."""
    intro = "Egg interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def needs_more(line):
        """Whether line has unclosed parentheses (not counting any inside string literals)."""
        code = STRING.sub("", line)
        return code.count("(") > code.count(")")

    def default(self, line):
        """Executes arbitrary Egg program."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if self.needs_more(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if line.strip():
                print(display(self.sess.evaluate(line, env=self.sess.scope)))

    def parseline(self, line):
        """Only the built-in commands are treated as commands, and only at the start of a program."""
        command = line.strip()
        if self._tmp_line or command not in ("help", "exit", "EOF"):
            return None, None, line
        return super().parseline(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Egg interpreter!\n\n"
              "Everything in Egg is an expression. Values are numbers, strings, booleans and \n"
              "functions; everything else is an application like +(1, 2). The special forms \n"
              "if, while, do, define and fun control evaluation.\n\n"
              "Try it out by typing 'define(sq, fun(x, *(x, x)))'. This will bind a function \n"
              "to 'sq'. Next, try typing 'sq(4)', which will give '16' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
