"""Session control for the Egg language. Ties the parser and evaluator to a global environment so programs can be run
from strings, files, or the command-line shell.

Session.run is the top-level boundary: it is the only place where Egg errors are turned into strings. Everything
below it raises.
"""

import logging

from egg.lang.error import EggError, EggIOError
from egg.lang.prelude import top_env
from egg.pure.evaluator import Evaluator
from egg.pure.forms import FORMS
from egg.pure.lexical import parse


logger = logging.getLogger(__name__)


class Session:
    """Governs an Egg session: one global environment, shared by every program run in it."""
    SH_FILE = "<in>"  # shell pseudo-filename, used for error messages

    def __init__(self, output=None, forms=FORMS, error_handler=None):
        self.global_env = top_env(output)  # never written to after this point
        self.evaluator = Evaluator(forms)
        self.error_handler = error_handler

        self.scope = self.global_env.child_scope()  # persistent scope used by the shell
        self.last_source = None

    @staticmethod
    def join(fragments):
        """Joins source fragments into a single program."""
        return "\n".join(fragments)

    def parse(self, *fragments, path=None):
        """Parses fragments as a single program."""
        program = self.join(fragments)
        self.last_source = program
        if self.error_handler is not None:
            self.error_handler.register_source(path or Session.SH_FILE, program)

        logger.debug("parsing %d characters from %s", len(program), path or Session.SH_FILE)
        return parse(program)

    def evaluate(self, *fragments, env=None, path=None):
        """Parses and evaluates fragments as a single program, returning its value. Unless env is given, the program
        runs in a fresh child of the global environment. Errors are raised.
        """
        expr = self.parse(*fragments, path=path)
        if env is None:
            env = self.global_env.child_scope()

        logger.debug("evaluating %s", expr)
        value = self.evaluator.evaluate(expr, env)

        if self.error_handler is not None:
            self.error_handler.remove_source()
        return value

    def run(self, *fragments):
        """Runs fragments as a single program. Returns the program's value or, if it failed, "<kind>: <message>"."""
        try:
            return self.evaluate(*fragments)
        except EggError as error:
            logger.debug("program failed: %s", error)
            return str(error)

    def read(self, path):
        """Returns the contents of the source file at path."""
        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise EggIOError(f"'{path}' could not be opened")

