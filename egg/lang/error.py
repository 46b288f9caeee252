"""Error handling for the Egg language. Only EggErrors should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every EggError carries a kind (the name shown to users, e.g. "SyntaxError") and a message. Errors raised from the
parser or evaluator may also carry the character offsets of the offending source, which ErrorHandler uses to point at
the problem.
"""

import sys

from termcolor import colored


class EggError(Exception):
    """Base class for all Egg errors. str(error) is "<kind>: <msg>", the form shown at the top-level boundary."""
    kind = "Error"

    def __init__(self, msg, start=None, end=None, source=None):
        super().__init__(msg)
        self.msg = msg
        self.start = start  # offset into source, if known
        self.end = end
        self.source = source  # program text start and end refer to

    def locate(self, start, end, source=None):
        """Records where in the source this error happened, unless it is already known. Returns self."""
        if self.start is None:
            self.relocate(start, end, source)
        return self

    def relocate(self, start, end, source=None):
        """Records where in the source this error happened, replacing any earlier location. Returns self."""
        self.start, self.end, self.source = start, end, source
        return self

    def __str__(self):
        return f"{self.kind}: {self.msg}"


class EggSyntaxError(EggError):
    """Malformed program text, or a special form used with the wrong shape."""
    kind = "SyntaxError"


class EggReferenceError(EggError):
    """Lookup of a name that is not bound anywhere in the scope chain."""
    kind = "ReferenceError"


class EggTypeError(EggError):
    """Applying something that isn't a function, or calling a function with the wrong number of arguments."""
    kind = "TypeError"


class EggIOError(EggError):
    """A source file could not be read."""
    kind = "IOError"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report Egg errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None
        self.source = None

    def register_source(self, path, source):
        """Registers the program currently being run. Should be called prior to Session evaluate/run."""
        self.path = path
        self.source = source

    def remove_source(self):
        """Forgets the current program. Should be called after a successful Session evaluate/run."""
        self.path = None
        self.source = None

    def position(self, offset):
        """Returns (line, line_num, col) of offset in the registered source. line_num and col are 1-based."""
        line_start = self.source.rfind("\n", 0, offset) + 1
        line_end = self.source.find("\n", offset)
        if line_end == -1:
            line_end = len(self.source)

        line_num = self.source.count("\n", 0, line_start) + 1
        return self.source[line_start:line_end], line_num, offset - line_start + 1

    def diagnose(self, error, warning=False):
        """Returns offending line of the registered source, with the part that caused error highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line, __, col = self.position(error.start)
        start = col - 1
        end = error.end if error.end is not None else error.start + 1
        end = min(max(start + end - error.start, start + 1), len(line))  # only highlight within this line

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _header(self, error):
        """Returns 'path:line:col: ' for error if it can be located, else 'path: ' or nothing."""
        if self.path is None:
            return ""
        if not self._located(error):
            return colored(f"{self.path}: ", attrs=["bold"])

        __, line_num, col = self.position(error.start)
        return colored(f"{self.path}:{line_num}:{col}: ", attrs=["bold"])

    def _located(self, error):
        """Whether error has a position in the registered source. Errors located in other text are not."""
        if self.source is None or error.start is None:
            return False
        return error.source is None or error.source == self.source

    def _can_diagnose(self, error):
        return self._located(error) and error.start < len(self.source)

    def warn(self, msg, start=None, end=None):
        """Generates and prints a warning message."""
        warning = EggError(msg, start, end)

        print(self._header(warning) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)
        if self._can_diagnose(warning):
            print(self.diagnose(warning, warning=True))

    def throw(self, error, internal=False):
        """Reports error, which should be an EggError. Exits if this handler is fatal."""
        error_msg = self._header(error)
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        print(error_msg)

        if not internal and self._can_diagnose(error):
            print(self.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.remove_source()  # if error occurred, reset source (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(EggError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(EggError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, EggError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(EggError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
