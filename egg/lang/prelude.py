"""Egg built-in library: the bindings every program starts with.

Operators are a fixed table of two-argument Python functions; they apply the host operation to their operands as-is,
with no coercion of their own. When the host operation fails (e.g. adding a number to a string, or dividing by zero)
the failure is reported as an Egg TypeError so that no Python exception escapes an Egg program.
"""

import operator

from egg.lang.error import EggTypeError
from egg.pure.environment import Environment
from egg.pure.values import Builtin, display


OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "==": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}


def binary(name, func):
    """Wraps a host binary operation as a two-argument Builtin."""

    def _apply(a, b):
        try:
            return func(a, b)
        except (TypeError, ArithmeticError) as exc:
            msg = f"Bad operands for '{name}': {type(a).__name__} and {type(b).__name__} ({exc})"
            raise EggTypeError(msg) from exc

    return Builtin(name, _apply, 2)


def console(value):
    """Default output sink for print: writes value to stdout as Egg would write it."""
    print(display(value))


def make_print(output):
    """Returns the print Builtin, which passes its argument to output and then returns it unchanged."""

    def _print(value):
        output(value)
        return value

    return Builtin("print", _print, 1)


def top_env(output=None):
    """Returns a new global Environment. output is the sink print writes to (defaults to console)."""
    env = Environment()
    env.bind("true", True)
    env.bind("false", False)

    for name, func in OPERATORS.items():
        env.bind(name, binary(name, func))

    env.bind("print", make_print(output if output is not None else console))
    return env
