"""Egg runtime values.

A value is one of: a number (int or float), a string, a boolean, or a Function. Numbers, strings and booleans are
represented by the matching Python types; Functions are either Closures (made by `fun`) or Builtins (installed by the
prelude). Note that bool is a subclass of int, so the only falsy Egg value is checked with `is False`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from egg.lang.error import EggTypeError
from egg.pure.lexical import digits


def is_truthy(value):
    """Every value except boolean false is truthy, including 0 and the empty string."""
    return value is not False


class Function(ABC):
    """Superclass for callable Egg values. Calls check arity before anything else happens."""

    @property
    @abstractmethod
    def arity(self):
        """Number of arguments this function must be called with."""

    @abstractmethod
    def invoke(self, args):
        """Runs this function on a list of already evaluated args. Assumes arity has been checked."""

    def __call__(self, *args):
        if len(args) != self.arity:
            raise EggTypeError(f"Wrong number of arguments. Expected {self.arity} got {len(args)}")
        return self.invoke(list(args))


@dataclass(eq=False)
class Closure(Function):
    """A function defined in Egg. env is the scope the function was defined in (shared, not copied), and evaluator is
    the Evaluator that created it, so the body runs with the same special forms.
    """
    params: tuple
    body: object
    env: object = field(repr=False)
    evaluator: object = field(repr=False)

    @property
    def arity(self):
        return len(self.params)

    def invoke(self, args):
        local_env = self.env.child_scope(zip(self.params, args))
        return self.evaluator.evaluate(self.body, local_env)


@dataclass(eq=False)
class Builtin(Function):
    """A function implemented in Python."""
    name: str
    func: object = field(repr=False)
    nargs: int = 2

    @property
    def arity(self):
        return self.nargs

    def invoke(self, args):
        return self.func(*args)


def display(value):
    """Returns value as it would be written in Egg."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Closure):
        return f"<function {', '.join(value.params)}>" if value.params else "<function>"
    if isinstance(value, Builtin):
        return f"<builtin {value.name}>"
    if isinstance(value, int):
        return digits(value)
    return str(value)
