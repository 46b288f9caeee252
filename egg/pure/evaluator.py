"""Egg tree-walking evaluator.

Evaluation order for ordinary applications is strictly left to right: the operator first, then each argument. An
application whose operator is a word naming a special form is handed to that form instead, with its arguments left
unevaluated.
"""

from egg.lang.error import EggError, EggTypeError
from egg.pure.forms import FORMS
from egg.pure.lexical import Apply, Literal, VariableRef
from egg.pure.values import Function


class Evaluator:
    """Evaluates Expressions against Environments, consulting a fixed special form registry."""

    def __init__(self, forms=FORMS):
        self.forms = forms

    def evaluate(self, expr, env):
        """Returns the value of expr in env. Errors that don't know where they happened yet are located at expr."""
        try:
            if isinstance(expr, Literal):
                return expr.value

            if isinstance(expr, VariableRef):
                return env.lookup(expr.name)

            if isinstance(expr, Apply):
                return self.apply(expr, env)

        except EggError as error:
            error.locate(expr.start, expr.end, expr.source)
            raise

        raise TypeError(f"cannot evaluate {type(expr).__name__}")

    def apply(self, expr, env):
        """Evaluates an Apply node: a special form if the operator names one, else an ordinary call."""
        operator = expr.operator
        if isinstance(operator, VariableRef) and operator.name in self.forms:
            return self.forms[operator.name](expr.args, env, self)

        func = self.evaluate(operator, env)
        if not isinstance(func, Function):
            raise EggTypeError("Applying a non-function.")

        args = [self.evaluate(arg, env) for arg in expr.args]
        try:
            return func(*args)
        except EggError as error:
            # a closure made from other source text failed; point at this call instead
            if error.start is not None and error.source is not expr.source:
                error.relocate(expr.start, expr.end, expr.source)
            raise


DEFAULT = Evaluator()


def evaluate(expr, env):
    """Evaluates expr in env with the default special forms."""
    return DEFAULT.evaluate(expr, env)
