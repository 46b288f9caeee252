"""Special forms: reserved operator names whose arguments are handed over unevaluated.

Each handler is called as handler(args, env, evaluator), where args are the raw argument Expressions, and decides
for itself what to evaluate and in what order. The registry is built once and is read-only afterwards; use
special_forms to get an extended copy.
"""

from types import MappingProxyType

from egg.lang.error import EggSyntaxError
from egg.pure.lexical import VariableRef
from egg.pure.values import Closure, is_truthy


def if_form(args, env, evaluator):
    """if(cond, then, else): only boolean false selects else."""
    if len(args) != 3:
        raise EggSyntaxError("Bad number of args to if")

    cond, then, otherwise = args
    if is_truthy(evaluator.evaluate(cond, env)):
        return evaluator.evaluate(then, env)
    return evaluator.evaluate(otherwise, env)


def while_form(args, env, evaluator):
    """while(cond, body). There is no undefined value in Egg, so a loop always evaluates to false."""
    if len(args) != 2:
        raise EggSyntaxError("Bad number of args to while")

    cond, body = args
    while is_truthy(evaluator.evaluate(cond, env)):
        evaluator.evaluate(body, env)
    return False


def do_form(args, env, evaluator):
    """do(expr...): evaluates each expr in order, returning the last result (false if there are none)."""
    value = False
    for arg in args:
        value = evaluator.evaluate(arg, env)
    return value


def define_form(args, env, evaluator):
    """define(name, value): binds name in the current scope, never an enclosing one."""
    if len(args) != 2 or not isinstance(args[0], VariableRef):
        raise EggSyntaxError("Bad use of define")

    value = evaluator.evaluate(args[1], env)
    env.bind(args[0].name, value)
    return value


def fun_form(args, env, evaluator):
    """fun(param..., body): creates a Closure over the current scope."""
    if not args:
        raise EggSyntaxError("Functions need a body")

    *params, body = args
    for param in params:
        if not isinstance(param, VariableRef):
            raise EggSyntaxError("Arg names must be words", param.start, param.end, param.source)

    return Closure(tuple(param.name for param in params), body, env, evaluator)


FORMS = MappingProxyType({
    "if": if_form,
    "while": while_form,
    "do": do_form,
    "define": define_form,
    "fun": fun_form,
})


def special_forms(extra=None, **kwargs):
    """Returns a new read-only registry with the default forms plus the forms in the mapping extra and in kwargs, which
    may override defaults. Names that aren't Python identifiers (e.g. "set!") have to go in extra.
    """
    return MappingProxyType({**FORMS, **(extra or {}), **kwargs})
