"""Egg language interpreter.

Basic program flow:
    1. Parser: produces an Egg AST in a single pass over the source text, recognizing tokens as it builds the tree
        - For grammar rules, see egg/pure/lexical.py
    2. Evaluation: walks the AST against a chain of scopes, handing special forms (if, while, do, define, fun) their
       arguments unevaluated
        - See egg/pure/evaluator.py and egg/pure/forms.py
    3. Session: seeds a global scope with the built-in library and turns errors into messages at the top level
        - See egg/lang/session.py

"""

from egg.lang.error import EggError, EggReferenceError, EggSyntaxError, EggTypeError
from egg.lang.session import Session
from egg.pure.environment import Environment
from egg.pure.evaluator import Evaluator, evaluate
from egg.pure.lexical import parse


def run(*fragments, output=None):
    """Runs fragments, joined by newlines, as one program in a new session. Returns the program's value, or a message
    describing the error if it failed.
    """
    return Session(output).run(*fragments)
