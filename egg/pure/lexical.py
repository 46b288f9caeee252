"""Egg abstract syntax tree and parser.

The `pure` directory contains the Egg language itself: parsing, scoping and evaluation. Everything needed to run Egg
programs from files or a shell lives in `lang`.

Formally, Egg grammar can be defined as

```
<expr>       ::= <primary> <apply-tail>*
<primary>    ::= <string> | <number> | <word>
<string>     ::= '"' <non-quote char>* '"'          ; no escape sequences
<number>     ::= <digit>+                           ; unsigned integers only, must end at a word boundary
<word>       ::= <char not in whitespace or '(),"'>+
<apply-tail> ::= "(" [<expr> ("," <expr>)*] ")"     ; may repeat: f(1)(2) applies the result of f(1) to 2
```

There is no separate lexer: whitespace is skipped before every token and tokens are recognized as the tree is built.
"""

import re
from dataclasses import dataclass, field

from egg.lang.error import EggSyntaxError


STRING = re.compile(r'"([^"]*)"')
NUMBER = re.compile(r"\d+\b", re.ASCII)
WORD = re.compile(r'[^\s(),"]+')
NON_SPACE = re.compile(r"\S")

DIGITS_CHUNK = 1000  # well under the interpreter's int/str conversion limit


def number(text):
    """Returns the int written as the digit string text, however many digits there are."""
    value = 0
    for idx in range(0, len(text), DIGITS_CHUNK):
        chunk = text[idx:idx + DIGITS_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def digits(value):
    """Returns the decimal digits of int value, however many there are."""
    if value < 0:
        return "-" + digits(-value)

    chunks = []
    while True:
        value, chunk = divmod(value, 10 ** DIGITS_CHUNK)
        chunks.append(chunk)
        if not value:
            break
    return str(chunks[-1]) + "".join(f"{chunk:0{DIGITS_CHUNK}d}" for chunk in reversed(chunks[:-1]))


class Expression:
    """Superclass for Egg syntax tree nodes. Nodes are immutable once parsed.

    start and end are the offsets of the node in source, the text it was parsed from. They are only used to point at
    the origin of errors, so they are left out of equality: parsing the same text twice gives equal trees.
    """
    start: int
    end: int
    source: str

    def display(self):
        """Returns Egg source text for this node."""
        raise NotImplementedError

    def __str__(self):
        return self.display()


@dataclass(frozen=True, eq=False)
class Literal(Expression):
    """A number, string or boolean value written directly in the source. Literals are equal only if their values have
    the same type, so 1, 1.0 and true are all different.
    """
    value: object
    start: int = field(default=0, repr=False)
    end: int = field(default=0, repr=False)
    source: str = field(default=None, repr=False)

    def display(self):
        if isinstance(self.value, str):
            return f'"{self.value}"'
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, int):
            return digits(self.value)
        return str(self.value)

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self):
        return hash((type(self.value), self.value))


@dataclass(frozen=True)
class VariableRef(Expression):
    """A word: refers to a binding, or names a special form when used as an operator."""
    name: str
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)
    source: str = field(default=None, compare=False, repr=False)

    def display(self):
        return self.name


@dataclass(frozen=True)
class Apply(Expression):
    """Application of operator to args."""
    operator: Expression
    args: tuple = ()
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)
    source: str = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def display(self):
        return f"{self.operator.display()}({', '.join(arg.display() for arg in self.args)})"


def skip_space(program, pos=0):
    """Returns the offset of the first non-whitespace character at or after pos, or len(program) if there is none."""
    match = NON_SPACE.search(program, pos)
    return match.start() if match else len(program)


def parse_expression(program, pos=0):
    """Parses one expression, including any applications that follow it, starting at pos. Returns the expression and
    the offset just past it.
    """
    pos = skip_space(program, pos)

    match = STRING.match(program, pos)
    if match:
        expr = Literal(match.group(1), pos, match.end(), program)
    else:
        match = NUMBER.match(program, pos)
        if match:
            expr = Literal(number(match.group()), pos, match.end(), program)
        else:
            match = WORD.match(program, pos)
            if not match:
                raise EggSyntaxError(f"Unexpected syntax: {program[pos:]}", pos, len(program), program)
            expr = VariableRef(match.group(), pos, match.end(), program)

    return parse_apply(expr, program, match.end())


def parse_apply(expr, program, pos):
    """Parses the argument lists following expr, e.g. the "(1, 2)" in "+(1, 2)". Each argument list wraps the
    expression so far in another Apply.
    """
    pos = skip_space(program, pos)
    while pos < len(program) and program[pos] == "(":
        args = []
        pos = skip_space(program, pos + 1)

        while pos >= len(program) or program[pos] != ")":
            arg, pos = parse_expression(program, pos)
            args.append(arg)

            pos = skip_space(program, pos)
            if pos < len(program) and program[pos] == ",":
                pos = skip_space(program, pos + 1)
            elif pos >= len(program) or program[pos] != ")":
                raise EggSyntaxError("Expected ',' or ')'", pos, pos + 1, program)

        pos += 1
        expr = Apply(expr, args, expr.start, pos, program)
        pos = skip_space(program, pos)

    return expr, pos


def parse(program):
    """Parses program, which must be a single expression optionally surrounded by whitespace."""
    expr, pos = parse_expression(program)
    if skip_space(program, pos) < len(program):
        raise EggSyntaxError("Unexpected text after program", pos, len(program), program)
    return expr
