"""Pure lambda calculus abstract syntax trees, built from the forms read by pure/forms.py.

The `pure` directory contains pure lambda calculus parsing, analysis and reduction- not the editing and stepping
machinery around it, which lives in `lang`. For the accepted grammar, see grammar/pure.py.

A LambdaTerm is one of Variable, Abstraction, Application or Error. Terms are immutable and never share children, so
a tree can be rebuilt or rewritten without worrying about who else holds it. Abstraction params and Application
arguments are tuples; after expansion (see pure/reduction.py) both hold exactly one element.

Building is fail-fast: the first grammar violation found depth-first, left to right, raises a LambdaSyntaxError that
unwinds the whole top-level form. term() catches it and returns an Error in place of that form.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from workbench.grammar.pure import LAMBDA
from workbench.lang.error import (EmptyList, LambdaSyntaxError, MalformedAbstraction, MalformedApplication,
                                  ReservedNameMisuse, UnmatchedParenthesis)


class LambdaTerm(ABC):
    """Represents a λ-term: variable, abstraction, application, or a form that failed to be one."""

    @abstractmethod
    def as_dict(self):
        """Returns this term as nested JSON-serializable dicts."""

    @property
    def is_error(self):
        return False


@dataclass(frozen=True)
class Variable(LambdaTerm):
    name: str

    def as_dict(self):
        return {"type": "variable", "variable": self.name}

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    params: Tuple[str, ...]
    body: LambdaTerm

    def as_dict(self):
        return {"type": "abstraction", "args": list(self.params), "expr": self.body.as_dict()}

    def __str__(self):
        return pretty(self)


@dataclass(frozen=True)
class Application(LambdaTerm):
    function: LambdaTerm
    arguments: Tuple[LambdaTerm, ...]

    def as_dict(self):
        args = [arg.as_dict() for arg in self.arguments]
        return {"type": "application", "func": self.function.as_dict(), "args": args}

    def __str__(self):
        return pretty(self)


@dataclass(frozen=True)
class Error(LambdaTerm):
    """A top-level form that is not valid grammar. kind is the name of the LambdaSyntaxError subclass raised."""
    kind: str
    message: str
    start: int
    end: Optional[int]

    @classmethod
    def from_exception(cls, error):
        return cls(error.kind, error.msg, error.start, error.end)

    @property
    def is_error(self):
        return True

    def as_dict(self):
        return {"type": "error", "kind": self.kind, "message": self.message, "start": self.start, "end": self.end}

    def __str__(self):
        return f"error: {self.message}"


def pretty(term):
    """(λ x y body), (f a b) or the variable name. Recurses in Python only, so that deep terms are bounded by the
    recursion limit alone.
    """
    if isinstance(term, Abstraction):
        return f"({LAMBDA} {' '.join(term.params)} {pretty(term.body)})"
    elif isinstance(term, Application):
        return "(" + " ".join([pretty(node) for node in (term.function, *term.arguments)]) + ")"
    return str(term)


def is_lambda(form):
    """Whether or not form is the atom λ."""
    return form.is_atom and form.value == LAMBDA


def term(form):
    """Returns the LambdaTerm for form, or an Error describing the first grammar violation in it."""
    try:
        return generate_tree(form)
    except LambdaSyntaxError as error:
        return Error.from_exception(error)
    except RecursionError:
        return too_deep(form)


def too_deep(form):
    """Error for a form nested deeper than the interpreter can recurse."""
    return Error(RecursionError.__name__, "too deeply nested, maximum recursion depth exceeded", form.start, form.end)


def generate_tree(form):
    """Converts form to the proper LambdaTerm type, raises a LambdaSyntaxError if form is not a valid λ-term."""
    if form.is_atom:
        return variable(form)
    elif not form.terminated:
        raise UnmatchedParenthesis("unmatched parenthesis", form)
    elif not form.children:
        raise EmptyList("empty list", form)
    elif is_lambda(form.children[0]):
        return abstraction(form)
    return application(form)


def variable(form):
    if is_lambda(form):
        raise ReservedNameMisuse("variable named lambda", form)
    return Variable(form.value)


def abstraction(form):
    """(λ p1 ... pn body), n >= 1."""
    if len(form.children) < 3:
        raise MalformedAbstraction("abstraction not at least three terms", form)

    __, *params, body = form.children
    for param in params:
        if not param.is_atom:
            raise MalformedAbstraction("list in parameters", param)
        elif is_lambda(param):
            raise ReservedNameMisuse("lambda in parameters", param)

    return Abstraction(tuple(param.value for param in params), generate_tree(body))


def application(form):
    """(f a1 ... an), n >= 1."""
    if len(form.children) < 2:
        raise MalformedApplication("application not at least two terms", form)

    function, *arguments = [generate_tree(child) for child in form.children]
    return Application(function, tuple(arguments))
