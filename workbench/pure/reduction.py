"""Normal-order beta reduction with capture-avoiding substitution.

Reduction works on expanded terms, where every Abstraction binds exactly one parameter and every Application has
exactly one argument: (λ x y body) becomes (λ x (λ y body)) and (f a b) becomes ((f a) b). compress undoes this for
display. Error terms pass through expand, compress, reducible and reduce untouched.

reduce performs exactly one step, so that a term without a beta normal form, such as ((λ x (x x)) (λ x (x x))), can
be stepped for as long as the caller likes without ever hanging it.

Sources: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR,
         https://en.wikipedia.org/wiki/Lambda_calculus#Capture-avoiding_substitutions
"""

from workbench.pure.free import contains, free_vars, union
from workbench.pure.lexical import Abstraction, Application, Error, Variable, pretty


def expand(term):
    """Curries term: multi-parameter abstractions become right-nested single-parameter abstractions, and
    multi-argument applications become left-associated single-argument applications.
    """
    if isinstance(term, Abstraction):
        body = expand(term.body)
        for param in reversed(term.params):
            body = Abstraction((param,), body)
        return body
    elif isinstance(term, Application):
        result = expand(term.function)
        for arg in term.arguments:
            result = Application(result, (expand(arg),))
        return result
    elif isinstance(term, (Variable, Error)):
        return term
    raise TypeError(f"'{term!r}' is not a LambdaTerm")


def compress(term):
    """Inverse of expand for display: merges chained abstractions and left-nested applications."""
    if isinstance(term, Abstraction):
        body = compress(term.body)
        if isinstance(body, Abstraction):
            return Abstraction(term.params + body.params, body.body)
        return Abstraction(term.params, body)
    elif isinstance(term, Application):
        function = compress(term.function)
        arguments = tuple([compress(arg) for arg in term.arguments])
        if isinstance(function, Application):
            return Application(function.function, function.arguments + arguments)
        return Application(function, arguments)
    elif isinstance(term, (Variable, Error)):
        return term
    raise TypeError(f"'{term!r}' is not a LambdaTerm")


def make_fresh(name, avoid):
    """Returns name if it is not in the sorted set avoid, else the first of name1, name2, ... that isn't."""
    if not contains(avoid, name):
        return name

    suffix = 1
    while contains(avoid, f"{name}{suffix}"):
        suffix += 1
    return f"{name}{suffix}"


def _single(abstraction):
    if not isinstance(abstraction, Abstraction) or len(abstraction.params) != 1:
        raise ValueError(f"'{abstraction}' is not an expanded abstraction")
    return abstraction.params[0], abstraction.body


def alpha(abstraction, new_name):
    """Renames the parameter of an expanded abstraction to new_name. new_name should not be free in the body."""
    param, body = _single(abstraction)
    return Abstraction((new_name,), substitute(body, param, Variable(new_name)))


def substitute(term, var, new_term):
    """Replaces every free occurrence of var in the expanded term with new_term. Binders that would capture a free
    variable of new_term are renamed first.
    """
    if isinstance(term, Variable):
        return new_term if term.name == var else term

    elif isinstance(term, Abstraction):
        param, body = _single(term)
        if param == var:
            return term  # var is shadowed, so nothing below is free

        replacing = free_vars(new_term)
        if contains(replacing, param):
            fresh = make_fresh(param, union(replacing, free_vars(body)))
            term = alpha(term, fresh)
            param, body = fresh, term.body
        return Abstraction((param,), substitute(body, var, new_term))

    elif isinstance(term, Application):
        return Application(substitute(term.function, var, new_term),
                           tuple([substitute(arg, var, new_term) for arg in term.arguments]))

    elif isinstance(term, Error):
        return term
    raise TypeError(f"'{term!r}' is not a LambdaTerm")


def is_redex(term):
    """Applications are the only terms that can be redexes: an Application is a redex if its function is an
    Abstraction.
    """
    return isinstance(term, Application) and isinstance(term.function, Abstraction)


def beta(application):
    """Contracts the redex ((λ x body) arg) to body with x replaced by arg."""
    if not is_redex(application) or len(application.arguments) != 1:
        raise ValueError(f"'{application}' is not an expanded redex")

    param, body = _single(application.function)
    return substitute(body, param, application.arguments[0])


def reducible(term):
    """Whether or not term contains a redex anywhere."""
    if isinstance(term, Abstraction):
        return reducible(term.body)
    elif isinstance(term, Application):
        if is_redex(term) or reducible(term.function):
            return True
        for arg in term.arguments:
            if reducible(arg):
                return True
        return False
    elif isinstance(term, (Variable, Error)):
        return False
    raise TypeError(f"'{term!r}' is not a LambdaTerm")


def reduce(term):
    """Performs one normal-order (leftmost-outermost) reduction step on the expanded term. Returns term itself if it
    is already in normal form.
    """
    reduced = _step(term)
    return term if reduced is None else reduced


def _step(term):
    """Returns term after one normal-order step, or None if term is in normal form."""
    if isinstance(term, Abstraction):
        body = _step(term.body)
        return None if body is None else Abstraction(term.params, body)

    elif isinstance(term, Application):
        if is_redex(term):
            return beta(term)

        function = _step(term.function)
        if function is not None:
            return Application(function, term.arguments)

        for idx, arg in enumerate(term.arguments):
            reduced = _step(arg)
            if reduced is not None:
                return Application(term.function, term.arguments[:idx] + (reduced,) + term.arguments[idx + 1:])
        return None

    elif isinstance(term, (Variable, Error)):
        return None
    raise TypeError(f"'{term!r}' is not a LambdaTerm")
