"""Session control for the workbench: stepwise normal-order reduction of every top-level term in a source text.

The host calls StepEvaluator.tick with the current source at whatever cadence it likes. A tick on new source throws
away all progress and rebuilds the terms; a tick on unchanged source advances each reducible term by one step. A
tick therefore does bounded work, even when a term has no normal form.
"""

import json
import sys
from contextlib import contextmanager

from workbench.pure.forms import parse_all
from workbench.pure.free import free_vars
from workbench.pure.lexical import term, too_deep
from workbench.pure.reduction import compress, expand, pretty, reduce, reducible


@contextmanager
def recursion_limit(limit):
    """Raises the interpreter's recursion limit to at least limit for the duration of the block."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def display(tree):
    return pretty(compress(tree))


def _as_dict(original):
    result = original.as_dict()
    if not original.is_error:
        result["free"] = list(free_vars(original))
    return result


class NormalOrderReducer:
    """Implements stepwise normal-order beta reduction of one top-level form. A term that grows too deep to work on,
    even with RECURSION_LIMIT, becomes an Error for this form only.
    """
    RECURSION_LIMIT = 5000

    def __init__(self, form):
        self.form = form
        self.steps = 0
        self.original = self.tree = too_deep(form)

        original = self._guarded(term, form)
        if original is not None:
            self.original = original  # as written, used for dumps
            self.tree = original if original.is_error else self._guarded(expand, original) or self.tree

    def _guarded(self, operation, *args):
        """Returns operation(*args), run with room for deep terms. If there isn't enough room, self.tree becomes an
        Error and None is returned.
        """
        with recursion_limit(NormalOrderReducer.RECURSION_LIMIT):
            try:
                return operation(*args)
            except RecursionError:
                self.tree = too_deep(self.form)
                return None

    @property
    def error(self):
        """The Error this form ended up as, if any: a grammar error or a term too deep to work on."""
        return self.tree if self.tree.is_error else None

    @property
    def reducible(self):
        return bool(self._guarded(reducible, self.tree))

    def step(self):
        """Reduces self.tree by one step, if it can be reduced. Returns whether or not it was."""
        if not self.reducible:
            return False

        reduced = self._guarded(reduce, self.tree)
        if reduced is None:
            return False
        self.tree = reduced
        self.steps += 1
        return True

    def display(self):
        """self.tree compressed and pretty-printed."""
        text = self._guarded(display, self.tree)
        return str(self.tree) if text is None else text

    def render(self, placeholder):
        if self.reducible:
            return placeholder
        return self.display()

    def as_dict(self):
        """Structured dump of the term as written, with its free variables."""
        result = self._guarded(_as_dict, self.original)
        return self.tree.as_dict() if result is None else result

    def __repr__(self):
        return f"NormalOrderReducer({self.display()!r}, steps={self.steps})"


class StepEvaluator:
    """Governs a stepping session over a source text. error_handler, if given, is told about every step."""
    PLACEHOLDER = "..."
    STEP_LIMIT = 1000

    def __init__(self, error_handler=None):
        self.error_handler = error_handler
        self.source = None
        self.reducers = []

    @property
    def done(self):
        """Whether or not every term is in normal form (or is an error)."""
        return not any(reducer.reducible for reducer in self.reducers)

    def tick(self, source):
        """Reloads if source changed since the last tick, else advances every term by one step."""
        if source != self.source:
            self.load(source)
            return

        for reducer in self.reducers:
            if reducer.step() and self.error_handler is not None:
                self.error_handler.register_step("β", reducer.display())

    def load(self, source):
        """Discards all progress and rebuilds one reducer per top-level form of source."""
        self.source = source
        self.reducers = [NormalOrderReducer(form) for form in parse_all(source)]

        if self.error_handler is not None:
            for reducer in self.reducers:
                if reducer.error is None:
                    self.error_handler.register_step("⟳", reducer.display())

    def run(self, source, steps=None):
        """Ticks source until every term is normal or steps ticks were spent after loading. Returns the number of
        reduction ticks spent.
        """
        if steps is None:
            steps = StepEvaluator.STEP_LIMIT

        self.tick(source)
        ticks = 0
        while ticks < steps and not self.done:
            self.tick(source)
            ticks += 1
        return ticks

    def render(self):
        """Returns one line per top-level term: the placeholder while it is still reducible, else the term."""
        return [reducer.render(StepEvaluator.PLACEHOLDER) for reducer in self.reducers]

    def dump(self):
        """Returns every top-level term as written, with free variables, as JSON."""
        return json.dumps([reducer.as_dict() for reducer in self.reducers], indent=2, ensure_ascii=False)

    def __str__(self):
        return "\n\n".join(self.render())
