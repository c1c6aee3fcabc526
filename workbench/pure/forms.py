"""S-expression reader: turns raw source text into a forest of span-tagged forms.

A form is either an atom or a parenthesized list of forms. Every form remembers where it came from as a half-open
span [start, end) into the source, so that errors found later can point back at the offending text. The reader is
total: it never raises, and malformed input still yields best-effort forms. Whether the forms make sense as lambda
terms is decided later, in pure/lexical.py.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from workbench.grammar.pure import CLOSE, OPEN


NON_SPACE = re.compile(r"\S")
ATOM_END = re.compile(r"[\s()]")


class Form(ABC):
    """Superclass for atoms and lists. A list whose closing parenthesis is missing has end=None."""
    start: int
    end: Optional[int]

    @property
    @abstractmethod
    def is_atom(self):
        """Whether or not this form is an atom."""

    @property
    def terminated(self):
        """Whether or not this form ends somewhere in the source. Atoms always do."""
        return self.end is not None


@dataclass(frozen=True)
class Atom(Form):
    value: str
    start: int
    end: int

    @property
    def is_atom(self):
        return True


@dataclass(frozen=True)
class ListForm(Form):
    children: Tuple[Form, ...]
    start: int
    end: Optional[int]

    @property
    def is_atom(self):
        return False


def balanced(text):
    """Checks if parentheses are balanced within text."""
    count = 0
    for char in text:
        if char == OPEN:
            count += 1
        elif char == CLOSE:
            count -= 1
            if count < 0:
                return False
    return count == 0


def match(text, start):
    """Returns the index of the closing parenthesis that matches the opening parenthesis at start, or None if the text
    ends first.
    """
    depth = 0
    for idx in range(start + 1, len(text)):
        if text[idx] == OPEN:
            depth += 1
        elif text[idx] == CLOSE:
            if depth == 0:
                return idx
            depth -= 1
    return None


def parse(text, start):
    """Returns the form starting at or after start, or None if there is no form there (end of text, or a closing
    parenthesis ending the enclosing list).
    """
    forms = _read(text, start, count=1)
    return forms[0] if forms else None


def parse_atom(text, start):
    """Returns the atom starting at start, which extends to the next whitespace, parenthesis or end of text."""
    found = ATOM_END.search(text, start)
    end = len(text) if found is None else found.start()
    return Atom(text[start:end], start, end)


def parse_all(text):
    """Returns a tuple of every top-level form in text, in source order."""
    return tuple(_read(text, 0))


def _read(text, index, count=None):
    """Reads consecutive forms from index until the text ends, a closing parenthesis ends the enclosing list, or count
    forms were read. Lists still open are kept on a stack of (start, children), so nesting depth costs no recursion.
    Lists left open when the text ends are unterminated, and nothing can follow them.
    """
    forms = []
    stack = []

    while count is None or len(forms) < count:
        found = NON_SPACE.search(text, index)
        if found is None:
            break

        pos = found.start()
        if text[pos] == OPEN:
            stack.append((pos, []))
            index = pos + 1
            continue
        elif text[pos] == CLOSE:
            if not stack:
                break
            start, children = stack.pop()
            form = ListForm(tuple(children), start, pos + 1)
        else:
            form = parse_atom(text, pos)

        index = form.end
        (stack[-1][1] if stack else forms).append(form)

    while stack:
        start, children = stack.pop()
        (stack[-1][1] if stack else forms).append(ListForm(tuple(children), start, None))
    return forms
