"""Keeps source text well-bracketed while it is being typed.

correct() looks at one edit at a time: the text before it, the text after it and where the cursor ended up. Typing
'(' also types its ')', typing '\\' types 'λ' instead, and deleting '(' also deletes its ')'. Anything that would leave
the parentheses unbalanced is refused, so that the text handed to the reader always has its lists closed.

Editor is the context object a host editing surface owns: it remembers the last corrected state, which correct()
needs as its "before".
"""

from dataclasses import dataclass

from workbench.grammar.pure import CLOSE, LAMBDA, OPEN, SHORTHAND
from workbench.pure.forms import balanced, match


@dataclass(frozen=True)
class Correction:
    text: str
    cursor: int


@dataclass(frozen=True)
class EditorState:
    text: str = ""
    cursor_start: int = 0
    cursor_end: int = 0

    def __post_init__(self):
        if not 0 <= self.cursor_start <= self.cursor_end <= len(self.text):
            raise ValueError(f"selection [{self.cursor_start}, {self.cursor_end}] outside of '{self.text}'")


def splice(outer, inner, start, end=None):
    """Returns outer with outer[start:end] replaced by inner. If end is None, inner is inserted at start."""
    return outer[:start] + inner + outer[start if end is None else end:]


def single_insertion(before, after, index):
    """Whether or not after is before with exactly one character inserted at index."""
    return (index >= 0
            and len(before) + 1 == len(after)
            and before[:index] == after[:index]
            and before[index:] == after[index + 1:])


def single_deletion(before, after, index):
    """Whether or not after is before with exactly one character deleted at index."""
    return single_insertion(after, before, index)


def correct(before, after, cursor):
    """Returns a Correction of after, given the previous (balanced) text before and the cursor position in after."""
    if single_insertion(before, after, cursor - 1):
        char = after[cursor - 1]
        if char == SHORTHAND:
            return Correction(splice(after, LAMBDA, cursor - 1, cursor), cursor)
        elif char == OPEN:
            return Correction(splice(after, CLOSE, cursor), cursor)
        elif char == CLOSE:
            if after[cursor:cursor + 1] == CLOSE:
                return Correction(before, cursor)  # typed over an existing ')'
            return Correction(before, cursor - 1)
        return Correction(after, cursor)

    elif single_deletion(before, after, cursor):
        char = before[cursor]
        if char == OPEN:
            end = match(before, cursor)
            if end is None:
                return Correction(after, cursor)
            return Correction(before[:cursor] + before[cursor + 1:end] + before[end + 1:], cursor)
        elif char == CLOSE:
            return Correction(before, cursor)  # only removed along with its '('
        return Correction(after, cursor)

    elif balanced(after):
        return Correction(after.replace(SHORTHAND, LAMBDA), cursor)
    return Correction(before, max(0, len(before) - (len(after) - cursor)))


def prepare(text):
    """Returns a whole source given at once, such as a pasted line or a command-line argument, with every '\\' typed as
    'λ'. Returns None if its parentheses are unbalanced.
    """
    if not balanced(text):
        return None
    return text.replace(SHORTHAND, LAMBDA)


class Editor:
    """Editing session: applies correct() to every edit, starting from text."""

    def __init__(self, text=""):
        self.state = EditorState(text, len(text), len(text))

    @property
    def text(self):
        return self.state.text

    def edit(self, text, cursor):
        """Registers an edit that produced text with the cursor at cursor. Returns the corrected EditorState."""
        correction = correct(self.state.text, text, cursor)
        self.state = EditorState(correction.text, correction.cursor, correction.cursor)
        return self.state
