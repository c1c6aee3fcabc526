"""Error handling for the lambda workbench.

Two kinds of errors exist. LambdaSyntaxErrors are grammar violations inside a single top-level form: they are raised
while building a term and caught at the form boundary (see pure/lexical.py), where they become Error terms that are
displayed next to their siblings. Everything else that reaches ErrorHandler is either a GenericException or assumed
to be an internal issue.
"""

import sys

from termcolor import colored


class LambdaSyntaxError(Exception):
    """Grammar violation in a form. start and end delimit the offending form in the source; end is None if the form
    runs to the end of the source.
    """

    def __init__(self, msg, form):
        super().__init__(msg)
        self.msg = msg
        self.start = form.start
        self.end = form.end

    @property
    def kind(self):
        return type(self).__name__


class UnmatchedParenthesis(LambdaSyntaxError):
    """List without a closing parenthesis."""


class ReservedNameMisuse(LambdaSyntaxError):
    """Lambda glyph used as a variable or parameter name."""


class MalformedAbstraction(LambdaSyntaxError):
    """Abstraction with too few terms or a list in parameter position."""


class MalformedApplication(LambdaSyntaxError):
    """Application with fewer than two terms."""


class EmptyList(LambdaSyntaxError):
    """List with no terms at all."""


class GenericException(Exception):
    """Templates an error/warning message for the host (command line or shell), as opposed to a grammar error that
    belongs to one form.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.internal = internal


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print workbench errors/warnings instead. Also
    prints reduction steps when verbose.
    """
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose

    @staticmethod
    def diagnose(source, start, end, warning=False):
        """Returns the source line containing start, with source[start:end] highlighted, bolded and underlined. If end
        is None or past the line, the highlight runs to the end of the line.
        """
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line_start = source.rfind("\n", 0, start) + 1
        line_end = source.find("\n", start)
        if line_end == -1:
            line_end = len(source)
        if end is None or end > line_end:
            end = line_end
        end = max(end, start + 1)

        line = source[line_start:line_end]
        col, end_col = start - line_start, end - line_start

        diagnosis = "  " + line[:col]
        diagnosis += colored(line[col:end_col], color, attrs=["bold"])
        diagnosis += line[end_col:] + "\n"

        diagnosis += "  " + " " * col
        diagnosis += colored("^" + "~" * (end_col - col - 1), color, attrs=["bold"])

        return diagnosis

    def report(self, source, error):
        """Prints an Error term together with the part of source it came from."""
        print(colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.message)
        if source:
            print(ErrorHandler.diagnose(source, error.start, error.end))

    def register_step(self, symbol, expr):
        """Prints a single step of a session if verbose."""
        if self.verbose:
            print(colored(f"{symbol} ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    def warn(self, msg, *exprs):
        """Generates and prints runtime warning message from msg, with exprs formatted into it."""
        error = GenericException(msg, exprs)
        print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

    def throw(self, error):
        """Prints error, which must be a GenericException, and exits if fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("term too deeply nested to reduce further, maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", (exc_type.__name__, str(exc_val)), internal=True))
            do_exit = True

        return not do_exit
