"""Handles interactive/command-line mode for the workbench. Uses cmd as backend."""

import cmd

from workbench.lang.corrector import prepare
from workbench.lang.session import StepEvaluator


def show(evaluator, error_handler):
    """Prints one paragraph per term of evaluator, errors with their position in the source."""
    for idx, (reducer, line) in enumerate(zip(evaluator.reducers, evaluator.render())):
        if idx:
            print()
        if reducer.error is not None:
            error_handler.report(evaluator.source, reducer.error)
            continue

        print(line)
        if reducer.reducible:
            error_handler.warn("'{}' still reducible after {} steps", str(reducer.original), reducer.steps)


class Shell(cmd.Cmd):
    """Lambda calculus workbench shell."""
    intro = "Lambda calculus workbench :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, evaluator, steps=StepEvaluator.STEP_LIMIT, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.evaluator = evaluator
        self.error_handler = evaluator.error_handler
        self.steps = steps

        self._tmp_line = ""

    def default(self, line):
        """Evaluates arbitrary source. Lines are joined while parentheses are left open."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if line.count("(") > line.count(")"):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            source = prepare(line)  # pasted all at once: balanced or refused
            if source is None:
                self.error_handler.warn("'{}' has unbalanced parentheses", line.strip())
                return

            self.evaluator.run(source, self.steps)
            self.show()

    def do_step(self, arg):
        """step [N]: advances the current source by N steps (default 1)."""
        with self.error_handler:
            if self.evaluator.source is None:
                self.error_handler.warn("nothing to step")
                return

            try:
                count = int(arg) if arg else 1
            except ValueError:
                self.error_handler.warn("step expects a number, got '{}'", arg)
                return

            for __ in range(count):
                if self.evaluator.done:
                    break
                self.evaluator.tick(self.evaluator.source)
            self.show()

    def do_dump(self, arg):
        """Prints the current terms as JSON, with their free variables."""
        print(self.evaluator.dump())

    def do_show(self, arg):
        """Prints the current terms."""
        self.show()

    def show(self):
        show(self.evaluator, self.error_handler)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambda calculus workbench!\n\n"
              "Terms are written as S-expressions: 'x' is a variable, '(λ x y body)' is an \n"
              "abstraction and '(f a b)' is an application. Type '\\' for 'λ'.\n\n"
              "Try it out by typing '((\\ x x) y)'. This will apply the identity to 'y', giving \n"
              "'y' as the result. Terms are reduced in normal order, one step at a time: type \n"
              "'step 10' to keep going on a term that is still reducible, or 'dump' to see \n"
              "the parsed terms and their free variables.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits the workbench."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits the workbench."""
        return True
