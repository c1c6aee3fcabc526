"""Uses the workbench to evaluate λ-terms given on the command line, or runs it in interactive mode. Also uses error
handling context manager. Called from workbench executable script.
"""

import argparse

from workbench.lang.corrector import prepare
from workbench.lang.error import ErrorHandler, GenericException
from workbench.lang.session import StepEvaluator
from workbench.lang.shell import Shell, show


def evaluate(source, steps, as_json, error_handler):
    """Evaluates source for at most steps ticks and prints the result."""
    corrected = prepare(source)
    if corrected is None:
        raise GenericException("'{}' has unbalanced parentheses", source)

    evaluator = StepEvaluator(error_handler)
    evaluator.run(corrected, steps)

    if as_json:
        print(evaluator.dump())
    else:
        show(evaluator, error_handler)


def main():
    """Runs the workbench. Called from workbench executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(description="Untyped lambda calculus workbench")
        parser.add_argument("source", help="λ-terms to evaluate (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--steps", type=int, default=StepEvaluator.STEP_LIMIT,
                            help="maximum number of reduction steps per term")
        parser.add_argument("--json", action="store_true", help="print parsed terms and free variables as JSON")
        parser.add_argument("--verbose", action="store_true", help="print every reduction step")
        args = parser.parse_args()

        error_handler.verbose = args.verbose

        if args.source is not None:
            evaluate(args.source, args.steps, args.json, error_handler)
        else:
            error_handler.fatal = False
            Shell(StepEvaluator(error_handler), args.steps).cmdloop()


if __name__ == "__main__":
    main()
