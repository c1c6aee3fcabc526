import io
import json
import unittest
from contextlib import redirect_stdout

from workbench.lang.error import ErrorHandler
from workbench.lang.session import NormalOrderReducer, StepEvaluator
from workbench.pure.forms import parse_all


OMEGA = "((λ x (x x)) (λ x (x x)))"


class NormalOrderReducerTestCase(unittest.TestCase):

    def test_step(self):
        form, = parse_all("((λ x y x) a b)")
        reducer = NormalOrderReducer(form)
        self.assertIsNone(reducer.error)

        renders = []
        while reducer.step():
            renders.append(reducer.render("..."))
        self.assertEqual(["...", "a"], renders)
        self.assertEqual(2, reducer.steps)
        self.assertFalse(reducer.step())

    def test_error(self):
        form, = parse_all("(λ x)")
        reducer = NormalOrderReducer(form)
        self.assertEqual("MalformedAbstraction", reducer.error.kind)
        self.assertFalse(reducer.reducible)
        self.assertFalse(reducer.step())
        self.assertEqual("error: abstraction not at least three terms", reducer.render("..."))


class StepEvaluatorTestCase(unittest.TestCase):

    def test_tick(self):
        evaluator = StepEvaluator()
        evaluator.tick("((λ x x) y)")
        self.assertEqual(["..."], evaluator.render())
        self.assertFalse(evaluator.done)

        evaluator.tick("((λ x x) y)")
        self.assertEqual(["y"], evaluator.render())
        self.assertTrue(evaluator.done)

        evaluator.tick("((λ x x) y)")
        self.assertEqual(["y"], evaluator.render())
        self.assertEqual(1, evaluator.reducers[0].steps)

    def test_terms_step_together(self):
        source = "((λ x x) a) ((λ x x) ((λ x x) b)) c"
        evaluator = StepEvaluator()
        evaluator.tick(source)
        self.assertEqual(["...", "...", "c"], evaluator.render())

        evaluator.tick(source)
        self.assertEqual(["a", "...", "c"], evaluator.render())

        evaluator.tick(source)
        self.assertEqual(["a", "b", "c"], evaluator.render())

    def test_source_change(self):
        evaluator = StepEvaluator()
        for __ in range(5):
            evaluator.tick(OMEGA)
        self.assertEqual(4, evaluator.reducers[0].steps)

        evaluator.tick("x " + OMEGA)
        self.assertEqual(["x", "..."], evaluator.render())
        self.assertEqual(0, evaluator.reducers[1].steps)

    def test_errors(self):
        evaluator = StepEvaluator()
        evaluator.run("() ((λ x x) y) (λ λ x)")
        self.assertEqual(["error: empty list", "y", "error: lambda in parameters"], evaluator.render())
        self.assertEqual("\n\n".join(evaluator.render()), str(evaluator))

    def test_run(self):
        evaluator = StepEvaluator()
        self.assertEqual(1, evaluator.run("((λ x y (x y)) y)"))
        self.assertEqual(["(λ y1 (y y1))"], evaluator.render())

        self.assertEqual(0, evaluator.run(""))
        self.assertEqual([], evaluator.render())

    def test_run_divergent(self):
        evaluator = StepEvaluator()
        self.assertEqual(25, evaluator.run(OMEGA + " ((λ x x) z)", 25))
        self.assertFalse(evaluator.done)
        self.assertEqual([StepEvaluator.PLACEHOLDER, "z"], evaluator.render())
        self.assertEqual(25, evaluator.reducers[0].steps)
        self.assertEqual(1, evaluator.reducers[1].steps)

    def test_deep_sibling(self):
        deep = "(f " * 400 + "x" + ")" * 400
        evaluator = StepEvaluator()
        evaluator.run(deep + " ((λ x x) y)")
        self.assertTrue(evaluator.done)
        self.assertEqual([deep, "y"], evaluator.render())

    def test_church_product(self):
        twenty = "(λ f x " + "(f " * 20 + "x" + ")" * 20 + ")"
        evaluator = StepEvaluator()
        evaluator.run(f"((λ m n f (m (n f))) {twenty} {twenty})", 5000)
        self.assertTrue(evaluator.done)
        self.assertEqual(["(λ f x " + "(f " * 400 + "x" + ")" * 400 + ")"], evaluator.render())

    def test_too_deep_isolated(self):
        depth = 6000
        deep = "(f " * depth + "x" + ")" * depth
        evaluator = StepEvaluator()
        evaluator.run(deep + " ((λ x x) y)")
        self.assertTrue(evaluator.done)

        too_deep, identity = evaluator.reducers
        self.assertEqual("RecursionError", too_deep.error.kind)
        self.assertEqual((0, len(deep)), (too_deep.error.start, too_deep.error.end))
        self.assertEqual(1, identity.steps)
        self.assertEqual("y", evaluator.render()[1])
        self.assertEqual("RecursionError", json.loads(evaluator.dump())[0]["kind"])

    def test_dump(self):
        evaluator = StepEvaluator()
        evaluator.tick("(λ x (x y)) ()")
        expected = [
            {
                "type": "abstraction",
                "args": ["x"],
                "expr": {
                    "type": "application",
                    "func": {"type": "variable", "variable": "x"},
                    "args": [{"type": "variable", "variable": "y"}],
                },
                "free": ["y"],
            },
            {"type": "error", "kind": "EmptyList", "message": "empty list", "start": 12, "end": 14},
        ]
        self.assertEqual(expected, json.loads(evaluator.dump()))
        self.assertIn("λ", evaluator.dump())

    def test_verbose(self):
        output = io.StringIO()
        with redirect_stdout(output):
            evaluator = StepEvaluator(ErrorHandler(verbose=True))
            evaluator.run("((λ x x) y)")
        self.assertIn("((λ x x) y)", output.getvalue())
        self.assertIn("β", output.getvalue())

        output = io.StringIO()
        with redirect_stdout(output):
            StepEvaluator(ErrorHandler()).run("((λ x x) y)")
        self.assertEqual("", output.getvalue())


if __name__ == '__main__':
    unittest.main()
