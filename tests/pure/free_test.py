import unittest

from workbench.pure.forms import parse_all
from workbench.pure.free import contains, difference, free_vars, to_set, union
from workbench.pure.lexical import Abstraction, Variable, term


class SetTestCase(unittest.TestCase):

    def test_to_set(self):
        cases = {
            (): (),
            ("b", "a", "b"): ("a", "b"),
            ("x1", "x", "y", "x"): ("x", "x1", "y"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, to_set(case), case)

    def test_contains(self):
        names = ("a", "c", "e", "g")
        for name in names:
            self.assertTrue(contains(names, name), name)
        for name in ["", "b", "d", "h", "ab"]:
            self.assertFalse(contains(names, name), name)
        self.assertFalse(contains((), "a"))

    def test_difference(self):
        cases = {
            (("a", "b", "c"), ("b",)): ("a", "c"),
            (("a", "b"), ()): ("a", "b"),
            ((), ("a",)): (),
            (("a", "b"), ("a", "b", "c")): (),
        }
        for (names, other), expected in cases.items():
            self.assertEqual(expected, difference(names, other))

    def test_union(self):
        cases = {
            (("a", "c"), ("b", "d")): ("a", "b", "c", "d"),
            (("a", "b"), ("a", "b")): ("a", "b"),
            ((), ("x",)): ("x",),
            (("y", "z"), ()): ("y", "z"),
            (("a", "x1"), ("x", "x1", "z")): ("a", "x", "x1", "z"),
        }
        for (names, other), expected in cases.items():
            self.assertEqual(expected, union(names, other))
            self.assertEqual(expected, union(other, names))


class FreeVarsTestCase(unittest.TestCase):

    def test_free_vars(self):
        self.assertEqual((), free_vars(Abstraction(("x",), Variable("x"))))
        self.assertEqual(("y",), free_vars(Abstraction(("x",), Variable("y"))))

        cases = {
            "x": ("x",),
            "(f b a b)": ("a", "b", "f"),
            "(λ x y (x y z))": ("z",),
            "(λ x x y)": ("y",),
            "((λ x x) x)": ("x",),
            "(λ f (f (λ f g) h))": ("g", "h"),
        }
        for case, expected in cases.items():
            form, = parse_all(case)
            self.assertEqual(expected, free_vars(term(form)), case)

    def test_error(self):
        form, = parse_all("()")
        self.assertRaises(ValueError, free_vars, term(form))


if __name__ == '__main__':
    unittest.main()
