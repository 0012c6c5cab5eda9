import unittest

from debruijn.lang.error import GenericException, ParseError
from debruijn.pure.context import Context
from debruijn.pure.lexical import Abstraction, Application, TermParser, Variable, convert, parse
from debruijn.pure.nameless import App, Lam, Var


class TermParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "x": Variable("x"),
            "λx x": Abstraction("x", Variable("x")),
            "(f a)": Application(Variable("f"), Variable("a")),
            "  λx   (x   x) ": Abstraction("x", Application(Variable("x"), Variable("x"))),
            "λfoo foo": Abstraction("foo", Variable("foo")),
            "λx(x x)": Abstraction("x", Application(Variable("x"), Variable("x"))),
            "(λx x y)": Application(Abstraction("x", Variable("x")), Variable("y")),
            "((a b) (c d))": Application(Application(Variable("a"), Variable("b")),
                                         Application(Variable("c"), Variable("d"))),
            "λx λy x": Abstraction("x", Abstraction("y", Variable("x"))),
            "λx // identity\n x": Abstraction("x", Variable("x")),
            "x_1'": Variable("x_1'"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_parse_errors(self):
        # source: offset of the offending character
        should_raise = {
            "": 0,
            "   ": 3,
            "λ": 1,
            "λx": 2,
            "(x y": 4,
            "(x y z)": 5,
            "(x)": 2,
            "λ(x y)": 1,
            ")": 0,
            "x y": 2,
            "λx x)": 4,
        }
        for case, start in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertEqual(start, context.exception.start, case)
            self.assertEqual(case, context.exception.expr, case)

    def test_parse_error_messages_are_distinct(self):
        cases = ["λx", "λ", "(x y", "λ(x y)", "x y"]
        messages = set()
        for case in cases:
            with self.assertRaises(ParseError) as context:
                parse(case)
            messages.add(str(context.exception))
        self.assertEqual(len(cases), len(messages))

    def test_parse_error_is_generic_exception(self):
        self.assertRaises(GenericException, parse, "(")

    def test_variable_start(self):
        term = parse("(f a)")
        self.assertEqual(1, term.func.start)
        self.assertEqual(3, term.argm.start)

    def test_parser_cursor(self):
        parser = TermParser("λx (x x)")
        parser.parse()
        self.assertEqual(len("λx (x x)"), parser.index)


class LambdaTermTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            "λx x": "λx x",
            "  λx   (x   x) ": "λx (x x)",
            "(λx x y)": "(λx x y)",
            "λx λy λz (x (y z))": "λx λy λz (x (y z))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)
            self.assertEqual(parse(case), parse(str(parse(case))), case)

    def test_equality(self):
        self.assertEqual(Variable("x", 0), Variable("x", 5))
        self.assertNotEqual(Variable("x"), Variable("y"))
        self.assertNotEqual(Abstraction("x", Variable("x")), Abstraction("y", Variable("y")))
        self.assertNotEqual(Variable("x"), Abstraction("x", Variable("x")))
        self.assertEqual(hash(parse("λx (x y)")), hash(parse("λx   (x y)")))

    def test_free_variables(self):
        cases = {
            "λx x": [],
            "λx (x y)": ["y"],
            "(λx x x)": ["x"],
            "((a b) λa (a b))": ["a", "b", "b"],
            "λx λx x": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, [var.name for var in parse(case).free_variables()], case)

        self.assertEqual([6], [var.start for var in parse("(λx x x)").free_variables()])

    def test_display(self):
        expected = ("Abstraction(expr='λx (x y)', nodes=[\n"
                    "    Application(expr='(x y)', nodes=[\n"
                    "        Variable(expr='x'),\n"
                    "        Variable(expr='y')\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, parse("λx (x y)").display())

    def test_repr(self):
        self.assertEqual("Application('(f a)')", repr(parse("(f a)")))


class ConvertTestCase(unittest.TestCase):

    def test_convert(self):
        cases = {
            "λx x": "λ0",
            "λx λy x": "λλ1",
            "λx λy y": "λλ0",
            "λx λy λz (x (y z))": "λλλ(2 (1 0))",
            "λf λx (f (f x))": "λλ(1 (1 0))",
            "λx λy λz ((x z) (y z))": "λλλ((2 0) (1 0))",
            "λf λg λx (f (g x))": "λλλ(2 (1 0))",
            "λx λy λz λw ((x y) (z w))": "λλλλ((3 2) (1 0))",
            "λx z": "λ1",
            "λx λy (z x)": "λλ(2 1)",
            "(λx x y)": "(λ0 0)",
            "x": "0",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(convert(parse(case))), case)

    def test_shadowing(self):
        self.assertEqual(Lam(Lam(Var(0))), parse("λx λx x").convert())
        self.assertEqual("λλ(0 0)", str(parse("λx λx (x x)").convert()))
        self.assertEqual("λ(λ0 0)", str(parse("λx (λx x x)").convert()))

    def test_convert_with_context(self):
        cases = {
            "x": Var(1),
            "y": Var(0),
            "z": Var(2),
            "λy (x y)": Lam(App(Var(2), Var(0))),
            "λw z": Lam(Var(3)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, convert(parse(case), ["y", "x"]), case)
            self.assertEqual(expected, convert(parse(case), Context(["y", "x"])), case)

    def test_convert_does_not_mutate_context(self):
        context = Context(["a"])
        parse("λx λy (x a)").convert(context)
        self.assertEqual(["a"], list(context))

    def test_closed_terms(self):
        cases = ["λx x", "λx λy λz ((x z) (y z))", "λf (λx (f (x x)) λx (f (x x)))", "λx λx λy (y x)"]
        for case in cases:
            self.assertTrue(parse(case).convert().is_closed(), case)

        should_fail = ["x", "λx y", "(λx x y)"]
        for case in should_fail:
            self.assertFalse(parse(case).convert().is_closed(), case)


if __name__ == '__main__':
    unittest.main()
