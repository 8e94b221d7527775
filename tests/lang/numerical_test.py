import unittest

from dblc.lang.error import GenericException
from dblc.lang.numerical import cnumber, number
from dblc.pure.lexical import parse_term
from dblc.pure.term import Abstraction, Symbol


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, 14.2, True, "3", None]
        for case in should_fail:
            self.assertRaises(GenericException, cnumber, case)

        should_pass = {0: Abstraction("f", Abstraction("x", Symbol("x"))), 3: parse_term("λf.λx.(f (f (f x)))")}
        for case, result in should_pass.items():
            self.assertEqual(result, cnumber(case))

    def test_number(self):
        should_fail = ["λf.λx.(f f)", "λf.λx.((x f) x)", "λx.x", "λf.λf.(f f)", "λf.λx.f", "x", "(f x)"]
        for case in should_fail:
            self.assertIsNone(number(parse_term(case)), case)

        should_pass = {0: "λf.λx.x", 2: "λa.λb.(a (a b))", 3: "λf.λx.(f (f (f x)))"}
        for result, case in should_pass.items():
            self.assertEqual(result, number(parse_term(case)), case)

        for num in [0, 1, 7, 42]:
            self.assertEqual(num, number(cnumber(num)))


if __name__ == '__main__':
    unittest.main()
