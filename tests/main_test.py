import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from dblc.main import main


class MainTestCase(unittest.TestCase):

    def run_main(self, program, *args):
        """Runs main with program on stdin, returns (stdout, stderr, exit code)."""
        out, err = io.StringIO(), io.StringIO()
        code = 0
        with mock.patch("sys.stdin", io.StringIO(program)), redirect_stdout(out), redirect_stderr(err):
            try:
                main(list(args))
            except SystemExit as error:
                code = error.code
        return out.getvalue(), err.getvalue(), code

    def test_scenarios(self):
        cases = {
            "MAIN = ((\\x.x) (\\y.y))": "λa.a\n",
            "MAIN = ((\\x.\\y.x) (\\z.z))": "λa.λb.b\n",
            "ID = \\x.x\nMAIN = (ID (ID ID))\n": "λa.a\n",
        }
        for case, expected in cases.items():
            out, err, code = self.run_main(case)
            self.assertEqual((expected, "", 0), (out, err, code), case)

    def test_errors(self):
        cases = {
            "MAIN = x": "is not bound by any abstraction",
            "ID = \\x.x": "no definition for",
            "MAIN = (ID ID)": "refers to undefined",
            "MAIN = (x y))": "has trailing",
            "MAIN = \\x.(x y)": "is not bound by any abstraction",
        }
        for case, expected in cases.items():
            out, err, code = self.run_main(case)
            self.assertEqual(("", 1), (out, code), case)
            self.assertIn("error: ", err, case)
            self.assertIn(expected, err, case)

    def test_allow_free(self):
        out, err, code = self.run_main("MAIN = \\x.(x y)", "--allow-free")
        self.assertEqual(("λa.(a y)\n", 0), (out, code))

    def test_numerals(self):
        program = "SUCC = \\n.\\f.\\x.(f ((n f) x))\nMAIN = (SUCC 2)"
        self.assertEqual("3\n", self.run_main(program, "--numerals")[0])
        self.assertEqual("λa.λb.(a (a (a b)))\n", self.run_main(program.replace("2", "\\f.\\x.(f (f x))"))[0])

    def test_deep_normal_form(self):
        program = "MUL = \\m.\\n.\\f.(m (n f))\nHUN = ((MUL 10) 10)\nMAIN = ((MUL HUN) 10)"
        self.assertEqual(("1000\n", "", 0), self.run_main(program, "--numerals"))

    def test_verbose(self):
        out, err, code = self.run_main("ID = \\x.x\nMAIN = (ID (ID ID))", "-v")
        self.assertEqual("λa.a\n", out)
        self.assertEqual(2, err.count("β "))
        self.assertIn("after 2 β-reductions", err)

    def test_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "prog.lc")
            with open(path, "w", encoding="utf-8") as file:
                file.write("// constant function\nK = λx.λy.x\nMAIN = (K λz.z)\n")

            out, err, code = self.run_main("", path)
            self.assertEqual(("λa.λb.b\n", 0), (out, code))

            out, err, code = self.run_main("", os.path.join(directory, "missing.lc"))
            self.assertEqual(1, code)
            self.assertIn("could not be opened", err)

    def test_traceback(self):
        out, err, code = self.run_main("ID = \\x.x\nMAIN = (ID NOPE)")
        self.assertEqual(1, code)
        self.assertIn("File '<stdin>', line 2:", err)


if __name__ == '__main__':
    unittest.main()
