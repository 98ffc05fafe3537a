import contextlib
import io
import os
import re
import tempfile
import unittest

from monkey.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write(self, source):
        path = os.path.join(self.tmp_dir.name, "program.mk")
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(io.StringIO()):
            main(list(argv))
        return re.sub(r"\x1b\[[0-9;]*m", "", stdout.getvalue())

    def test_run_file(self):
        cases = {
            "let a = 2;\na * 21\n": "42\n",
            "let greet = fn(name) { \"hello \" + name };\ngreet(\"monkey\")": "hello monkey\n",
            "let f = fn() {};\nf()": "",
            "": "",
        }
        for source, expected in cases.items():
            self.assertEqual(expected, self.run_main(self.write(source)), source)

    def test_tokens(self):
        output = self.run_main("--tokens", self.write("x + 1"))
        self.assertEqual("IDENT('x')\n+('+')\nINT('1')\n", output)

    def test_ast(self):
        output = self.run_main("--ast", self.write("1"))
        self.assertEqual("Program(expr='1', nodes=[\n"
                         "    ExpressionStatement(expr='1', nodes=[\n"
                         "        IntegerLiteral(expr='1')\n"
                         "    ])\n"
                         "])\n", output)

    def test_errors(self):
        cases = {
            "let x 5;": "error: parser has 1 error(s):\n\texpected next token to be =, got INT instead",
            "let x = 5;\nx + true": "error: type mismatch: INTEGER + BOOLEAN",
            "add(1, 2": "error: argument list not closed by ')', got EOF instead",
            "add(1, )": "error: malformed argument list: no prefix parse function for ) found",
            "let sum = fn(n) { n + sum(n + 1) };\nsum(1)": "error: maximum recursion depth exceeded",
        }
        for source, expected in cases.items():
            stdout = io.StringIO()
            with self.assertRaises(SystemExit) as ctx, contextlib.redirect_stdout(stdout):
                main([self.write(source)])
            self.assertEqual(1, ctx.exception.code, source)
            self.assertIn(expected, re.sub(r"\x1b\[[0-9;]*m", "", stdout.getvalue()), source)

    def test_bad_arguments(self):
        should_fail = [["--tokens"], ["--ast"], ["--tokens", "--ast", "x.mk"]]
        for argv in should_fail:
            with self.assertRaises(SystemExit) as ctx:
                self.run_main(*argv)
            self.assertEqual(2, ctx.exception.code, argv)

        with self.assertRaises(SystemExit) as ctx:
            self.run_main(os.path.join(self.tmp_dir.name, "missing.mk"))
        self.assertEqual(1, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
