import io
import re
import unittest

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.errors = io.StringIO()
        self.stdout = io.StringIO()
        sess = Session(ErrorHandler(stream=self.errors), Session.SH_FILE, cmd_line=True)
        self.shell = Shell(sess, stdout=self.stdout)

    def feed(self, *lines):
        for line in lines:
            self.shell.onecmd(line)
        return self.stdout.getvalue().splitlines()

    def test_evaluate(self):
        output = self.feed("let a = 5;", "a * 2", "\"Hello\" + \" World\"", "if (a > 10) { 1 }", "fn(x) { x }")
        self.assertEqual(["5", "10", "Hello World", "null", "fn(x) {", "  x", "}"], output)

    def test_bindings_persist(self):
        output = self.feed("let newAdder = fn(x) { fn(y) { x + y }; };", "let addTwo = newAdder(2);", "addTwo(3)")
        self.assertEqual("5", output[-1])

    def test_continuation(self):
        self.feed("let add = fn(a, b) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.feed("  a + b", "};")
        self.assertEqual(Shell.prompt, self.shell.prompt)

        output = self.feed("add(1,", "2)")
        self.assertEqual("3", output[-1])

        output = self.feed("let s = \"(\";", "s + \"{\"")
        self.assertEqual(["(", "({"], output[-2:])
        self.assertEqual(Shell.prompt, self.shell.prompt)

    def test_runtime_error(self):
        output = self.feed("5 + true", "1")
        self.assertEqual(["1"], output)
        self.assertEqual("warning: type mismatch: INTEGER + BOOLEAN\n", plain(self.errors.getvalue()))

    def test_parse_error(self):
        output = self.feed("let = 1;", "let x = 1;")
        self.assertEqual(["1"], output)
        self.assertEqual("  File '<in>', line 1:\n"
                         "    let = 1;\n"
                         "error: parser has 1 error(s):\n"
                         "\texpected next token to be IDENT, got = instead\n", plain(self.errors.getvalue()))

    def test_tokens(self):
        output = self.feed("tokens let x = 1;")
        self.assertEqual(["LET('let')", "IDENT('x')", "=('=')", "INT('1')", ";(';')"], output)

    def test_ast(self):
        output = self.feed("ast -a")
        self.assertEqual(["Program(expr='(-a)', nodes=[",
                          "    ExpressionStatement(expr='(-a)', nodes=[",
                          "        PrefixExpression(expr='(-a)', nodes=[",
                          "            Identifier(expr='a')",
                          "        ])",
                          "    ])",
                          "])"], output)

        self.feed("ast let 1")
        self.assertIn("error: parser has 1 error(s):", plain(self.errors.getvalue()))

    def test_help(self):
        output = self.feed("help")
        self.assertEqual("Welcome to the Monkey interpreter!", output[0])
        self.assertIn("'tokens <source>' and 'ast <source>' show how source is lexed and parsed.", output)
        self.assertEqual("Prints a short introduction to the language and the shell commands.", Shell.do_help.__doc__)

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertTrue(self.shell.onecmd("EOF"))
        self.assertFalse(self.shell.emptyline())


if __name__ == '__main__':
    unittest.main()
