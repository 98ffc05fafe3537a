import io
import re
import unittest

from monkey.lang.error import (ErrorHandler, EvaluationError, GenericException, IncompleteNode, MalformedList,
                               ParseError, UnclosedList, UnknownNode, escape)
from monkey.pure.object import Error


def plain(text):
    """text without ANSI escape codes, which termcolor may or may not emit depending on the terminal."""
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class GenericExceptionTestCase(unittest.TestCase):

    def test_format(self):
        cases = {
            ("no placeholders",): "no placeholders",
            ("'{}' could not be opened", "a.mk"): "'a.mk' could not be opened",
            ("{} and {}", (1, "two")): "1 and two",
            (escape("braces {} stay"),): "braces {} stay",
        }
        for args, expected in cases.items():
            error = GenericException(*args)
            self.assertEqual(expected, error.plain_msg, args)
            self.assertEqual(expected, plain(error.msg), args)
            self.assertEqual(expected, str(error), args)
            self.assertFalse(error.internal)

    def test_parse_error(self):
        error = ParseError(["expected next token to be =, got INT instead", "no prefix parse function for } found"])
        self.assertEqual("parser has 2 error(s):\n"
                         "\texpected next token to be =, got INT instead\n"
                         "\tno prefix parse function for } found", error.plain_msg)
        self.assertEqual(2, len(error.errors))

    def test_evaluation_error(self):
        error = EvaluationError(Error("identifier not found: {x}"))
        self.assertEqual("identifier not found: {x}", error.plain_msg)
        self.assertEqual(Error("identifier not found: {x}"), error.error)

    def test_internal(self):
        cases = {
            IncompleteNode("LetStatement", "value"): "LetStatement built without required field 'value'",
            UnknownNode(5): "cannot evaluate int",
        }
        for error, expected in cases.items():
            self.assertTrue(error.internal)
            self.assertEqual(expected, error.plain_msg)

        error = UnclosedList("argument", "EOF")
        self.assertFalse(error.internal)
        self.assertEqual("argument list not closed by ')', got EOF instead", error.plain_msg)

        error = MalformedList("argument", "no prefix parse function for } found")
        self.assertFalse(error.internal)
        self.assertEqual("malformed argument list: no prefix parse function for } found", error.plain_msg)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()

    def output(self):
        return plain(self.stream.getvalue())

    def test_throw_fatal(self):
        handler = ErrorHandler(stream=self.stream)
        with self.assertRaises(SystemExit):
            handler.throw(GenericException("boom"))
        self.assertEqual("error: boom\n", self.output())

    def test_throw_traceback(self):
        handler = ErrorHandler(fatal=False, stream=self.stream)
        handler.register_file("main.mk")
        handler.register_line("main.mk", "let x = ;", 3)
        handler.throw(GenericException("bad line"))

        self.assertEqual("  File 'main.mk', line 3:\n    let x = ;\nerror: bad line\n", self.output())
        self.assertEqual({"main.mk": (None, None)}, handler.traceback)

    def test_throw_nested_traceback(self):
        handler = ErrorHandler(fatal=False, stream=self.stream)
        handler.register_line("a.mk", "first", 1)
        handler.register_line("b.mk", "second", 2)
        handler.throw(GenericException("deep", internal=True))

        expected = ("Traceback:\n"
                    "  File 'a.mk', line 1:\n    first\n"
                    "  File 'b.mk', line 2:\n    second\n"
                    "[internal] error: deep\n")
        self.assertEqual(expected, self.output())

    def test_remove_line(self):
        handler = ErrorHandler(fatal=False, stream=self.stream)
        handler.register_line("a.mk", "fine", 1)
        handler.remove_line("a.mk")
        handler.throw(GenericException("later"))
        self.assertEqual("error: later\n", self.output())

    def test_warn(self):
        handler = ErrorHandler(stream=self.stream)
        handler.warn("{}", "identifier not found: x")
        handler.register_line("<in>", "x", 4)
        handler.warn("{}", "identifier not found: x")

        self.assertEqual("warning: identifier not found: x\n"
                         "<in>:4: warning: identifier not found: x\n", self.output())

    def test_exit_suppresses_monkey_errors(self):
        should_suppress = [
            GenericException("plain"),
            ParseError(["no prefix parse function for ; found"]),
            UnclosedList("parameter", "{"),
            KeyboardInterrupt(),
        ]
        for error in should_suppress:
            with ErrorHandler(fatal=False, stream=self.stream):
                raise error
        output = self.output()
        self.assertIn("error: plain", output)
        self.assertIn("error: parser has 1 error(s):", output)
        self.assertIn("error: parameter list not closed by ')', got { instead", output)
        self.assertIn("error: keyboard interrupt", output)

    def test_exit_recursion(self):
        with ErrorHandler(fatal=False, stream=self.stream):
            raise RecursionError("too deep")
        self.assertEqual("error: maximum recursion depth exceeded\n", self.output())

    def test_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False, stream=self.stream):
                raise SystemExit(0)
        self.assertEqual("", self.output())

        with self.assertRaises(ValueError):
            with ErrorHandler(fatal=False, stream=self.stream):
                raise ValueError("{oops}")
        self.assertEqual("[internal] error: unknown error: 'ValueError: {oops}'\n", self.output())

    def test_exit_fatal(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(stream=self.stream):
                raise GenericException("fatal")


if __name__ == '__main__':
    unittest.main()
