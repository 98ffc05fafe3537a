import unittest

from monkey.interpreter import interpret, parse
from monkey.pure.environment import Environment
from monkey.pure.object import NULL, Error, Integer


class InterpretTestCase(unittest.TestCase):

    def test_interpret(self):
        result, errors = interpret("let a = 20; a + 22")
        self.assertEqual([], errors)
        self.assertEqual(Integer(42), result)

        result, errors = interpret("")
        self.assertIs(NULL, result)

        result, errors = interpret("a")
        self.assertEqual(Error("identifier not found: a"), result)

    def test_parse_errors_skip_evaluation(self):
        env = Environment()
        result, errors = interpret("let a = 1; let = 2;", env)
        self.assertIsNone(result)
        self.assertEqual(["expected next token to be IDENT, got = instead"], errors)
        self.assertNotIn("a", env)

    def test_shared_env(self):
        env = Environment()
        interpret("let counter = 1;", env)
        interpret("let counter = counter + 1;", env)
        result, __ = interpret("counter * 10", env)
        self.assertEqual(Integer(20), result)

    def test_parse(self):
        program, errors = parse("-a * b")
        self.assertEqual([], errors)
        self.assertEqual("((-a) * b)", str(program))


if __name__ == '__main__':
    unittest.main()
