"""Monkey interpreter.

Monkey is a small expression-oriented language: integers, booleans, strings, let bindings, first-class functions
with closures, if/else and return. Basic program flow:
    1. Lexer (monkey/pure/lexical.py): source text to a stream of tokens
    2. Parser (monkey/pure/parser.py): Pratt parser from tokens to an AST (monkey/pure/ast.py)
        - syntax errors are collected, not raised; a program with errors must not be evaluated
    3. Evaluator (monkey/pure/evaluator.py): walks the AST in an Environment (monkey/pure/environment.py) and
       produces an Object (monkey/pure/object.py)
        - runtime errors are Error objects, not exceptions

Everything under monkey/lang (sessions, the shell, error reporting) is built on interpret.
"""

from monkey.pure.environment import Environment
from monkey.pure.evaluator import evaluate
from monkey.pure.lexical import Lexer
from monkey.pure.parser import Parser


def parse(source):
    """Returns (Program, errors) for source."""
    return Parser(Lexer(source)).parse_program()


def interpret(source, env=None):
    """Parses and evaluates source in env (a fresh global Environment if None). Returns (result, errors); result is
    None if the parser reported errors.
    """
    program, errors = parse(source)
    if errors:
        return None, errors

    if env is None:
        env = Environment()
    return evaluate(program, env), errors
