"""Pratt (operator-precedence) parser for the Monkey language. See ast.py for the grammar.

Every token type that can start an expression has a prefix parse function, and every token type that can continue
one (binary operators and '(' for calls) has an infix parse function. parse_expression runs the prefix function of
the current token and then keeps folding the left operand into infix functions for as long as the next token binds
tighter than the precedence it was called with:

```
a + b * c - d   ->   ((a + (b * c)) - d)
```

Because the right-hand side of an infix operator is parsed at the operator's own precedence (not one above), chains
of equal precedence associate to the left.

Syntax errors do not stop the parser. They are collected in Parser.errors, the offending statement is dropped and
parsing resumes after the next ';'. The exceptions are parameter and argument lists: one that isn't closed by ')'
raises UnclosedList, and an argument that fails to parse raises MalformedList.
"""

from monkey.lang.error import MalformedList, UnclosedList
from monkey.pure import ast
from monkey.pure.lexical import (ASSIGN, ASTERISK, BANG, COMMA, ELSE, EOF, EQ, FALSE, FUNCTION, GT, IDENT, IF, INT,
                                 LBRACE, LET, LPAREN, LT, MINUS, NOT_EQ, PLUS, RBRACE, RETURN, RPAREN, SEMICOLON,
                                 SLASH, STRING, TRUE)
from monkey.pure.object import INT64_MAX


LOWEST = 1
EQUALS = 2       # ==
LESSGREATER = 3  # > or <
SUM = 4          # +
PRODUCT = 5      # *
PREFIX = 6       # -X or !X
CALL = 7         # myFunction(X)

PRECEDENCES = {
    EQ: EQUALS,
    NOT_EQ: EQUALS,
    LT: LESSGREATER,
    GT: LESSGREATER,
    PLUS: SUM,
    MINUS: SUM,
    SLASH: PRODUCT,
    ASTERISK: PRODUCT,
    LPAREN: CALL,
}


class Parser:
    """Consumes a Lexer lazily: cur_token is the token being looked at, peek_token the one after it."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {}
        self.infix_parse_fns = {}

        self.register_prefix(IDENT, self.parse_identifier)
        self.register_prefix(INT, self.parse_integer_literal)
        self.register_prefix(STRING, self.parse_string_literal)
        self.register_prefix(TRUE, self.parse_boolean)
        self.register_prefix(FALSE, self.parse_boolean)
        self.register_prefix(BANG, self.parse_prefix_expression)
        self.register_prefix(MINUS, self.parse_prefix_expression)
        self.register_prefix(LPAREN, self.parse_grouped_expression)
        self.register_prefix(IF, self.parse_if_expression)
        self.register_prefix(FUNCTION, self.parse_function_literal)

        for token_type in (PLUS, MINUS, SLASH, ASTERISK, EQ, NOT_EQ, LT, GT):
            self.register_infix(token_type, self.parse_infix_expression)
        self.register_infix(LPAREN, self.parse_call_expression)

        # read two tokens so that cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def register_prefix(self, token_type, fn):
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type, fn):
        self.infix_parse_fns[token_type] = fn

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type):
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type == token_type

    def expect_peek(self, token_type):
        """Advances if the next token has type token_type. Otherwise records an error and stays put."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, LOWEST)

    def peek_error(self, token_type):
        self.errors.append(f"expected next token to be {token_type}, got {self.peek_token.type} instead")

    def no_prefix_parse_fn_error(self, token_type):
        self.errors.append(f"no prefix parse function for {token_type} found")

    def skip_statement(self, *stops):
        """Error recovery: skips tokens until the current one is ';', EOF or one of stops."""
        while not (self.cur_token_is(SEMICOLON) or self.cur_token_is(EOF) or self.cur_token.type in stops):
            self.next_token()

    # statements

    def parse_program(self):
        """Parses statements until EOF. Returns the Program and the list of errors encountered along the way; a
        caller should not evaluate a Program whose error list isn't empty.
        """
        statements = []

        while not self.cur_token_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.skip_statement()
            self.next_token()

        return ast.Program(statements), self.errors

    def parse_statement(self):
        """Returns the statement starting at cur_token, or None if it is malformed. Leaves cur_token on the last token
        of the statement.
        """
        if self.cur_token_is(LET):
            return self.parse_let_statement()
        elif self.cur_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(LOWEST)
        if value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return ast.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token
        self.next_token()

        return_value = self.parse_expression(LOWEST)
        if return_value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return ast.ReturnStatement(token, return_value)

    def parse_expression_statement(self):
        token = self.cur_token

        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()

        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses statements up to the closing '}' (or EOF). Assumes cur_token is '{'; leaves cur_token on '}'."""
        token = self.cur_token
        statements = []

        self.next_token()

        while not self.cur_token_is(RBRACE) and not self.cur_token_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.skip_statement(RBRACE)
                if self.cur_token_is(RBRACE):
                    break
            self.next_token()

        return ast.BlockStatement(token, statements)

    # expressions

    def parse_expression(self, precedence):
        """Precedence climbing. Returns None (after recording an error) if no expression could be parsed."""
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left = prefix()
        while left is not None and not self.peek_token_is(SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        value = int(self.cur_token.literal)
        if value > INT64_MAX:
            self.errors.append(f"could not parse {self.cur_token.literal} as integer")
            return None
        return ast.IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return ast.Boolean(self.cur_token, self.cur_token_is(TRUE))

    def parse_prefix_expression(self):
        token = self.cur_token
        self.next_token()

        right = self.parse_expression(PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(LOWEST)
        if expression is None or not self.expect_peek(RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        """if (<condition>) { <consequence> } [else { <alternative> }]"""
        token = self.cur_token

        if not self.expect_peek(LPAREN):
            return None
        self.next_token()

        condition = self.parse_expression(LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(RPAREN) or not self.expect_peek(LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(ELSE):
            self.next_token()
            if not self.expect_peek(LBRACE):
                return None
            alternative = self.parse_block_statement()

        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        """fn(<parameters>) { <body> }"""
        token = self.cur_token

        if not self.expect_peek(LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(LBRACE):
            return None

        body = self.parse_block_statement()
        return ast.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Comma-separated identifiers. Assumes cur_token is '('; leaves cur_token on ')'."""
        if self.peek_token_is(RPAREN):
            self.next_token()
            return []

        if not self.expect_peek(IDENT):
            return None
        identifiers = [ast.Identifier(self.cur_token, self.cur_token.literal)]

        while self.peek_token_is(COMMA):
            self.next_token()
            if not self.expect_peek(IDENT):
                return None
            identifiers.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        if not self.peek_token_is(RPAREN):
            raise UnclosedList("parameter", self.peek_token.type)
        self.next_token()

        return identifiers

    def parse_call_expression(self, function):
        token = self.cur_token

        arguments = self.parse_call_arguments()
        return ast.CallExpression(token, function, arguments)

    def parse_call_arguments(self):
        """Comma-separated expressions, each parsed at the lowest precedence. Assumes cur_token is '('; leaves
        cur_token on ')'. An argument that fails to parse raises MalformedList with the error it recorded.
        """
        if self.peek_token_is(RPAREN):
            self.next_token()
            return []

        self.next_token()
        args = [self.parse_call_argument()]

        while self.peek_token_is(COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_call_argument())

        if not self.peek_token_is(RPAREN):
            raise UnclosedList("argument", self.peek_token.type)
        self.next_token()

        return args

    def parse_call_argument(self):
        arg = self.parse_expression(LOWEST)
        if arg is None:
            raise MalformedList("argument", self.errors[-1])
        return arg
