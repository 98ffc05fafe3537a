"""Lexical analysis for the Monkey language: turns raw source text into a stream of typed tokens.

The `pure` directory contains the language core (lexing, parsing, evaluation). Nothing in it performs I/O: reading
files, printing results and reporting errors live in the `lang` directory.

Token grammar, loosely:

```
<ident>   ::= (<letter> | "_")+                 ; keywords are looked up after reading the whole run
<int>     ::= <digit>+                          ; no signs, no floats
<string>  ::= '"' <char>* '"'                   ; no escape sequences, unterminated strings run to EOF
<op>      ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>   ::= "," | ";" | "(" | ")" | "{" | "}"
```

Anything else becomes an ILLEGAL token: the lexer never raises, illegal input is left for the parser to report.
"""

from collections import namedtuple


ILLEGAL = "ILLEGAL"
EOF = "EOF"

IDENT = "IDENT"    # add, foobar, x, y, ...
INT = "INT"        # 1343456
STRING = "STRING"  # "foo bar"

ASSIGN = "="
PLUS = "+"
MINUS = "-"
BANG = "!"
ASTERISK = "*"
SLASH = "/"

LT = "<"
GT = ">"
EQ = "=="
NOT_EQ = "!="

COMMA = ","
SEMICOLON = ";"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"

FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

KEYWORDS = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

# single characters that map directly onto a token type (two-character operators are handled separately)
SINGLES = {char: char for char in (ASSIGN, PLUS, MINUS, BANG, ASTERISK, SLASH, LT, GT,
                                   COMMA, SEMICOLON, LPAREN, RPAREN, LBRACE, RBRACE)}

WHITESPACE = " \t\n\r"


class Token(namedtuple("Token", ["type", "literal"])):
    """Smallest lexical unit: a token type and the literal text it was read from."""
    __slots__ = ()

    def __str__(self):
        return f"{self.type}({self.literal!r})"


def lookup_ident(ident):
    """Returns the keyword token type for ident, or IDENT if ident isn't reserved."""
    return KEYWORDS.get(ident, IDENT)


def is_letter(char):
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def is_digit(char):
    return "0" <= char <= "9"


class Lexer:
    """Reads source one character at a time. `char` is the character under the cursor ("" past the end of input),
    `read_position` always points one character ahead of it.
    """

    def __init__(self, source):
        self.source = source
        self.position = 0
        self.read_position = 0
        self.char = ""

        self.read_char()

    def read_char(self):
        """Advances the cursor by one character."""
        if self.read_position >= len(self.source):
            self.char = ""
        else:
            self.char = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        """Returns the character after the cursor without advancing."""
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def next_token(self):
        """Returns exactly one Token and advances past it. Once the input is exhausted, every call returns EOF."""
        self.skip_whitespace()

        if self.char == "":
            return Token(EOF, "")

        if self.char in "=!" and self.peek_char() == "=":
            literal = self.char + self.peek_char()
            self.read_char()
            self.read_char()
            return Token(EQ if literal == "==" else NOT_EQ, literal)

        if self.char in SINGLES:
            token = Token(SINGLES[self.char], self.char)
            self.read_char()
            return token

        if self.char == "\"":
            return Token(STRING, self.read_string())

        if is_letter(self.char):
            ident = self.read_while(is_letter)
            return Token(lookup_ident(ident), ident)

        if is_digit(self.char):
            return Token(INT, self.read_while(is_digit))

        token = Token(ILLEGAL, self.char)
        self.read_char()
        return token

    def read_while(self, predicate):
        """Reads the maximal run of characters satisfying predicate, leaving the cursor on the first one that
        doesn't.
        """
        start = self.position
        while self.char and predicate(self.char):
            self.read_char()
        return self.source[start:self.position]

    def read_string(self):
        """Reads the body of a string literal. Assumes the cursor is on the opening quote; leaves it after the
        closing one.
        """
        self.read_char()
        start = self.position
        while self.char and self.char != "\"":
            self.read_char()
        body = self.source[start:self.position]
        self.read_char()
        return body

    def skip_whitespace(self):
        while self.char and self.char in WHITESPACE:
            self.read_char()

    def __iter__(self):
        """Yields the remaining tokens, excluding the final EOF."""
        token = self.next_token()
        while token.type != EOF:
            yield token
            token = self.next_token()

    def __repr__(self):
        return f"Lexer(position={self.position}, char={self.char!r})"
