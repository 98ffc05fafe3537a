"""Runtime values of the Monkey language.

ReturnValue and Error are not first-class values: they are signals that the evaluator passes up unchanged through
every enclosing block until they reach a function call (ReturnValue) or the top of the program (both).
"""

from abc import ABC, abstractmethod

from monkey.pure.ast import render


INTEGER_OBJ = "INTEGER"
STRING_OBJ = "STRING"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Object(ABC):
    """Superclass of every runtime value."""
    type = None  # one of the *_OBJ names, used in error messages

    @abstractmethod
    def inspect(self):
        """Textual rendering shown to the user."""

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()!r})"


class Integer(Object):
    """Signed 64-bit integer. Values outside that range are wrapped around."""
    type = INTEGER_OBJ

    def __init__(self, value):
        self.value = (value - INT64_MIN) % 2 ** 64 + INT64_MIN

    def inspect(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class String(Object):
    type = STRING_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, String) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class Boolean(Object):
    """Only ever instantiated twice: use TRUE/FALSE (or native_bool) so that booleans can be compared by identity."""
    type = BOOLEAN_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return "true" if self.value else "false"


class Null(Object):
    type = NULL_OBJ

    def inspect(self):
        return "null"


class ReturnValue(Object):
    type = RETURN_VALUE_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()


class Error(Object):
    type = ERROR_OBJ

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"ERROR: {self.message}"

    def __eq__(self, other):
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self):
        return hash(self.message)


class Function(Object):
    """Closure: parameters and body of a function literal, plus the environment it was defined in. env is a reference
    to that environment, not a copy, so later bindings in it are visible to the function.
    """
    type = FUNCTION_OBJ

    def __init__(self, parameters, body, env):
        self.parameters = parameters
        self.body = body
        self.env = env

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {{\n  {render(self.body.statements)}\n}}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Maps a Python bool onto the TRUE/FALSE singletons."""
    return TRUE if value else FALSE
