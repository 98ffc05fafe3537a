"""Error handling for the Monkey interpreter.

Monkey programs have two error channels of their own: parse errors (strings collected by the Parser) and runtime
errors (Error objects returned by the evaluator). Neither raises. GenericExceptions are only raised at the edges:
by the Session when it has to stop on one of those errors, and by the core when an internal invariant is broken.
If a non-GenericException makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


def escape(text):
    """Escapes braces in text so that it can be used as a literal GenericException msg."""
    return text.replace("{", "{{").replace("}", "}}")


class GenericException(Exception):
    """Templates an error/warning message so that it can be thrown by ErrorHandler. `{}` placeholders in msg are
    filled in with exprs, which are bolded.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))
        self.plain_msg = msg.format(*exprs)  # uncolored, used by tests and str()
        self.exprs = exprs
        self.internal = internal

        super().__init__(self.plain_msg)


class ParseError(GenericException):
    """Raised by a Session when the parser reported errors: the program must not be evaluated."""

    def __init__(self, errors):
        self.errors = list(errors)
        msg = "parser has {} error(s):" + "\n\t{}" * len(self.errors)
        super().__init__(msg, [len(self.errors)] + self.errors)


class EvaluationError(GenericException):
    """Raised by a Session in file mode when a program evaluates to a runtime Error object."""

    def __init__(self, error):
        self.error = error
        super().__init__(escape(error.message))


class IncompleteNode(GenericException):
    """An AST node was built without one of its required children."""

    def __init__(self, node_cls, field):
        super().__init__("{} built without required field '{}'", (node_cls, field), internal=True)


class UnknownNode(GenericException):
    """The evaluator was handed something that isn't an AST node it knows about."""

    def __init__(self, node):
        super().__init__("cannot evaluate {}", type(node).__name__, internal=True)


class UnclosedList(GenericException):
    """A parameter or argument list wasn't closed by ')'. Unlike ordinary syntax errors this aborts parsing."""

    def __init__(self, kind, got):
        super().__init__("{} list not closed by ')', got {} instead", (kind, got))


class MalformedList(GenericException):
    """An argument list holds something that isn't an expression. Like UnclosedList, this aborts parsing."""

    def __init__(self, kind, error):
        super().__init__("malformed {} list: {}", (kind, error))


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report Monkey errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stdout)

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        error = GenericException(*args, **kwargs)

        prefix = ""
        for file, (__, line_num) in self.traceback.items():
            if line_num is not None:
                prefix = colored(f"{file}:{line_num}: ", attrs=["bold"])
                break

        self._print(prefix + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += "".join(f"    {text}\n" for text in line.splitlines())
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            msg = escape(f"unknown error: '{exc_type.__name__}: {exc_val}'")
            self.throw(GenericException(msg, internal=True))
            do_exit = True

        return not do_exit
