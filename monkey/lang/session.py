"""Session control for the Monkey interpreter, in file mode or command-line mode. A Session owns the global
Environment, so bindings made by one line are visible to the next.
"""

from monkey.lang.error import EvaluationError, GenericException, ParseError
from monkey.interpreter import parse
from monkey.pure.environment import Environment
from monkey.pure.evaluator import evaluate
from monkey.pure.lexical import LBRACE, LPAREN, RBRACE, RPAREN, Lexer
from monkey.pure.object import Error


class Session:
    """Governs a Monkey session: parsed programs waiting to run, their results and the scope they share."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()  # global scope of the session
        self.to_exec = {}         # dict of line num: (source, Program) to execute
        self.results = []         # Objects produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            source = Session.read(path)
            if source.strip():
                self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def read(path):
        """Returns the contents of the source file at path."""
        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path)

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line onto prev (the unfinished lines before it, if any). Returns the joined source and whether or not
        it still needs a continuation line, which is the case while braces or parentheses are left open. Brackets
        inside string literals don't count.
        """
        source = f"{prev}\n{line}" if prev else line
        types = [token.type for token in Lexer(source)]
        return source, types.count(LBRACE) > types.count(RBRACE) or types.count(LPAREN) > types.count(RPAREN)

    def add(self, source, line_num):
        """Parses source and queues it for run. Raises ParseError if the parser reported errors."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program, errors = parse(source)
        if errors:
            raise ParseError(errors)
        self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates queued programs in order. In file mode a runtime Error raises EvaluationError; in command-line
        mode it is kept as a result like any other value.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source, line_num)

            try:
                result = evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if isinstance(result, Error) and not self.cmd_line:
                raise EvaluationError(result)
            self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)

    @staticmethod
    def tokens(source):
        """Tokens of source, EOF excluded."""
        return list(Lexer(source))

    @staticmethod
    def tree(source):
        """Displayable form of source's AST. Raises ParseError if the parser reported errors."""
        program, errors = parse(source)
        if errors:
            raise ParseError(errors)
        return program.display()
