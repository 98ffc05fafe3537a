"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from monkey.pure.object import Error


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates arbitrary Monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(source, self.line_num)
            self.sess.run()

            while self.sess.results:
                result = self.sess.pop()
                if isinstance(result, Error):
                    self.sess.error_handler.warn("{}", result.message)
                else:
                    print(result.inspect(), file=self.stdout)

    def do_tokens(self, arg):
        """tokens <source>: prints the tokens of source instead of evaluating it."""
        for token in self.sess.tokens(arg):
            print(token, file=self.stdout)

    def do_ast(self, arg):
        """ast <source>: prints the syntax tree of source instead of evaluating it."""
        with self.sess.error_handler:
            print(self.sess.tree(arg), file=self.stdout)

    def do_help(self, arg):
        """Prints a short introduction to the language and the shell commands."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, let bindings, if/else, and first-class \n"
              "functions with closures. Try it out by typing 'let add = fn(a, b) { a + b };' \n"
              "and then 'add(1, 2)'. Lines with unclosed braces or parentheses continue on \n"
              "the next line.\n\n"
              "'tokens <source>' and 'ast <source>' show how source is lexed and parsed.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
