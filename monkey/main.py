"""Runs Monkey source files or starts the interactive shell. Also uses error handling context manager. Installed as the
`monkey` console script.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell
from monkey.pure.object import NULL


def main(argv=None):
    """Runs Monkey interpreter. Called from monkey executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument("--tokens", action="store_true", help="print the tokens of file instead of running it")
        mode.add_argument("--ast", action="store_true", help="print the syntax tree of file instead of running it")
        args = parser.parse_args(argv)

        if args.file is None:
            if args.tokens or args.ast:
                parser.error("--tokens and --ast need a file")
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        if args.tokens:
            for token in Session.tokens(Session.read(args.file)):
                print(token)
            return
        elif args.ast:
            print(Session.tree(Session.read(args.file)))
            return

        sess = Session(error_handler, args.file, cmd_line=False)
        sess.run()

        for result in sess.results:
            if result is not NULL:
                print(result.inspect())


if __name__ == "__main__":
    sys.exit(main())
