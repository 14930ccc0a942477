"""Runs .cmm files or the interactive shell, with the error handling context manager around both. Installed as the
`cmm` console script.
"""

import argparse
import sys

from cmm.lang.error import ErrorHandler
from cmm.lang.session import Session
from cmm.lang.shell import Shell


def main(argv=None):
    """Runs cmm interpreter. Called from cmm console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="cmm", description="C-- interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="display the syntax tree instead of running")
        parser.add_argument("--trace", action="store_true", help="report every evaluated statement on stderr")
        args = parser.parse_args(argv)

        error_handler.trace = args.trace

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, display_ast=args.ast)
            sess.run()

            if sess.has_errors:
                sys.exit(1)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, display_ast=args.ast)).cmdloop()


if __name__ == "__main__":
    main()
