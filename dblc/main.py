"""Command-line entry point of dblc: reduces the MAIN definition of a program read from a file or stdin, or runs the
interactive shell. Also uses the error handling context manager. Called from the dblc console script.
"""

import argparse
import sys

from termcolor import colored

from dblc.lang.error import ErrorHandler, GenericException
from dblc.lang.session import Session
from dblc.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="dblc", description="Untyped lambda calculus interpreter.")
    parser.add_argument("file", help="program to run (if empty, reads stdin or goes to command-line mode)", nargs="?")
    parser.add_argument("-n", "--numerals", action="store_true",
                        help="treat undefined numbers as Church numerals and print numeral results as numbers")
    parser.add_argument("--allow-free", action="store_true",
                        help="let free variables pass through reduction instead of failing")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every β-reduction to stderr")
    return parser


def main(argv=None):
    """Runs dblc interpreter. Called from dblc executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.verbose = args.verbose

        if args.file is None and sys.stdin.isatty():
            sess = Session(error_handler, numerals=args.numerals, allow_free=args.allow_free)
            Shell(sess).cmdloop()
            return

        if args.file is not None:
            try:
                with open(args.file, "r", encoding="utf-8") as file:
                    program = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", args.file, diagnosis=False)
            path = args.file
        else:
            program = sys.stdin.read()
            path = Session.STDIN

        sess = Session(error_handler, path, numerals=args.numerals, allow_free=args.allow_free)
        result = sess.load(program).run()

        if args.verbose:
            msg = f"normal form reached after {error_handler.steps} β-reductions"
            print(colored(msg, ErrorHandler.STEP, attrs=["bold"]), file=sys.stderr)
        print(sess.show(result))


if __name__ == "__main__":
    main()
