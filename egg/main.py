"""Runs Egg programs from files or the command line, or starts the interactive shell. Also uses the error handling
context manager. Called from the egg console script and `python -m egg`.
"""

import argparse
import logging

from egg.lang.error import ErrorHandler
from egg.lang.session import Session
from egg.lang.shell import Shell
from egg.pure.values import display


def get_parser():
    parser = argparse.ArgumentParser(prog="egg", description="Egg language interpreter")
    parser.add_argument("files", help="files to run, joined into one program (if empty, goes to shell mode)",
                        nargs="*")
    parser.add_argument("-c", "--command", help="program text to run after any files", action="append", default=[])
    parser.add_argument("--ast", help="print the parsed program instead of running it", action="store_true")
    parser.add_argument("-v", "--verbose", help="log what the interpreter is doing", action="store_true")
    return parser


def main(argv=None):
    """Runs Egg interpreter. Called from egg console script."""
    args = get_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(name)s: %(levelname)s: %(message)s")

    with ErrorHandler() as error_handler:
        sess = Session(error_handler=error_handler)

        if not args.files and not args.command:
            error_handler.fatal = False
            Shell(sess).cmdloop()
            return

        fragments = [sess.read(path) for path in args.files] + args.command
        path = ", ".join(args.files) if args.files else "<command>"

        if args.ast:
            print(sess.parse(*fragments, path=path))
        else:
            print(display(sess.evaluate(*fragments, path=path)))


if __name__ == "__main__":
    main()
