"""Runs the tinylang interpreter on a source file, or in command-line mode if no file is given. Also uses the error
handling context manager. Called from the tinylang console script.
"""

import argparse
import logging
import sys

from tinylang.lang.error import ErrorHandler
from tinylang.lang.session import Session
from tinylang.lang.shell import Shell


def setup_logging(level="WARNING"):
    """Configures root logging at level (a level name such as DEBUG or WARNING)."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="tinylang", description="tinylang interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", help="log pipeline activity at DEBUG level", action="store_true")
    return parser


def main(argv=None):
    """Runs tinylang interpreter. Called from tinylang executable script."""
    args = build_arg_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    with ErrorHandler() as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            print(sess.run())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
