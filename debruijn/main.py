"""Entry point of the debruijn interpreter: reduces a single λ-term given as an argument, or runs in command-line mode.
Uses error handling context manager. Called from the debruijn console script.

Basic program flow:
    1. Parser: produces a named λ-term AST by recursive descent (see debruijn/pure/lexical.py)
    2. Conversion: replaces variable names with De Bruijn indices, using a persistent binding context
       (see debruijn/pure/context.py)
    3. Reduction: beta-reduces the nameless AST to normal form (see debruijn/pure/nameless.py)
"""

import argparse
import sys

from debruijn.lang.error import ErrorHandler
from debruijn.lang.session import Session
from debruijn.lang.shell import Shell


def main(argv=None):
    """Runs debruijn interpreter. Called from debruijn console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="debruijn", description="Nameless lambda calculus reducer")
        parser.add_argument("expr", help="λ-term to reduce (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tree", action="store_true", help="also display the tree of each stage")
        parser.add_argument("--recursion-limit", type=int, default=None,
                            help="raise Python's recursion limit before reducing (deep or large terms)")
        args = parser.parse_args(argv)

        if args.recursion_limit is not None:
            sys.setrecursionlimit(args.recursion_limit)

        if args.expr is not None:
            sess = Session(error_handler, Session.ARG_FILE, cmd_line=False, show_tree=args.tree)
            sess.add(args.expr)
            sess.run()

            for result in sess.results:
                print(result.report(args.tree))

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_tree=args.tree)).cmdloop()


if __name__ == "__main__":
    main()
